from __future__ import annotations

import pytest
from pydantic import ValidationError

from conftest import bootstrap_outputs
from wfgen.config.loader import load_configuration_from_outputs, resolve_repositories
from wfgen.config.validation import REQUIRED_OUTPUTS, validate_outputs
from wfgen.core.errors import ConfigurationError
from wfgen.core.models import FeatureFlags, Target


def test_loads_record_and_flags() -> None:
    record, flags = load_configuration_from_outputs(bootstrap_outputs())

    assert record.project_name == "demo"
    assert record.aws_account_id == "123"
    assert record.aws_region == "us-east-1"
    assert record.role_dev_arn == "arn:dev"
    assert record.role_prod_arn == "arn:prod"
    assert record.role_test_arn is None
    assert flags.enabled_targets() == [Target.LAMBDA]
    assert flags.test_env is False


def test_region_defaults_when_absent_or_empty() -> None:
    record, _ = load_configuration_from_outputs(bootstrap_outputs(aws_region=None))
    assert record.aws_region == "us-east-1"

    record, _ = load_configuration_from_outputs(bootstrap_outputs(aws_region=""))
    assert record.aws_region == "us-east-1"


@pytest.mark.parametrize("output_name", REQUIRED_OUTPUTS)
@pytest.mark.parametrize("value", [None, "", "   "])
def test_required_output_absent_or_empty_is_rejected(
    output_name: str, value: str | None
) -> None:
    outputs = bootstrap_outputs(**{output_name: value})

    with pytest.raises(ConfigurationError) as excinfo:
        load_configuration_from_outputs(outputs)

    assert excinfo.value.missing == [output_name]
    assert "bootstrap-apply" in excinfo.value.remediation


def test_all_missing_fields_are_reported() -> None:
    result = validate_outputs({"project_name": "demo"})

    assert not result.ok
    assert result.missing == [
        "aws_account_id",
        "github_actions_role_dev_arn",
        "github_actions_role_prod_arn",
    ]


def test_validate_outputs_passes_complete_values() -> None:
    values = {name: "x" for name in REQUIRED_OUTPUTS}
    assert validate_outputs(values).ok


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"project_name": "demo app"}, "project_name"),
        ({"github_actions_role_dev_arn": "arn:$(whoami)"}, "github_actions_role_dev_arn"),
        ({"aws_region": "us-east-1'"}, "aws_region"),
    ],
)
def test_unsafe_values_are_rejected(overrides: dict[str, str], field: str) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        load_configuration_from_outputs(bootstrap_outputs(**overrides))

    assert excinfo.value.invalid == [field]


@pytest.mark.parametrize(
    "project_name", ["*demo", "&demo", "!demo", "[demo]", "|demo", "%demo", "@demo"]
)
def test_yaml_indicator_first_character_is_rejected(project_name: str) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        load_configuration_from_outputs(bootstrap_outputs(project_name=project_name))

    assert excinfo.value.invalid == ["project_name"]


def test_test_role_is_optional() -> None:
    record, _ = load_configuration_from_outputs(
        bootstrap_outputs(github_actions_role_test_arn="arn:test")
    )
    assert record.role_test_arn == "arn:test"


def test_flags_default_to_disabled_without_summary() -> None:
    _, flags = load_configuration_from_outputs(bootstrap_outputs(summary=None))

    assert flags == FeatureFlags()
    assert flags.enabled_targets() == []


def test_flags_accept_strings_and_ignore_unknown_keys() -> None:
    outputs = bootstrap_outputs(
        enabled={"lambda": "false", "eks": "true", "apprunner": None, "gpu": True, "test_env": "true"}
    )
    _, flags = load_configuration_from_outputs(outputs)

    assert flags.enabled_targets() == [Target.EKS]
    assert flags.test_env is True


def test_repositories_match_target_names() -> None:
    outputs = bootstrap_outputs(
        ecr_repositories={"lambda": "123.dkr.ecr/demo-lambda", "eks": "123.dkr.ecr/demo-eks"}
    )
    record, _ = load_configuration_from_outputs(outputs)

    assert record.repository_for(Target.LAMBDA) == "demo-lambda"
    assert record.repository_for(Target.EKS) == "demo-eks"
    assert record.repository_for(Target.APPRUNNER) == "demo-apprunner"


def test_single_repository_is_shared() -> None:
    outputs = bootstrap_outputs(ecr_repositories={"app": "123.dkr.ecr/demo-app"})

    assert resolve_repositories(outputs) == {target: "app" for target in Target}


def test_repository_names_are_not_guessed_from_substrings() -> None:
    outputs = bootstrap_outputs(
        ecr_repositories={"lambda-api": "x", "eks-api": "y"}
    )
    record, _ = load_configuration_from_outputs(outputs)

    assert record.repository_for(Target.LAMBDA) == "demo-lambda"
    assert record.repository_for(Target.EKS) == "demo-eks"


def test_record_is_immutable() -> None:
    record, _ = load_configuration_from_outputs(bootstrap_outputs())

    with pytest.raises(ValidationError):
        record.project_name = "other"  # type: ignore[misc]


@pytest.mark.parametrize("value", ["1", "yes", "on", "True", 1, " false "])
def test_flags_only_enable_on_true(value: object) -> None:
    _, flags = load_configuration_from_outputs(bootstrap_outputs(enabled={"lambda": value}))

    assert flags.lambda_ is False
    assert flags.enabled_targets() == []
