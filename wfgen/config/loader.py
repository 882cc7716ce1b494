"""Build the configuration record and feature flags from bootstrap outputs."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ..core.errors import ConfigurationError
from ..core.models import ConfigurationRecord, FeatureFlags, Target
from ..provisioning import OutputSource, output_value
from .validation import REMEDIATION, require_valid, validate_outputs

logger = logging.getLogger(__name__)

# ConfigurationRecord field -> terraform output name
FIELD_OUTPUTS: dict[str, str] = {
    "project_name": "project_name",
    "aws_account_id": "aws_account_id",
    "aws_region": "aws_region",
    "role_dev_arn": "github_actions_role_dev_arn",
    "role_test_arn": "github_actions_role_test_arn",
    "role_prod_arn": "github_actions_role_prod_arn",
}


def resolve_scalars(outputs: dict[str, Any]) -> dict[str, str | None]:
    resolved: dict[str, str | None] = {}
    for output_name in FIELD_OUTPUTS.values():
        value = output_value(outputs, output_name)
        resolved[output_name] = None if value is None else str(value).strip()
    return resolved


def resolve_repositories(outputs: dict[str, Any]) -> dict[Target, str]:
    """Map each target to its ECR repository suffix.

    A repository whose key equals the target name belongs to that target.
    A single provisioned repository is shared by every target. Targets left
    unmapped fall back to their own name.
    """
    raw = output_value(outputs, "ecr_repositories")
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.warning("Ignoring ecr_repositories output: expected a map")
        return {}

    names = [str(name) for name in raw]
    if len(names) == 1:
        return {target: names[0] for target in Target}
    return {target: target.value for target in Target if target.value in names}


def resolve_flags(outputs: dict[str, Any]) -> FeatureFlags:
    summary = output_value(outputs, "summary")
    features: Any = {}
    if isinstance(summary, dict):
        features = summary.get("enabled_features") or {}
    if not isinstance(features, dict):
        logger.warning("Ignoring summary.enabled_features: expected a map")
        features = {}
    known = {"lambda", "apprunner", "eks", "test_env"}
    return FeatureFlags.model_validate(
        {key: value for key, value in features.items() if key in known}
    )


def load_configuration_from_outputs(
    outputs: dict[str, Any],
) -> tuple[ConfigurationRecord, FeatureFlags]:
    """Validate outputs and build the immutable record and flag set.

    Args:
        outputs: Outputs in ``terraform output -json`` shape

    Returns:
        Configuration record and feature flags
    """
    scalars = resolve_scalars(outputs)
    require_valid(validate_outputs(scalars))

    fields = {
        field: scalars[output_name]
        for field, output_name in FIELD_OUTPUTS.items()
        if scalars[output_name] is not None
    }
    try:
        record = ConfigurationRecord(
            **fields, repositories=resolve_repositories(outputs)
        )
    except ValidationError as exc:
        invalid = sorted(
            {
                FIELD_OUTPUTS.get(str(error["loc"][0]), str(error["loc"][0]))
                for error in exc.errors()
                if error["loc"]
            }
        )
        raise ConfigurationError(
            "Bootstrap outputs contain unusable values: " + ", ".join(invalid),
            invalid=invalid,
            remediation=REMEDIATION,
        ) from exc

    return record, resolve_flags(outputs)


def load_configuration(source: OutputSource) -> tuple[ConfigurationRecord, FeatureFlags]:
    return load_configuration_from_outputs(source.outputs())
