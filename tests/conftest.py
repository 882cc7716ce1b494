from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from wfgen.core.models import ConfigurationRecord, FeatureFlags


def tf_outputs(**values: Any) -> dict[str, Any]:
    """Wrap plain values the way ``terraform output -json`` does."""
    return {
        key: {"sensitive": False, "type": "string", "value": value}
        for key, value in values.items()
    }


def bootstrap_outputs(
    *, enabled: dict[str, Any] | None = None, **overrides: Any
) -> dict[str, Any]:
    values: dict[str, Any] = {
        "project_name": "demo",
        "aws_account_id": "123",
        "aws_region": "us-east-1",
        "github_actions_role_dev_arn": "arn:dev",
        "github_actions_role_prod_arn": "arn:prod",
        "summary": {
            "enabled_features": enabled
            if enabled is not None
            else {"lambda": True, "apprunner": False, "eks": False},
        },
    }
    values.update(overrides)
    return tf_outputs(**{k: v for k, v in values.items() if v is not None})


@pytest.fixture()
def record() -> ConfigurationRecord:
    return ConfigurationRecord(
        project_name="demo",
        aws_account_id="123",
        aws_region="us-east-1",
        role_dev_arn="arn:dev",
        role_prod_arn="arn:prod",
    )


@pytest.fixture()
def lambda_only() -> FeatureFlags:
    return FeatureFlags(lambda_=True)


@pytest.fixture()
def all_targets() -> FeatureFlags:
    return FeatureFlags(lambda_=True, apprunner=True, eks=True)


@pytest.fixture()
def outputs_file(tmp_path: Path) -> Path:
    path = tmp_path / "outputs.json"
    path.write_text(json.dumps(bootstrap_outputs()), encoding="utf-8")
    return path
