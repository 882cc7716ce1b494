"""Console summary of a generation run."""

from __future__ import annotations

import logging
from typing import Callable

from .core.models import Artifact, ConfigurationRecord, FeatureFlags, Target

logger = logging.getLogger(__name__)

NEXT_STEPS = (
    "1. Review generated workflows in .github/workflows/",
    "2. Commit and push workflows to GitHub",
    "3. Configure GitHub environments (dev, production); no secrets needed, authentication uses OIDC",
    "4. Push code to main branch or create a PR to trigger workflows",
)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def summarize_configuration(
    record: ConfigurationRecord, flags: FeatureFlags
) -> list[str]:
    return [
        f"Project: {record.project_name}",
        f"AWS Account: {record.aws_account_id}",
        f"AWS Region: {record.aws_region}",
        f"Lambda enabled: {_flag(flags.lambda_)}",
        f"App Runner enabled: {_flag(flags.apprunner)}",
        f"EKS enabled: {_flag(flags.eks)}",
        f"Test environment: {_flag(flags.test_env)}",
        f"Test role: {record.role_test_arn or '(none)'}",
        f"ECR Lambda: {record.repository_for(Target.LAMBDA)}",
        f"ECR App Runner: {record.repository_for(Target.APPRUNNER)}",
        f"ECR EKS: {record.repository_for(Target.EKS)}",
    ]


def summarize_artifacts(artifacts: list[Artifact]) -> list[str]:
    return [f"- {artifact.name}" for artifact in artifacts]


def report(
    record: ConfigurationRecord,
    flags: FeatureFlags,
    artifacts: list[Artifact],
    *,
    echo: Callable[[str], None] = print,
) -> None:
    """Print the loaded configuration, the generated files and next steps.

    Output problems are logged and ignored; they never fail the run.
    """
    lines = ["Configuration loaded:"]
    lines.extend(f"   {line}" for line in summarize_configuration(record, flags))
    lines.append("")
    lines.append("GitHub Actions workflows generated successfully")
    lines.append("Generated workflows:")
    lines.extend(f"   {line}" for line in summarize_artifacts(artifacts))
    lines.append("")
    lines.append("Next steps:")
    lines.extend(f"   {line}" for line in NEXT_STEPS)

    try:
        for line in lines:
            echo(line)
    except OSError as exc:
        logger.debug("Could not print generation summary: %s", exc)
