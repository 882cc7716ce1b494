"""Decide which workflows to generate from a configuration and flag set."""

from __future__ import annotations

from pathlib import Path

from ..core.models import (
    DEFAULT_IMAGE_NAME,
    PLAN_WORKFLOW_FILENAME,
    ArtifactSpec,
    ConfigurationRecord,
    DeployWorkflowParams,
    Environment,
    FeatureFlags,
    PlanWorkflowParams,
    Target,
    workflow_filename,
)
from ..core.tags import SHORT_REVISION_LENGTH, tags_for_ref

WORKFLOWS_PREFIX = ".github/workflows"
# Shell variable the build step fills with the shortened commit SHA.
SHORT_SHA_REF = "${SHORT_SHA}"


def watch_paths(target: Target, environment: Environment) -> tuple[str, ...]:
    paths = ["src/**", "pyproject.toml", "uv.lock", target.dockerfile]
    if target is Target.EKS:
        paths.append("k8s/**")
    paths.append(f"{WORKFLOWS_PREFIX}/{workflow_filename(target, environment)}")
    return tuple(paths)


def deploy_params(
    record: ConfigurationRecord, target: Target, environment: Environment
) -> DeployWorkflowParams:
    image_name = DEFAULT_IMAGE_NAME
    return DeployWorkflowParams(
        target=target,
        environment=environment,
        project_name=record.project_name,
        aws_region=record.aws_region,
        role_arn=record.role_for(environment),
        repository=record.repository_for(target),
        image_name=image_name,
        tags=tags_for_ref(environment.value, image_name, SHORT_SHA_REF),
        short_sha_length=SHORT_REVISION_LENGTH,
        watch_paths=watch_paths(target, environment),
    )


def plan_params(record: ConfigurationRecord) -> PlanWorkflowParams:
    return PlanWorkflowParams(
        aws_region=record.aws_region,
        role_dev_arn=record.role_dev_arn,
        role_prod_arn=record.role_prod_arn,
    )


def plan_artifacts(
    record: ConfigurationRecord, flags: FeatureFlags
) -> list[ArtifactSpec]:
    """List the workflows to render, gated by the feature flags.

    Each enabled target yields a dev and a prod deploy workflow. The
    terraform plan workflow is always included, last.
    """
    specs: list[ArtifactSpec] = []
    for target in flags.enabled_targets():
        for environment in Environment:
            specs.append(
                ArtifactSpec(
                    template_name=f"deploy-{target.value}.yml.j2",
                    output_path=Path(workflow_filename(target, environment)),
                    params=deploy_params(record, target, environment),
                )
            )
    specs.append(
        ArtifactSpec(
            template_name="terraform-plan.yml.j2",
            output_path=Path(PLAN_WORKFLOW_FILENAME),
            params=plan_params(record),
        )
    )
    return specs
