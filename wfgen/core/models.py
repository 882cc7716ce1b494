"""Domain models for bootstrap configuration and generated workflows."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from .tags import SHORT_REVISION_LENGTH, ImageTags

DEFAULT_REGION = "us-east-1"
DEFAULT_IMAGE_NAME = "api"
DEFAULT_TERRAFORM_VERSION = "1.13.0"

# Values land inside plain YAML scalars and shell lines of the generated workflows.
# The first character must not be a YAML indicator such as * & ! [ | % @.
SafeToken = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=1,
        pattern=r"""^[A-Za-z0-9_][^\s'"`$\\{}]*$""",
    ),
]


class Target(str, Enum):
    LAMBDA = "lambda"
    APPRUNNER = "apprunner"
    EKS = "eks"

    @property
    def label(self) -> str:
        return {
            Target.LAMBDA: "Lambda",
            Target.APPRUNNER: "App Runner",
            Target.EKS: "EKS",
        }[self]

    @property
    def dockerfile(self) -> str:
        return f"Dockerfile.{self.value}"

    @property
    def build_platform(self) -> str | None:
        # App Runner builds use the runner's native platform.
        if self is Target.APPRUNNER:
            return None
        return "linux/arm64"


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"

    @property
    def display_name(self) -> str:
        return "Dev" if self is Environment.DEV else "Production"

    @property
    def github_environment(self) -> str:
        return "dev" if self is Environment.DEV else "production"

    @property
    def rollout_timeout(self) -> str:
        return "5m" if self is Environment.DEV else "10m"


def workflow_filename(target: Target, environment: Environment) -> str:
    return f"deploy-{target.value}-{environment.value}.yml"


PLAN_WORKFLOW_FILENAME = "terraform-plan.yml"


def _parse_flag(value: Any) -> bool:
    # Only a JSON true or the exact string "true" enables a feature.
    if isinstance(value, bool):
        return value
    return isinstance(value, str) and value.strip() == "true"


class ConfigurationRecord(BaseModel):
    """Values read from the bootstrap stack, fixed for the whole run."""

    model_config = ConfigDict(frozen=True)

    project_name: SafeToken = Field(..., description="Project name prefix")
    aws_account_id: SafeToken = Field(..., description="AWS account identifier")
    aws_region: SafeToken = Field(default=DEFAULT_REGION, description="AWS region")
    role_dev_arn: SafeToken = Field(..., description="GitHub Actions role for dev")
    role_test_arn: SafeToken | None = Field(
        default=None, description="GitHub Actions role for test"
    )
    role_prod_arn: SafeToken = Field(..., description="GitHub Actions role for prod")
    repositories: dict[Target, SafeToken] = Field(
        default_factory=dict, description="ECR repository suffix per target"
    )

    def role_for(self, environment: Environment) -> str:
        if environment is Environment.DEV:
            return self.role_dev_arn
        return self.role_prod_arn

    def repository_suffix(self, target: Target) -> str:
        return self.repositories.get(target, target.value)

    def repository_for(self, target: Target) -> str:
        return f"{self.project_name}-{self.repository_suffix(target)}"


class FeatureFlags(BaseModel):
    """Compute options enabled in the bootstrap stack."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    lambda_: bool = Field(default=False, alias="lambda")
    apprunner: bool = False
    eks: bool = False
    test_env: bool = False

    @field_validator("lambda_", "apprunner", "eks", "test_env", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> bool:
        return _parse_flag(value)

    def enabled(self, target: Target) -> bool:
        return {
            Target.LAMBDA: self.lambda_,
            Target.APPRUNNER: self.apprunner,
            Target.EKS: self.eks,
        }[target]

    def enabled_targets(self) -> list[Target]:
        return [target for target in Target if self.enabled(target)]


class DeployWorkflowParams(BaseModel):
    """Substitution values for one deploy-{target}-{env}.yml workflow."""

    model_config = ConfigDict(frozen=True)

    target: Target
    environment: Environment
    project_name: SafeToken
    aws_region: SafeToken
    role_arn: SafeToken
    repository: SafeToken
    image_name: SafeToken = DEFAULT_IMAGE_NAME
    tags: ImageTags
    short_sha_length: int = Field(default=SHORT_REVISION_LENGTH, ge=1, le=40)
    watch_paths: tuple[str, ...] = ()

    def template_context(self) -> dict[str, Any]:
        context = self.model_dump(mode="json")
        context.update(
            target_label=self.target.label,
            environment_title=self.environment.display_name,
            github_environment=self.environment.github_environment,
            namespace=self.environment.value,
            rollout_timeout=self.environment.rollout_timeout,
            dockerfile=self.target.dockerfile,
            platform=self.target.build_platform,
            workflow_file=workflow_filename(self.target, self.environment),
        )
        return context


class PlanWorkflowParams(BaseModel):
    """Substitution values for terraform-plan.yml."""

    model_config = ConfigDict(frozen=True)

    aws_region: SafeToken
    role_dev_arn: SafeToken
    role_prod_arn: SafeToken
    terraform_version: SafeToken = DEFAULT_TERRAFORM_VERSION
    environments: tuple[Environment, ...] = (Environment.DEV, Environment.PROD)

    def template_context(self) -> dict[str, Any]:
        context = self.model_dump(mode="json")
        context["workflow_file"] = PLAN_WORKFLOW_FILENAME
        return context


class ArtifactSpec(BaseModel):
    """A template to render and the file it renders to."""

    model_config = ConfigDict(frozen=True)

    template_name: str = Field(..., description="Template file name")
    output_path: Path = Field(..., description="Output path relative to dest root")
    params: Union[DeployWorkflowParams, PlanWorkflowParams]


class Artifact(BaseModel):
    """A rendered workflow ready to be written."""

    model_config = ConfigDict(frozen=True)

    path: Path
    content: str

    @property
    def name(self) -> str:
        return self.path.name
