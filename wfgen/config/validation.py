"""Required-field validation for bootstrap configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..core.errors import ConfigurationError

REMEDIATION = "Please ensure bootstrap is applied: make bootstrap-apply"

REQUIRED_OUTPUTS = (
    "project_name",
    "aws_account_id",
    "github_actions_role_dev_arn",
    "github_actions_role_prod_arn",
)


@dataclass(frozen=True)
class ValidationResult:
    missing: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def validate_outputs(values: Mapping[str, Any]) -> ValidationResult:
    """Check that every required output resolved to a non-empty value.

    Args:
        values: Resolved scalar outputs keyed by terraform output name

    Returns:
        Result listing the missing outputs in declaration order
    """
    missing = [name for name in REQUIRED_OUTPUTS if _is_blank(values.get(name))]
    return ValidationResult(missing=missing)


def require_valid(result: ValidationResult) -> None:
    if result.ok:
        return
    raise ConfigurationError(
        "Could not read required bootstrap outputs: " + ", ".join(result.missing),
        missing=result.missing,
        remediation=REMEDIATION,
    )
