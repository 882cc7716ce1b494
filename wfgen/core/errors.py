"""Errors that stop workflow generation."""

from __future__ import annotations


class WorkflowGenerationError(Exception):
    """Base error carrying a remediation hint for the operator."""

    def __init__(self, message: str, *, remediation: str = "") -> None:
        super().__init__(message)
        self.remediation = remediation


class SourceUnavailableError(WorkflowGenerationError):
    """Raised when the bootstrap outputs cannot be read."""


class ConfigurationError(WorkflowGenerationError):
    """Raised when required bootstrap outputs are missing, empty or unsafe."""

    def __init__(
        self,
        message: str,
        *,
        missing: list[str] | None = None,
        invalid: list[str] | None = None,
        remediation: str = "",
    ) -> None:
        super().__init__(message, remediation=remediation)
        self.missing = list(missing or [])
        self.invalid = list(invalid or [])
