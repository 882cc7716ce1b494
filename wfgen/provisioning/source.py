"""Read-only access to bootstrap stack outputs."""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from .._utils import missing_commands, run_logged
from ..core.errors import SourceUnavailableError

logger = logging.getLogger(__name__)

APPLY_HINT = "Please ensure bootstrap is applied: make bootstrap-apply"
INIT_HINT = "Please run: make bootstrap-init && make bootstrap-apply"


class OutputSource(Protocol):
    def outputs(self) -> dict[str, Any]:
        """Return outputs in ``terraform output -json`` shape."""
        ...


def _parse_outputs(raw: str, origin: str) -> dict[str, Any]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SourceUnavailableError(
            f"Unable to parse bootstrap outputs from {origin}: {exc}",
            remediation=APPLY_HINT,
        ) from exc
    if not isinstance(data, dict):
        raise SourceUnavailableError(
            f"Bootstrap outputs from {origin} are not a JSON object",
            remediation=APPLY_HINT,
        )
    return data


@dataclass(frozen=True)
class TerraformOutputSource:
    """Runs ``terraform output -json`` inside an initialized stack directory."""

    stack_dir: Path
    terraform_bin: str = "terraform"

    def outputs(self) -> dict[str, Any]:
        if not self.stack_dir.is_dir():
            raise SourceUnavailableError(
                f"Bootstrap directory not found: {self.stack_dir}",
                remediation="Please run bootstrap first: make bootstrap-apply",
            )
        if not (self.stack_dir / ".terraform").is_dir():
            raise SourceUnavailableError(
                "Bootstrap Terraform not initialized", remediation=INIT_HINT
            )
        if missing_commands([self.terraform_bin]):
            raise SourceUnavailableError(
                f"missing dependency: {self.terraform_bin}",
                remediation="Install Terraform and make sure it is on PATH",
            )

        logger.debug("Reading terraform outputs from %s", self.stack_dir)
        try:
            raw = run_logged(
                [self.terraform_bin, f"-chdir={self.stack_dir}", "output", "-json"]
            ).stdout
        except subprocess.CalledProcessError as exc:
            raise SourceUnavailableError(
                f"terraform output failed in {self.stack_dir} (exit {exc.returncode})",
                remediation=APPLY_HINT,
            ) from exc
        return _parse_outputs(raw, str(self.stack_dir))


@dataclass(frozen=True)
class JsonFileOutputSource:
    """Reads a saved ``terraform output -json`` document."""

    path: Path

    def outputs(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise SourceUnavailableError(
                f"Bootstrap outputs file not found: {self.path}",
                remediation="Export them with: terraform output -json > outputs.json",
            ) from exc
        logger.debug("Reading bootstrap outputs from %s", self.path)
        return _parse_outputs(raw, str(self.path))


def output_value(outputs: dict[str, Any], key: str) -> Any:
    """Return the ``value`` of a terraform output, or None when unset or empty."""
    entry = outputs.get(key)
    if not isinstance(entry, dict):
        return None
    value = entry.get("value")
    if isinstance(value, str) and value.strip() == "":
        return None
    return value
