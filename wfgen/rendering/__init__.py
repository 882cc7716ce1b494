"""Workflow planning and rendering."""

from .engine import generate_artifacts, stale_artifacts, write_artifacts
from .plan import plan_artifacts

__all__ = [
    "generate_artifacts",
    "plan_artifacts",
    "stale_artifacts",
    "write_artifacts",
]
