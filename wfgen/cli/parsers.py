"""CLI argument parsers and validators."""

from __future__ import annotations

from pathlib import Path

import typer


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e


def parse_directory(value: str) -> Path:
    """Parse a path that must name an existing directory."""
    path = Path(value)
    if not path.is_dir():
        raise typer.BadParameter(f"Not a directory: {value!r}")
    return path
