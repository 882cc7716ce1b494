"""Template rendering engine."""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..core.models import Artifact, ArtifactSpec, ConfigurationRecord, FeatureFlags
from .io import atomic_write_text
from .plan import plan_artifacts

logger = logging.getLogger(__name__)

PACKAGED_TEMPLATES = Path(__file__).resolve().parent.parent / "templates"


def build_environment(templates_dir: Path | None = None) -> Environment:
    """Create the Jinja2 environment used for workflow templates.

    GitHub Actions expressions use ``${{ }}``, so templates use ``<< >>``
    for variables and ``<% %>`` for blocks.

    Args:
        templates_dir: Optional directory whose templates shadow the packaged
            ones by file name

    Returns:
        Configured Jinja2 environment
    """
    search_path = [str(PACKAGED_TEMPLATES)]
    if templates_dir is not None:
        if not templates_dir.is_dir():
            raise FileNotFoundError(f"Templates directory not found: {templates_dir}")
        search_path.insert(0, str(templates_dir))

    return Environment(
        loader=FileSystemLoader(search_path),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        variable_start_string="<<",
        variable_end_string=">>",
        block_start_string="<%",
        block_end_string="%>",
        comment_start_string="<#",
        comment_end_string="#>",
    )


def render_artifact(spec: ArtifactSpec, env: Environment) -> Artifact:
    logger.debug(f"Rendering template: {spec.template_name}")
    template = env.get_template(spec.template_name)
    content = template.render(**spec.params.template_context())
    return Artifact(path=spec.output_path, content=content)


def generate_artifacts(
    record: ConfigurationRecord,
    flags: FeatureFlags,
    *,
    templates_dir: Path | None = None,
) -> list[Artifact]:
    """Render every workflow the flags call for. Writes nothing.

    Args:
        record: Loaded bootstrap configuration
        flags: Enabled compute options
        templates_dir: Optional template override directory

    Returns:
        Rendered artifacts in generation order
    """
    env = build_environment(templates_dir)
    specs = plan_artifacts(record, flags)
    logger.info(f"Rendering {len(specs)} workflow(s)")
    return [render_artifact(spec, env) for spec in specs]


def write_artifacts(
    artifacts: list[Artifact], dest_root: Path, file_mode: int = 0o644
) -> list[Path]:
    """Write artifacts under dest_root, replacing existing files.

    Args:
        artifacts: Rendered artifacts
        dest_root: Output directory
        file_mode: File permissions

    Returns:
        Written file paths
    """
    written: list[Path] = []
    for artifact in artifacts:
        output_path = dest_root / artifact.path
        atomic_write_text(output_path, artifact.content, mode=file_mode)
        logger.info(f"Created {artifact.name}")
        written.append(output_path)
    return written


def stale_artifacts(artifacts: list[Artifact], dest_root: Path) -> list[Path]:
    """Return the artifacts whose file on disk is missing or differs."""
    stale: list[Path] = []
    for artifact in artifacts:
        output_path = dest_root / artifact.path
        if not output_path.exists():
            stale.append(output_path)
            continue
        if output_path.read_text(encoding="utf-8") != artifact.content:
            stale.append(output_path)
    return stale
