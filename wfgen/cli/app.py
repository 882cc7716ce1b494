"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import typer
from typing_extensions import Annotated

from ..config.loader import load_configuration
from ..core.errors import WorkflowGenerationError
from ..core.models import DEFAULT_IMAGE_NAME, Environment
from ..core.tags import image_tags
from ..provisioning import JsonFileOutputSource, OutputSource, TerraformOutputSource
from ..rendering import engine
from ..reporting import report
from ..settings import GeneratorSettings
from .parsers import parse_directory, parse_file_mode

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="wfgen",
    help="Generate GitHub Actions deployment workflows from Terraform bootstrap outputs.",
)


def _fail(exc: WorkflowGenerationError) -> NoReturn:
    logger.error(f"Error: {exc}")
    if exc.remediation:
        logger.error(f"   {exc.remediation}")
    raise typer.Exit(code=1)


@app.command()
def generate(
    bootstrap_dir: Annotated[
        str,
        typer.Option(
            "--bootstrap-dir",
            help="Initialized Terraform bootstrap stack (default: bootstrap).",
            metavar="DIR",
        ),
    ] = "",
    outputs_file: Annotated[
        str,
        typer.Option(
            "--outputs-file",
            help="Read a saved `terraform output -json` document instead of running terraform.",
            metavar="FILE",
        ),
    ] = "",
    workflows_dir: Annotated[
        str,
        typer.Option(
            "--workflows-dir",
            help="Directory the workflows are written to (default: .github/workflows).",
            metavar="DIR",
        ),
    ] = "",
    templates_dir: Annotated[
        str,
        typer.Option(
            "--templates-dir",
            help="Directory with templates overriding the packaged ones by file name.",
            metavar="DIR",
        ),
    ] = "",
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="File permissions in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = "",
    check: Annotated[
        bool,
        typer.Option(
            "--check",
            help="Verify the workflows on disk are up to date; write nothing.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Render deployment workflows for every compute option enabled in bootstrap."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    settings = GeneratorSettings()
    dest_root = Path(workflows_dir) if workflows_dir else settings.workflows_dir
    mode = parse_file_mode(file_mode) if file_mode else settings.file_mode
    overrides = parse_directory(templates_dir) if templates_dir else None

    source: OutputSource
    if outputs_file:
        source = JsonFileOutputSource(Path(outputs_file))
    else:
        stack_dir = Path(bootstrap_dir) if bootstrap_dir else settings.bootstrap_dir
        source = TerraformOutputSource(stack_dir, terraform_bin=settings.terraform_bin)

    logger.info("Reading bootstrap configuration...")
    try:
        record, flags = load_configuration(source)
    except WorkflowGenerationError as exc:
        _fail(exc)

    artifacts = engine.generate_artifacts(record, flags, templates_dir=overrides)

    if check:
        stale = engine.stale_artifacts(artifacts, dest_root)
        for path in stale:
            logger.error(f"Out of date: {path}")
        if stale:
            logger.error("Run wfgen generate to refresh the workflows")
            raise typer.Exit(code=1)
        logger.info(f"All {len(artifacts)} workflow(s) are up to date")
        return

    engine.write_artifacts(artifacts, dest_root, file_mode=mode)
    report(record, flags, artifacts, echo=typer.echo)


@app.command()
def tags(
    revision: Annotated[str, typer.Argument(help="Full commit SHA.")],
    environment: Annotated[
        Environment,
        typer.Option("--environment", "-e", help="Deployment environment."),
    ] = Environment.DEV,
    name: Annotated[
        str,
        typer.Option("--name", help="Logical image name."),
    ] = DEFAULT_IMAGE_NAME,
) -> None:
    """Print the image tags a deploy workflow pushes for REVISION."""
    try:
        derived = image_tags(environment.value, name, revision)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="REVISION") from exc
    for tag in derived.all:
        typer.echo(tag)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
