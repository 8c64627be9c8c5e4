"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from faqhub.config import ConfigError, Settings, load_config
from faqhub.core.pipeline import ContentPipeline, invalid_count, write_result
from faqhub.core.registry import ContentType, build_registry


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ConfigError as e:
        _fail(str(e))


def _registry(settings: Settings) -> dict[str, ContentType]:
    try:
        return build_registry(settings)
    except ConfigError as e:
        _fail(str(e))


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def _echo_stats(result: dict) -> None:
    """Print per-type counts and a summary line."""
    stats = result["stats"]
    for name in stats["types"]:
        s = stats[name]
        typer.echo(f"  {name}: {s['files']} files, {s['parsed']} parsed, {s['valid']} valid, {s['invalid']} invalid")


def _run(settings: Settings) -> dict:
    registry = _registry(settings)
    _configure_logging(settings)
    return ContentPipeline(registry, settings).run()


def build_cmd(
    root: Annotated[Optional[str], typer.Option("--project-root", help="Root that content paths resolve against")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory for content.json")] = None,
    debug: Annotated[Optional[str], typer.Option("--debug-dir", help="Scratch directory for faq.json")] = None,
    ):
    """Run the full pipeline and write the assembled structure."""
    settings = _settings(overrides={"project_root": root, "output_dir": out, "debug_dir": debug})
    result = _run(settings)
    _echo_stats(result)
    try:
        out_file = write_result(result, settings.resolve(settings.output_dir))
    except OSError as e:
        _fail("Could not write output", e)
    typer.echo(f"Wrote {out_file}")


def validate_cmd(
    root: Annotated[Optional[str], typer.Option("--project-root", help="Root that content paths resolve against")] = None,
    ):
    """Run the pipeline without writing output; exit 1 if any item is invalid."""
    settings = _settings(overrides={"project_root": root, "debug_dir": ""})
    result = _run(settings)
    _echo_stats(result)
    invalid = invalid_count(result)
    if invalid:
        typer.echo(f"{invalid} invalid item(s); details in {settings.resolve(settings.validation_log)}")
        raise typer.Exit(1)
    typer.echo("All items valid.")


def types_cmd(
    root: Annotated[Optional[str], typer.Option("--project-root", help="Root that content paths resolve against")] = None,
    ):
    """List configured content types with their source directory and schema."""
    settings = _settings(overrides={"project_root": root})
    for name, ct in _registry(settings).items():
        typer.echo(f"{name}\t{Path(ct.source_dir)}\t{ct.schema or '-'}")
