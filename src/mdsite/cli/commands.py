"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsite.config import Settings, load_config
from mdsite.core.errors import IOFailure
from mdsite.core.models import BuildReport
from mdsite.core.pipeline import run_build, run_check
from mdsite.core.render import Site


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
    except ValueError as e:
        _fail(str(e))


def _configure_logging(settings: Settings, verbose: bool) -> None:
    """Set the root log level from --verbose or the log_level setting."""
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def _echo_skipped(report: BuildReport) -> None:
    """Print each skipped document with its reason."""
    if not report.skipped:
        return
    typer.echo(f"Skipped {len(report.skipped)} document(s):")
    for s in report.skipped:
        typer.echo(f"  {s.path}: {s.reason}")


def _finish(report: BuildReport, strict: bool) -> None:
    """Exit 1 in strict mode when any document was skipped."""
    if strict and report.skipped:
        _fail(f"{len(report.skipped)} document(s) skipped in strict mode")


def build_cmd(
    content: Annotated[Optional[str], typer.Argument(help="Content directory or single file")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    drafts: Annotated[Optional[bool], typer.Option("--drafts/--no-drafts", help="Render draft pages (never indexed)")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Parallel parse/render workers")] = None,
    clean: Annotated[Optional[bool], typer.Option("--clean/--no-clean", help="Remove output dir first")] = None,
    strict: Annotated[bool, typer.Option("--strict", help="Exit 1 if any document is skipped")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Render the content directory to HTML pages plus tag/category indexes."""
    settings = _settings(overrides={
        "content_dir": content, "output_dir": out, "parser_config": parser,
        "include_drafts": drafts, "workers": workers, "clean": clean,
    })
    _configure_logging(settings, verbose)
    output_dir = Path(settings.output_dir)

    try:
        report = run_build(
            Path(settings.content_dir),
            output_dir,
            parser_config=settings.parser_config,
            site=Site(title=settings.site_title, base_url=settings.base_url),
            include_drafts=settings.include_drafts,
            workers=settings.workers,
            clean=settings.clean,
        )
    except IOFailure as e:
        _fail("Build aborted", e)

    _echo_skipped(report)
    typer.echo(
        f"Build complete - "
        f"{len(report.index.posts)} published, "
        f"{len(report.drafts)} draft(s), "
        f"{len(report.skipped)} skipped, "
        f"{len(report.written)} file(s) written to {output_dir}/, "
        f"{len(report.pruned)} stale page(s) removed"
    )
    _finish(report, strict)


def check_cmd(
    content: Annotated[Optional[str], typer.Argument(help="Content directory or single file")] = None,
    strict: Annotated[bool, typer.Option("--strict", help="Exit 1 if any document is skipped")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Validate frontmatter of every document without writing output."""
    settings = _settings(overrides={"content_dir": content})
    _configure_logging(settings, verbose)
    try:
        report = run_check(Path(settings.content_dir), settings.workers)
    except IOFailure as e:
        _fail("Check aborted", e)

    _echo_skipped(report)
    typer.echo(
        f"Checked {len(report.documents) + len(report.skipped)} document(s) - "
        f"{len(report.documents)} valid, {len(report.skipped)} skipped"
    )
    _finish(report, strict)


def tags_cmd(
    content: Annotated[Optional[str], typer.Argument(help="Content directory or single file")] = None,
    ):
    """List tags and categories with their published post counts."""
    settings = _settings(overrides={"content_dir": content})
    _configure_logging(settings, False)
    try:
        report = run_check(Path(settings.content_dir), settings.workers)
    except IOFailure as e:
        _fail("Listing aborted", e)

    if not report.index.tags and not report.index.categories:
        typer.echo("No tags or categories found.")
        raise typer.Exit(1)
    for label, terms in (("categories", report.index.categories), ("tags", report.index.tags)):
        if not terms:
            continue
        typer.echo(f"{label}:")
        for term, slugs in terms.items():
            typer.echo(f"  {term} ({len(slugs)})")
