"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from blogsite.config import Settings, load_config
from blogsite.core.errors import FrontmatterError, SiteResolveError
from blogsite.core.models import SiteIndex
from blogsite.core.pipeline import run_render, run_resolve
from blogsite.core.render import plan_site


Verbose = Annotated[bool, typer.Option("--verbose", "-v", help="Log progress at INFO level")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _fail_all(e: SiteResolveError) -> None:
    """Print every collected content error, then exit 1."""
    typer.echo(f"Error: {e}", err=True)
    for err in e.errors:
        typer.echo(f"  {err}", err=True)
    raise typer.Exit(1)


def _logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _resolve(settings: Settings) -> SiteIndex:
    """Load and resolve settings.source_dir, exiting 1 on any read or content error."""
    try:
        return run_resolve(settings.source_dir, settings.posts_dir, set(settings.exclude))
    except FrontmatterError as e:
        _fail("Could not load content", e)
    except OSError as e:
        _fail("Could not read content", e)
    except SiteResolveError as e:
        _fail_all(e)


def build_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Site source directory")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    posts: Annotated[Optional[str], typer.Option("--posts-dir", help="Directory holding posts")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    verbose: Verbose = False,
    ):
    """Resolve every post and page, then render the site."""
    _logging(verbose)
    settings = _settings(overrides={
        "source_dir": path, "output_dir": out, "posts_dir": posts, "parser_config": parser,
    })
    index = _resolve(settings)
    try:
        written = run_render(index, settings)
    except SiteResolveError as e:
        _fail_all(e)
    except (OSError, ValueError) as e:
        _fail("Render failed", e)

    typer.echo(
        f"Resolved {len(index)} URL(s): "
        f"{len(index.posts_by_date)} post(s), "
        f"{len(index.pages)} page(s), "
        f"{len(index.posts_by_category)} categor(ies)"
    )
    typer.echo(f"Wrote {len(written)} file(s) to {Path(settings.output_dir)}/")


def routes_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Site source directory")] = None,
    posts: Annotated[Optional[str], typer.Option("--posts-dir", help="Directory holding posts")] = None,
    verbose: Verbose = False,
    ):
    """List every resolved URL with its kind and source file."""
    _logging(verbose)
    settings = _settings(overrides={"source_dir": path, "posts_dir": posts})
    index = _resolve(settings)
    if not len(index):
        typer.echo("No documents found.")
        return
    for url, doc in sorted(index.by_url.items()):
        typer.echo(f"{url}\t{doc.kind.value}\t{doc.source}")


def check_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Site source directory")] = None,
    posts: Annotated[Optional[str], typer.Option("--posts-dir", help="Directory holding posts")] = None,
    verbose: Verbose = False,
    ):
    """Validate content and output paths without writing anything; report every error found."""
    _logging(verbose)
    settings = _settings(overrides={"source_dir": path, "posts_dir": posts})
    index = _resolve(settings)
    try:
        plan_site(index, Path(settings.output_dir), settings.write_manifest)
    except SiteResolveError as e:
        _fail_all(e)
    typer.echo(f"OK - {len(index.posts_by_date)} post(s), {len(index.pages)} page(s)")
