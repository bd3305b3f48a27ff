"""Pipeline step functions: load, resolve, and render orchestration"""

from pathlib import Path

from blogsite.config import Settings
from blogsite.core.models import SiteIndex
from blogsite.core.parse import load_documents
from blogsite.core.render import write_site
from blogsite.core.resolve import resolve


def run_resolve(path: str, posts_dir: str, exclude: set[str] = frozenset()) -> SiteIndex:
    """Load every document under path and resolve it into a SiteIndex.

    Raises FileNotFoundError when path does not exist, FrontmatterError for
    an unparseable file, SiteResolveError for content that does not resolve.
    """
    return resolve(load_documents(Path(path), posts_dir, exclude))


def run_render(index: SiteIndex, settings: Settings) -> list[Path]:
    """Write a resolved index to settings.output_dir. Raises SiteRenderError on output clashes."""
    return write_site(
        index,
        Path(settings.output_dir),
        settings.site_title,
        settings.parser_config,
        settings.write_manifest,
    )


def run_build(settings: Settings) -> tuple[SiteIndex, list[Path]]:
    """Resolve settings.source_dir and render it to settings.output_dir.

    Nothing is written unless the whole site resolves and every output path is free.
    """
    index = run_resolve(settings.source_dir, settings.posts_dir, set(settings.exclude))
    return index, run_render(index, settings)
