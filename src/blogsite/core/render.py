"""Render a resolved SiteIndex to HTML files and a site.json manifest"""

import json
import logging
from html import escape
from pathlib import Path, PurePosixPath

from markdown_it import MarkdownIt

from blogsite.core.errors import OutputCollisionError, SiteRenderError
from blogsite.core.models import Document, SiteIndex
from blogsite.core.utils.slug import slugify


logger = logging.getLogger(__name__)

MANIFEST_FILE = "site.json"
PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
{content}
</body>
</html>
"""


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def render_html(markdown: str, parser_config: str = 'commonmark') -> str:
    """Convert a markdown body to an HTML fragment."""
    return _make_parser(parser_config).render(markdown)


def output_path(output_dir: Path, url: str) -> Path:
    """Map a URL path to a file under output_dir; directory-style URLs get index.html."""
    rel = PurePosixPath(url.lstrip('/'))
    if '..' in rel.parts:
        raise ValueError(f"URL escapes output directory: {url}")
    if url.endswith('/') or not rel.suffix:
        rel = rel / 'index.html'
    return output_dir.joinpath(*rel.parts)


def category_url(category: str) -> str:
    return f"/categories/{slugify(category)}/"


def _post_list(posts: tuple[Document, ...]) -> str:
    items = "\n".join(
        f'<li><time datetime="{p.date.isoformat()}">{p.date:%Y-%m-%d}</time> '
        f'<a href="{escape(p.permalink)}">{escape(p.title)}</a></li>'
        for p in posts
    )
    return f"<ul>\n{items}\n</ul>"


def build_page(doc: Document, site_title: str, parser_config: str) -> str:
    """Wrap a document's rendered body in a minimal HTML page."""
    header = f"<h1>{escape(doc.title)}</h1>"
    if doc.is_post:
        header += f'\n<p><time datetime="{doc.date.isoformat()}">{doc.date:%B %d, %Y}</time></p>'
    content = f"<article>\n{header}\n{render_html(doc.body, parser_config)}</article>"
    return PAGE_TEMPLATE.format(title=escape(f"{doc.title} | {site_title}"), content=content)


def build_listing(title: str, posts: tuple[Document, ...], site_title: str) -> str:
    """HTML listing of posts, newest first."""
    content = f"<h1>{escape(title)}</h1>\n{_post_list(posts)}"
    return PAGE_TEMPLATE.format(title=escape(f"{title} | {site_title}" if title != site_title else title), content=content)


def build_manifest(index: SiteIndex) -> dict:
    """Serializable summary of the index: every URL, post order, and category membership."""
    return {
        "urls": {
            url: {"kind": doc.kind.value, "title": doc.title, "source": doc.source}
            for url, doc in sorted(index.by_url.items())
        },
        "posts": [p.permalink for p in index.posts_by_date],
        "categories": {c: [p.permalink for p in ps] for c, ps in index.posts_by_category.items()},
    }


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding='utf-8')
    return path


def plan_site(index: SiteIndex, output_dir: Path, write_manifest: bool = True) -> dict[Path, tuple[str, object]]:
    """Map every document, listing, and the manifest to its output file before anything is written.

    Values are (url, payload): a Document, a (title, posts) listing with
    title None for the home page, or None for the manifest. Two documents
    landing on one file raise SiteRenderError; a listing that would land on
    a taken file is skipped.
    """
    planned: dict[Path, tuple[str, object]] = {}
    errors = []
    for url, doc in index.by_url.items():
        path = output_path(output_dir, url)
        if path in planned:
            errors.append(OutputCollisionError(path.relative_to(output_dir).as_posix(), planned[path][0], url))
            continue
        planned[path] = (url, doc)

    listings = [("/", None, index.posts_by_date)]
    listings += [(category_url(c), c, ps) for c, ps in index.posts_by_category.items()]
    for url, title, posts in listings:
        path = output_path(output_dir, url)
        if path in planned:
            logger.warning("skipping listing %s: %s is already taken by %s", url, path, planned[path][0])
            continue
        planned[path] = (url, (title, posts))

    if write_manifest:
        path = output_dir / MANIFEST_FILE
        if path in planned:
            errors.append(OutputCollisionError(MANIFEST_FILE, planned[path][0], "the site manifest"))
        else:
            planned[path] = (f"/{MANIFEST_FILE}", None)

    if errors:
        raise SiteRenderError(errors)
    return planned


def write_site(
    index: SiteIndex,
    output_dir: Path,
    site_title: str = "blogsite",
    parser_config: str = 'commonmark',
    write_manifest: bool = True,
    ) -> list[Path]:
    """Write one page per URL, post listings for / and each category, and site.json.

    Every output path is planned first, so a clash leaves output_dir untouched.
    Returns written file paths in write order.
    """
    written = []
    for path, (_, payload) in plan_site(index, output_dir, write_manifest).items():
        if isinstance(payload, Document):
            text = build_page(payload, site_title, parser_config)
        elif payload is None:
            text = json.dumps(build_manifest(index), indent=2, ensure_ascii=False)
        else:
            title, posts = payload
            text = build_listing(title or site_title, posts, site_title)
        written.append(_write(path, text))

    logger.info("wrote %d file(s) to %s", len(written), output_dir)
    return written
