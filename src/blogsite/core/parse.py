"""File discovery, frontmatter extraction, and Document construction"""

import logging
import re
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from blogsite.core.errors import FrontmatterError
from blogsite.core.models import Document, DocumentKind


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'\A---[ \t]*\n(.*?)^---[ \t]*(?:\n|\Z)', re.DOTALL | re.MULTILINE)
DATED_NAME_RE = re.compile(r'^(\d{4}-\d{2}-\d{2})-(.+)$')
MD_EXTENSIONS = {'.md', '.markdown', '.mdx'}
POST_ONLY_KEYS = ('date', 'categories', 'category')


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def _in_posts_dir(rel: Path, posts_dir: str) -> bool:
    """True when posts_dir (one or more path components) appears among rel's directories."""
    want = PurePosixPath(posts_dir).parts
    dirs = rel.parts[:-1]
    return any(dirs[i:i + len(want)] == want for i in range(len(dirs) - len(want) + 1))


def _is_hidden(rel: Path, posts_dir: str, exclude: set[str]) -> bool:
    """Skip dotfiles, _-prefixed dirs outside posts_dir, and excluded names."""
    if rel.name in exclude:
        return True
    allowed = set(PurePosixPath(posts_dir).parts)
    return any(
        part.startswith('.') or (part.startswith('_') and part not in allowed)
        for part in rel.parts
    )


def discover_files(path: Path, posts_dir: str = '_posts', exclude: set[str] = frozenset()) -> list[Path]:
    """Return sorted markdown files under path, or [path] if a single file."""
    if not path.exists():
        raise FileNotFoundError(f"Source path not found: {path}")
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(
        p for p in path.rglob('*')
        if p.is_file() and p.suffix in MD_EXTENSIONS
        and not _is_hidden(p.relative_to(path), posts_dir, exclude)
    )


def _source_name(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def build_document(fm: dict[str, Any], body: str, source: str, kind: DocumentKind, stem: str) -> Document:
    """Map a frontmatter dict onto a Document; dated file stems supply a missing post date."""
    fm = dict(fm)
    m = DATED_NAME_RE.match(stem)
    title = fm.pop('title', None) or (m.group(2) if m else stem).replace('-', ' ')
    fields: dict[str, Any] = {
        'kind': kind,
        'title': str(title),
        'body': body,
        'source': source,
        'permalink': fm.pop('permalink', None),
        'layout': fm.pop('layout', None),
    }
    if kind == DocumentKind.post:
        categories = fm.pop('categories', None)
        if categories is None and 'category' in fm:
            categories = [fm.pop('category')]
        fields['categories'] = categories
        fields['date'] = fm.pop('date', None) or (m.group(1) if m else None)
    else:
        ignored = [k for k in POST_ONLY_KEYS if k in fm]
        if ignored:
            logger.debug("%s: page ignores %s", source, ", ".join(ignored))
    fields['frontmatter'] = fm
    return Document(**fields)


def parse_file(path: Path, root: Path = None, posts_dir: str = '_posts') -> Document:
    """Parse one markdown file into a Document; files under posts_dir are posts."""
    root = root or path.parent
    source = _source_name(path, root)
    kind = DocumentKind.post if _in_posts_dir(Path(source), posts_dir) else DocumentKind.page
    try:
        fm, body = _strip_frontmatter(path.read_text(encoding='utf-8'))
        return build_document(fm, body, source, kind, path.stem)
    except ValueError as e:
        raise FrontmatterError(source, str(e)) from e


def load_documents(path: Path, posts_dir: str = '_posts', exclude: set[str] = frozenset()) -> list[Document]:
    """Parse all markdown files under path (file or directory), in sorted path order."""
    root = path if path.is_dir() else path.parent
    docs = [parse_file(p, root, posts_dir) for p in discover_files(path, posts_dir, exclude)]
    logger.info("loaded %d document(s) from %s", len(docs), path)
    return docs
