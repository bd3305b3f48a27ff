"""Content resolution: route documents to URLs and derive post orderings.

resolve() is a pure function. It reads the whole input, validates it in a
single pass, and either returns a complete SiteIndex or raises
SiteResolveError carrying every problem it found.
"""

import logging
from types import MappingProxyType
from typing import Iterable, Optional

from blogsite.core.errors import (
    ContentError,
    DuplicatePermalinkError,
    InvalidPermalinkError,
    MissingDateError,
    MissingPermalinkError,
    SiteResolveError,
)
from blogsite.core.models import Document, DocumentKind, SiteIndex
from blogsite.core.utils.slug import slugify


logger = logging.getLogger(__name__)


def post_permalink(doc: Document) -> str:
    """Derive /YYYY/MM/DD/<slug>/ from a post's date (in its own offset) and title."""
    d = doc.date
    return f"/{d.year}/{d.month:02}/{d.day:02}/{slugify(doc.title)}/"


def normalize_permalink(path: str) -> str:
    """Ensure an explicit permalink is rooted at '/'."""
    path = path.strip()
    return path if path.startswith('/') else f'/{path}'


def _permalink_for(doc: Document, errors: list[ContentError]) -> Optional[str]:
    """Return the resolved URL for doc, or None after recording why it has none."""
    if doc.kind == DocumentKind.post and doc.date is None:
        errors.append(MissingDateError(doc.source))
        if not doc.permalink:
            return None
    elif not doc.permalink:
        if doc.kind == DocumentKind.page:
            errors.append(MissingPermalinkError(doc.source))
            return None
        return post_permalink(doc)
    url = normalize_permalink(doc.permalink)
    if '..' in url.split('/'):
        errors.append(InvalidPermalinkError(doc.source, url))
        return None
    return url


def resolve(documents: Iterable[Document]) -> SiteIndex:
    """Build a SiteIndex from documents, or raise SiteResolveError with every error found."""
    errors: list[ContentError] = []
    owners: dict[str, Document] = {}
    posts: list[Document] = []
    pages: list[Document] = []

    for doc in documents:
        url = _permalink_for(doc, errors)
        if url is None:
            continue
        if url in owners:
            errors.append(DuplicatePermalinkError(url, owners[url].source, doc.source))
            continue
        if url != doc.permalink:
            doc = doc.model_copy(update={"permalink": url})
        owners[url] = doc
        (posts if doc.is_post else pages).append(doc)

    if errors:
        logger.debug("resolve failed with %d error(s)", len(errors))
        raise SiteResolveError(errors)

    # sorted() is stable under reverse=True, so same-date posts keep input order
    by_date = tuple(sorted(posts, key=lambda p: p.date, reverse=True))

    by_category: dict[str, list[Document]] = {}
    for post in by_date:
        for category in post.categories:
            by_category.setdefault(category, []).append(post)

    logger.debug("resolved %d post(s), %d page(s), %d categor(ies)",
                 len(posts), len(pages), len(by_category))
    return SiteIndex(
        by_url=MappingProxyType(dict(owners)),
        posts_by_date=by_date,
        posts_by_category=MappingProxyType({c: tuple(ps) for c, ps in by_category.items()}),
        pages=tuple(pages),
    )
