"""Content records handed to the resolver and the index it produces"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)


class DocumentKind(str, Enum):
    """Posts are dated and categorized; pages are standalone."""
    post = "post"
    page = "page"


def parse_date(value: Any) -> Optional[datetime]:
    """Coerce a front matter date into a timezone-aware datetime (naive values are UTC)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    elif isinstance(value, str):
        parsed = _parse_date_str(value.strip())
    else:
        raise ValueError(f"unsupported date value {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_date_str(text: str) -> datetime:
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"unrecognized date {text!r}") from None


class Document(BaseModel):
    """A unit of publishable content: a post or a page."""
    model_config = ConfigDict(frozen=True)

    kind:        DocumentKind
    title:       str
    body:        str = ""
    permalink:   Optional[str] = None
    date:        Optional[datetime] = None
    categories:  tuple[str, ...] = ()
    source:      str = "<memory>"        # file path or caller label, used in error messages
    layout:      Optional[str] = None
    frontmatter: dict[str, Any] = Field(default_factory=dict)

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value):
        return parse_date(value)

    @field_validator("categories", mode="before")
    @classmethod
    def _coerce_categories(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            value = value.split()
        return tuple(dict.fromkeys(str(c) for c in value))

    @field_validator("permalink", mode="before")
    @classmethod
    def _blank_permalink(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _page_has_no_post_fields(self):
        if self.kind == DocumentKind.page and (self.date is not None or self.categories):
            raise ValueError("pages carry no date or categories")
        return self

    @property
    def is_post(self) -> bool:
        return self.kind == DocumentKind.post


@dataclass(frozen=True)
class SiteIndex:
    """Resolved, read-only view of a site: URLs, post order, and category listings."""
    by_url:            Mapping[str, Document] = field(default_factory=lambda: MappingProxyType({}))
    posts_by_date:     tuple[Document, ...] = ()
    posts_by_category: Mapping[str, tuple[Document, ...]] = field(default_factory=lambda: MappingProxyType({}))
    pages:             tuple[Document, ...] = ()

    def get(self, url: str) -> Optional[Document]:
        return self.by_url.get(url)

    def categories(self) -> list[str]:
        """Category names in first-seen order of posts_by_date."""
        return list(self.posts_by_category)

    def __contains__(self, url: str) -> bool:
        return url in self.by_url

    def __len__(self) -> int:
        return len(self.by_url)
