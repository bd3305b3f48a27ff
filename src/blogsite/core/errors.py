"""Build errors raised while loading and resolving site content.

Every error here is fatal to the current build. None of them are transient,
so nothing in the pipeline retries them.
"""


class ContentError(Exception):
    """Base class for content problems that abort a build."""


class MissingPermalinkError(ContentError):
    """A page has no explicit permalink."""

    def __init__(self, source: str):
        self.source = source
        super().__init__(f"{source}: page has no permalink")


class MissingDateError(ContentError):
    """A post has no date."""

    def __init__(self, source: str):
        self.source = source
        super().__init__(f"{source}: post has no date")


class DuplicatePermalinkError(ContentError):
    """Two documents resolve to the same URL path."""

    def __init__(self, path: str, first: str, second: str):
        self.path = path
        self.first = first
        self.second = second
        super().__init__(f"{path}: claimed by both {first} and {second}")


class InvalidPermalinkError(ContentError):
    """A permalink climbs out of the site root with a '..' segment."""

    def __init__(self, source: str, path: str):
        self.source = source
        self.path = path
        super().__init__(f"{source}: permalink {path} contains '..'")


class OutputCollisionError(ContentError):
    """Two distinct URLs would be written to the same output file."""

    def __init__(self, path: str, first: str, second: str):
        self.path = path
        self.first = first
        self.second = second
        super().__init__(f"{path}: written by both {first} and {second}")


class FrontmatterError(ContentError):
    """A source file has unreadable or malformed front matter."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class SiteResolveError(ContentError):
    """Aggregate of every error collected during a single resolve pass."""
    stage = "resolving"

    def __init__(self, errors: list[ContentError]):
        self.errors = list(errors)
        noun = "error" if len(self.errors) == 1 else "errors"
        super().__init__(f"{len(self.errors)} {noun} while {self.stage} site")


class SiteRenderError(SiteResolveError):
    """Aggregate of output-file clashes found before anything is written."""
    stage = "rendering"
