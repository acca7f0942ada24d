"""Exception hierarchy for slide extraction."""

from __future__ import annotations


class PageSlidesError(RuntimeError):
    """Base class for all pageslides errors."""


class UnsupportedSourceError(PageSlidesError, LookupError):
    """Raised when no extractor is registered for a source type.

    Asking for an extractor of an unmapped type is a programming error, not a
    user-facing condition: detection returns ``None`` for unsupported pages.

    Attributes:
        source_type -- the value that could not be mapped
    """

    def __init__(self, message: str, source_type: object = None) -> None:
        super().__init__(message)
        self.source_type = source_type


class NoBoundariesFound(PageSlidesError):  # noqa: N818
    """Signal that a document has no level-1 headings to split slides on.

    Extractors catch this themselves and return an empty slide list.
    """


class ElementConversionError(PageSlidesError):
    """A single node could not be converted to Markdown.

    Attributes:
        kind -- the node kind the converter was handling
        tag  -- the node's tag name
    """

    def __init__(self, message: str, kind: str = "", tag: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.tag = tag
