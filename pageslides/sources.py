"""Source detection and extractor dispatch.

Checks run from most to least reliable: the URL's domain, the URL's file
extension, then markers in the document itself.  A page no check recognises
is unsupported and detection returns ``None``.
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Protocol
from urllib.parse import urlparse

from pageslides.document import Document, element_children
from pageslides.errors import UnsupportedSourceError
from pageslides.extractors.markdown import (
    MarkdownExtractor,
    RawMarkdownExtractor,
    RenderedMarkdownExtractor,
    find_markdown_container,
)
from pageslides.extractors.notion import NotionExtractor
from pageslides.items import Slide, SourceType
from pageslides.profiles import ExtractionPolicy
from pageslides.settings import (
    MARKDOWN_EXTENSIONS,
    NOTION_DOMAINS,
    NOTION_PAGE_SELECTORS,
    RENDERED_MARKDOWN_HOSTS,
)

logger = logging.getLogger(__name__)


class Extractor(Protocol):
    source_type: SourceType

    def extract(self) -> list[Slide]: ...


_EXTRACTORS: dict[SourceType, type] = {
    SourceType.NOTION: NotionExtractor,
    SourceType.MARKDOWN: MarkdownExtractor,
    SourceType.RENDERED_MARKDOWN: RenderedMarkdownExtractor,
    SourceType.RAW_MARKDOWN: RawMarkdownExtractor,
}


def _host_matches(host: str, domains: tuple[str, ...]) -> bool:
    return any(host == d or host.endswith("." + d) for d in domains)


def _is_lone_pre(document: Document) -> bool:
    """Browsers render a plain-text file as a body holding one ``<pre>``."""
    children = element_children(document.root)
    return len(children) == 1 and children[0].name == "pre"


def detect_source(document: Document, url: str = "") -> SourceType | None:
    """Return the :class:`SourceType` for *document*, or None if unsupported."""
    parsed = urlparse(url or "")
    host = (parsed.hostname or "").lower()

    if host and _host_matches(host, NOTION_DOMAINS):
        return SourceType.NOTION
    if (
        host
        and _host_matches(host, RENDERED_MARKDOWN_HOSTS)
        and not document.is_text
        and find_markdown_container(document, allow_article=False) is not None
    ):
        return SourceType.RENDERED_MARKDOWN

    suffix = PurePosixPath(parsed.path).suffix.lower()
    if suffix in MARKDOWN_EXTENSIONS:
        return SourceType.MARKDOWN

    if document.is_text:
        return SourceType.RAW_MARKDOWN
    if any(document.find(sel) is not None for sel in NOTION_PAGE_SELECTORS):
        return SourceType.NOTION
    if find_markdown_container(document, allow_article=False) is not None:
        return SourceType.RENDERED_MARKDOWN
    if _is_lone_pre(document):
        return SourceType.RAW_MARKDOWN

    logger.debug("No source detected for %s", url or "<document>")
    return None


def get_extractor(
    source_type: SourceType | str,
    document: Document,
    *,
    policy: ExtractionPolicy | None = None,
    logger: logging.Logger | None = None,
) -> Extractor:
    """Instantiate the extractor registered for *source_type*.

    Raises:
        UnsupportedSourceError: *source_type* has no extractor.
    """
    # SourceType is a str enum, so plain strings hit the same keys
    extractor_cls = _EXTRACTORS.get(source_type)
    if extractor_cls is None:
        raise UnsupportedSourceError(
            f"Unsupported source type: {source_type!r}", source_type=source_type,
        )
    return extractor_cls(document, policy, logger)
