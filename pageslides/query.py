"""pageslides.query - single-document extraction API.

No network access: callers hand over the page they already have.

Basic usage::

    from pageslides.query import extract

    result = extract(html, url="https://acme.notion.site/Roadmap-123")
    if result.ok:
        for slide in result.slides:
            print(slide.title)
    else:
        print(result.error)

    # Host-facing form, exactly one of "slides" / "error"
    payload = result.to_response()

Raw Markdown works the same way::

    result = extract(open("deck.md").read(), url="file:///deck.md")
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from pageslides.document import Document, parse_document
from pageslides.items import ExtractionResult, SourceType
from pageslides.profiles import ExtractionPolicy, default_policy
from pageslides.sources import detect_source, get_extractor
from pageslides.storage import SlideStore


def extract(
    document: str | BeautifulSoup | Document,
    url: str = "",
    *,
    source_type: SourceType | str | None = None,
    policy: ExtractionPolicy | None = None,
    logger: logging.Logger | None = None,
) -> ExtractionResult:
    """Extract slides from *document* and return an :class:`ExtractionResult`.

    Args:
        document:    HTML string, Markdown string, parsed ``BeautifulSoup``
                     tree or :class:`~pageslides.document.Document`.
        url:         The page's URL; drives source detection and resolves
                     relative image sources.
        source_type: Skip detection and use this extractor.
        policy:      Extraction policy; defaults to the policy for the
                     detected source type.
        logger:      Logger for diagnostics; defaults to this module's.

    Returns:
        ``ExtractionResult(slides=[...])`` on success (possibly empty when the
        page has no level-1 headings), ``ExtractionResult(error=...)`` when the
        source is unsupported or extraction failed.
    """
    log = logger or logging.getLogger(__name__)
    try:
        doc = parse_document(document)
        detected = SourceType(source_type) if source_type else detect_source(doc, url)
        if detected is None:
            log.info("Unsupported source: %s", url or "<document>")
            return ExtractionResult(
                error=f"Unsupported source: {url or 'document'} is not a Notion or Markdown page",
                source_type=SourceType.UNKNOWN,
            )
        if policy is None:
            policy = default_policy(detected, base_url=url)
        log.debug("Extracting %s (source=%s)", url or "<document>", detected.value)
        slides = get_extractor(detected, doc, policy=policy, logger=log).extract()
    except Exception as exc:
        log.exception("Extraction failed for %s", url or "<document>")
        return ExtractionResult(error=f"Extraction failed: {exc}", source_type=SourceType.ERROR)

    log.info("Extracted %d slides from %s", len(slides), url or "<document>")
    return ExtractionResult(slides=slides, source_type=detected)


def extract_and_save(
    document: str | BeautifulSoup | Document,
    url: str = "",
    *,
    store: SlideStore,
    source_type: SourceType | str | None = None,
    policy: ExtractionPolicy | None = None,
    logger: logging.Logger | None = None,
) -> ExtractionResult:
    """Like :func:`extract`, then hand non-empty successful results to *store*."""
    result = extract(document, url, source_type=source_type, policy=policy, logger=logger)
    if result.ok and result.slides:
        store.save_slides(result.slides)
    return result
