"""Slides from a rendered Notion page.

Every outermost level-1 heading (``h1`` or a Notion header block) opens a
slide; level-2 headings inside a slide open subslides.
"""

from __future__ import annotations

import logging

from bs4 import Tag

from pageslides.document import Document, outermost
from pageslides.errors import NoBoundariesFound
from pageslides.extractors.assemble import assemble_slides
from pageslides.extractors.classify import is_heading
from pageslides.items import Slide, SourceType
from pageslides.profiles import ExtractionPolicy, default_policy


def find_slide_boundaries(document: Document) -> list[Tag]:
    """Outermost level-1 headings in document order.

    Raises:
        NoBoundariesFound: the page has no level-1 heading.
    """
    # Tag and marker checks only: no text is computed per element here
    headings = [el for el in document.elements() if is_heading(el, 1)]
    if not headings:
        raise NoBoundariesFound("no level-1 headings found")
    return outermost(headings)


class NotionExtractor:
    """Extract slides from a Notion page.

    Args:
        document: Parsed page.
        policy:   Extraction policy; defaults to the Notion policy, which
                  omits dividers.
        logger:   Logger to report through; defaults to this module's.
    """

    source_type = SourceType.NOTION

    def __init__(
        self,
        document: Document,
        policy: ExtractionPolicy | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.document = document
        self.policy = policy or default_policy(self.source_type)
        self.logger = logger or logging.getLogger(__name__)

    def extract(self) -> list[Slide]:
        try:
            boundaries = find_slide_boundaries(self.document)
        except NoBoundariesFound:
            self.logger.warning("No slide boundaries (level-1 headings) found on Notion page")
            return []
        self.logger.debug("Found %d slide boundaries", len(boundaries))
        return assemble_slides(
            boundaries,
            self.source_type,
            self.policy,
            self.logger,
            placeholders=True,
        )
