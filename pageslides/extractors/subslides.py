"""Level-2 boundary detection inside one slide.

A slide runs from its level-1 heading to the next one.  The first level-2
heading in that range ends the slide body; every level-2 heading then opens a
subslide that runs to the next level-2 heading or the slide end.  Subslides
never nest.
"""

from __future__ import annotations

from dataclasses import dataclass

from bs4 import Tag

from pageslides.document import node_text, siblings_between
from pageslides.extractors.classify import HEADING2_PREFIX_RE, is_subslide_heading


@dataclass(frozen=True)
class Extent:
    """Sibling range ``(start, end)``: content lies strictly between them.

    ``end`` is None when the range runs to the last sibling.
    """

    start: Tag
    end: Tag | None


def find_subslide_headings(start: Tag, end: Tag | None) -> list[Tag]:
    """Level-2 headings among the siblings after *start*, before *end*."""
    return [node for node in siblings_between(start, end) if is_subslide_heading(node)]


def subslide_title(node: Tag) -> str:
    """Heading text without a leading ``Heading 2`` / ``Heading 2:`` prefix."""
    return HEADING2_PREFIX_RE.sub("", node_text(node), count=1).strip()


def split_subslides(start: Tag, end: Tag | None) -> tuple[Extent, list[Extent]]:
    """Split one slide range into its body extent and subslide extents."""
    headings = find_subslide_headings(start, end)
    if not headings:
        return Extent(start, end), []
    body = Extent(start, headings[0])
    bounds = [*headings[1:], end]
    return body, [Extent(h, nxt) for h, nxt in zip(headings, bounds)]
