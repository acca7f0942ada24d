"""Turn sibling ranges into slide bodies, and boundaries into slides."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from bs4 import Tag

from pageslides.document import has_text, siblings_between
from pageslides.errors import ElementConversionError
from pageslides.extractors.classify import NodeKind, classify, is_divider, is_image
from pageslides.extractors.convert import convert, heading_title
from pageslides.extractors.normalize import normalize_slide
from pageslides.extractors.subslides import split_subslides, subslide_title
from pageslides.items import Slide, SourceType
from pageslides.profiles import ExtractionPolicy, default_policy
from pageslides.settings import SUBSLIDE_FALLBACK_TITLE

logger = logging.getLogger(__name__)


def _is_visual(node: Tag) -> bool:
    """Images and dividers carry no text but still render."""
    return is_image(node) or is_divider(node) or node.find("hr") is not None


def _already_present(fragment: str, content: str) -> bool:
    pattern = r"(?:^|\n)" + re.escape(fragment) + r"(?:\n|$)"
    return re.search(pattern, content) is not None


def assemble(
    start: Tag,
    end: Tag | None,
    policy: ExtractionPolicy | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Markdown for every element sibling strictly between *start* and *end*.

    Consecutive list fragments are joined by a single newline (when the policy
    asks for tight lists), everything else by a blank line.  A fragment of at
    least ``policy.dedup_min_words`` words that already appears as a whole
    block in the accumulated content is dropped.
    """
    policy = policy or default_policy()
    log = log or logger
    content = ""
    previous_kind: NodeKind | None = None

    for node in siblings_between(start, end):
        if not has_text(node) and not _is_visual(node):
            continue
        classification = classify(node)
        try:
            fragment = convert(node, classification, policy)
        except ElementConversionError as exc:
            log.debug("ElementConversionFailure: %s", exc)
            continue
        fragment = fragment.strip("\n")
        if not fragment.strip():
            continue
        if len(fragment.split()) >= policy.dedup_min_words and _already_present(fragment, content):
            log.debug("Dropping duplicate fragment: %.60r", fragment)
            continue

        if not content:
            content = fragment
        elif (
            policy.tight_lists
            and classification.kind is NodeKind.LIST
            and previous_kind is NodeKind.LIST
        ):
            content += "\n" + fragment
        else:
            content += "\n\n" + fragment
        previous_kind = classification.kind

    return content


def assemble_slides(
    boundaries: list[Tag],
    source_type: SourceType,
    policy: ExtractionPolicy | None = None,
    log: logging.Logger | None = None,
    *,
    title_of: Callable[[Tag], str] = heading_title,
    placeholders: bool = False,
) -> list[Slide]:
    """Build one slide per boundary, in document order.

    Each slide runs from its boundary to the next one (or the last sibling).
    Slides without a title are skipped; so are slides with neither body nor
    subslides when ``policy.drop_empty_slides`` is set.
    """
    policy = policy or default_policy(source_type)
    log = log or logger
    slides: list[Slide] = []

    for i, boundary in enumerate(boundaries):
        end = boundaries[i + 1] if i + 1 < len(boundaries) else None
        title = title_of(boundary)
        if not title:
            log.debug("Skipping slide boundary <%s> with empty title", boundary.name)
            continue

        body, extents = split_subslides(boundary, end)
        subslides = []
        for index, extent in enumerate(extents, start=1):
            sub_title = subslide_title(extent.start) or SUBSLIDE_FALLBACK_TITLE.format(index=index)
            subslides.append(
                Slide(
                    title=sub_title,
                    content=assemble(extent.start, extent.end, policy, log),
                    source_type=source_type,
                ),
            )

        slide = Slide(
            title=title,
            content=assemble(body.start, body.end, policy, log),
            source_type=source_type,
            subslides=tuple(subslides),
        )
        slide = normalize_slide(slide, placeholders=placeholders)
        if policy.drop_empty_slides and not slide.content and not slide.has_subslides():
            log.debug("Dropping empty slide %r", slide.title)
            continue
        slides.append(slide)

    log.debug("Assembled %d slides from %d boundaries", len(slides), len(boundaries))
    return slides
