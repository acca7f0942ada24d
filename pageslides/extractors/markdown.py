"""Slides from Markdown: rendered pages (GitHub, GitLab) and raw text.

Rendered pages go through the same node pipeline as Notion, with ``h1``
elements inside the Markdown container as slide boundaries.  Raw text is split
line by line: ``#`` headings open slides, ``##`` headings open subslides, and
fenced code is never split.  Without any ``#`` heading the text is cut at
slide delimiters (``---``, ``<!-- slide -->``, ...), and failing that becomes
a single slide.
"""

from __future__ import annotations

import logging
import re

from bs4 import Tag

from pageslides.document import Document, has_marker, outermost
from pageslides.errors import NoBoundariesFound
from pageslides.extractors.assemble import assemble_slides
from pageslides.extractors.classify import HEADING2_PREFIX_RE
from pageslides.extractors.normalize import normalize_slide
from pageslides.items import Slide, SourceType
from pageslides.profiles import ExtractionPolicy, default_policy
from pageslides.settings import (
    MARKDOWN_ARTICLE_FALLBACK,
    RAW_MARKDOWN_FALLBACK_TITLE,
    RENDERED_MARKDOWN_CONTAINERS,
    SUBSLIDE_FALLBACK_TITLE,
)

_HEADING_WRAPPER = "markdown-heading"

_FENCE_RE = re.compile(r"^ {0,3}(```|~~~)")
_H1_RE = re.compile(r"^#[ \t]+(\S.*?)[ \t#]*$")
_H2_RE = re.compile(r"^##[ \t]+(\S.*?)[ \t#]*$")
_ANY_HEADING_RE = re.compile(r"^#+[ \t]+(\S.*?)[ \t#]*$")

# Tried in order; the first that splits the text into two or more parts wins
_SLIDE_DELIMITERS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^---[ \t]*$"),
    re.compile(r"^----[ \t]*$"),
    re.compile(r"^\*\*\*[ \t]*$"),
    re.compile(r"^[ \t]*<!--\s*slide\s*-->[ \t]*$", re.IGNORECASE),
    re.compile(r"^[ \t]*<!--\s*next\s*-->[ \t]*$", re.IGNORECASE),
)


def find_markdown_container(document: Document, *, allow_article: bool = True) -> Tag | None:
    """The element holding rendered Markdown, most specific selector first."""
    selectors = list(RENDERED_MARKDOWN_CONTAINERS)
    if allow_article:
        selectors.append(MARKDOWN_ARTICLE_FALLBACK)
    for selector in selectors:
        container = document.find(selector)
        if container is not None:
            return container
    return None


def _lift_heading(node: Tag) -> Tag:
    """GitHub nests headings in a wrapper div; the wrapper is the sibling."""
    parent = node.parent
    if isinstance(parent, Tag) and has_marker(parent, _HEADING_WRAPPER):
        return parent
    return node


# ---------------------------------------------------------------------------
# Rendered Markdown
# ---------------------------------------------------------------------------

class RenderedMarkdownExtractor:
    """Extract slides from a rendered Markdown page, split at ``h1``."""

    source_type = SourceType.RENDERED_MARKDOWN

    def __init__(
        self,
        document: Document,
        policy: ExtractionPolicy | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.document = document
        self.policy = policy or default_policy(self.source_type)
        self.logger = logger or logging.getLogger(__name__)

    def find_boundaries(self, container: Tag) -> list[Tag]:
        headings = [_lift_heading(h) for h in container.find_all("h1")]
        if not headings:
            raise NoBoundariesFound("no h1 elements in the Markdown container")
        return outermost(headings)

    def extract(self) -> list[Slide]:
        container = find_markdown_container(self.document) or self.document.root
        try:
            boundaries = self.find_boundaries(container)
        except NoBoundariesFound:
            self.logger.warning("No slide boundaries (h1 elements) found in rendered Markdown")
            return []
        self.logger.debug("Found %d potential slides (h1 elements)", len(boundaries))
        return assemble_slides(boundaries, self.source_type, self.policy, self.logger)


# ---------------------------------------------------------------------------
# Raw Markdown
# ---------------------------------------------------------------------------

def _fence_flags(lines: list[str]) -> list[bool]:
    """Per line: True when the line is a fence or inside fenced code."""
    flags: list[bool] = []
    in_fence = False
    for line in lines:
        if _FENCE_RE.match(line):
            flags.append(True)
            in_fence = not in_fence
        else:
            flags.append(in_fence)
    return flags


def _split_headings(
    lines: list[str],
    fenced: list[bool],
    pattern: re.Pattern[str],
) -> tuple[list[str], list[tuple[str, list[str]]]]:
    """Split *lines* at heading lines matching *pattern* outside fences.

    Returns the lines before the first heading and ``(title, body_lines)``
    for each heading.
    """
    preamble: list[str] = []
    sections: list[tuple[str, list[str]]] = []
    for line, in_fence in zip(lines, fenced):
        m = None if in_fence else pattern.match(line)
        if m:
            sections.append((m.group(1).strip(), []))
        elif sections:
            sections[-1][1].append(line)
        else:
            preamble.append(line)
    return preamble, sections


def _split_delimiter(
    lines: list[str],
    fenced: list[bool],
    delimiter: re.Pattern[str],
) -> list[list[str]]:
    segments: list[list[str]] = [[]]
    for line, in_fence in zip(lines, fenced):
        if not in_fence and delimiter.match(line):
            segments.append([])
        else:
            segments[-1].append(line)
    return segments


class RawMarkdownExtractor:
    """Extract slides from Markdown source text."""

    source_type = SourceType.RAW_MARKDOWN

    def __init__(
        self,
        document: Document | str,
        policy: ExtractionPolicy | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if isinstance(document, str):
            document = Document.from_markdown(document)
        self.document = document
        self.policy = policy or default_policy(self.source_type)
        self.logger = logger or logging.getLogger(__name__)

    def _slide(self, title: str, lines: list[str]) -> Slide:
        fenced = _fence_flags(lines)
        preamble, sections = _split_headings(lines, fenced, _H2_RE)
        if sections:
            self.logger.debug(
                "Found %d subslides (## headings) for slide %r", len(sections), title,
            )
        subslides = []
        for index, (heading, body) in enumerate(sections, start=1):
            sub_title = (
                HEADING2_PREFIX_RE.sub("", heading, count=1).strip()
                or SUBSLIDE_FALLBACK_TITLE.format(index=index)
            )
            subslides.append(
                Slide(title=sub_title, content="\n".join(body), source_type=self.source_type),
            )
        slide = Slide(
            title=title,
            content="\n".join(preamble),
            source_type=self.source_type,
            subslides=tuple(subslides),
        )
        return normalize_slide(slide)

    def _keep(self, slides: list[Slide]) -> list[Slide]:
        kept = []
        for slide in slides:
            if not slide.is_valid():
                continue
            if self.policy.drop_empty_slides and not slide.content and not slide.has_subslides():
                self.logger.debug("Dropping empty slide %r", slide.title)
                continue
            kept.append(slide)
        return kept

    def _from_delimiters(self, lines: list[str], fenced: list[bool]) -> list[Slide] | None:
        for delimiter in _SLIDE_DELIMITERS:
            segments = _split_delimiter(lines, fenced, delimiter)
            if len(segments) < 2:
                continue
            self.logger.debug("Found slide delimiter %r", delimiter.pattern)
            slides = []
            for index, segment in enumerate(segments, start=1):
                title = f"Slide {index}"
                for line, in_fence in zip(segment, _fence_flags(segment)):
                    m = None if in_fence else _ANY_HEADING_RE.match(line)
                    if m:
                        title = m.group(1).strip()
                        break
                slides.append(self._slide(title, segment))
            return slides
        return None

    def extract(self) -> list[Slide]:
        text = self.document.text().replace("\r\n", "\n").replace("\r", "\n")
        lines = text.split("\n")
        fenced = _fence_flags(lines)

        _, sections = _split_headings(lines, fenced, _H1_RE)
        if sections:
            self.logger.debug("Found %d slides (# headings)", len(sections))
            return self._keep([self._slide(title, body) for title, body in sections])

        self.logger.debug("No # headings, trying slide delimiters")
        slides = self._from_delimiters(lines, fenced)
        if slides is not None:
            return self._keep(slides)

        return self._keep([self._slide(RAW_MARKDOWN_FALLBACK_TITLE, lines)])


# ---------------------------------------------------------------------------
# Auto
# ---------------------------------------------------------------------------

class MarkdownExtractor:
    """Pick the rendered or raw strategy depending on what the page holds."""

    source_type = SourceType.MARKDOWN

    def __init__(
        self,
        document: Document,
        policy: ExtractionPolicy | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.document = document
        self.policy = policy
        self.logger = logger or logging.getLogger(__name__)

    def extract(self) -> list[Slide]:
        if not self.document.is_text and find_markdown_container(self.document) is not None:
            self.logger.debug("Detected rendered Markdown")
            strategy = RenderedMarkdownExtractor(self.document, self.policy, self.logger)
        else:
            self.logger.debug("Detected raw Markdown")
            strategy = RawMarkdownExtractor(self.document, self.policy, self.logger)
        return strategy.extract()
