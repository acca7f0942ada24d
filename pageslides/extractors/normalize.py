"""Markdown clean-up applied to every slide body.

``normalize_content`` is idempotent: running it on its own output returns the
same string.  Fenced code is left alone apart from trailing whitespace.
"""

from __future__ import annotations

import re

from pageslides.items import Slide

_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&amp;", "&"),
)

_FENCE_RE = re.compile(r"^ {0,3}(```|~~~)")
_HEADING_SPACING_RE = re.compile(r"^(#+)(?!#)[ \t]*(?=\S)")
_LIST_MARKER_RE = re.compile(r"^([ \t]*)[*+-][ \t]+(?=\S)")
_THEMATIC_BREAK_RE = re.compile(r"^[ \t]*([*+_-])(?:[ \t]*\1){2,}[ \t]*$")
_EXCESSIVE_BLANK_LINES_RE = re.compile(r"\n{3,}")
_PLACEHOLDER_HEADING_RE = re.compile(r"^Heading\s+([23])(?![0-9])\s*:*\s*(\S.*)$", re.IGNORECASE)


def decode_entities(text: str) -> str:
    """Decode the handful of entities rendered pages leak, until stable."""
    while True:
        decoded = text
        for entity, char in _ENTITIES:
            decoded = decoded.replace(entity, char)
        if decoded == text:
            return decoded
        text = decoded


def _fix_line(line: str) -> str:
    if _THEMATIC_BREAK_RE.match(line):
        return line
    line = _HEADING_SPACING_RE.sub(r"\1 ", line)
    return _LIST_MARKER_RE.sub(r"\1- ", line)


def normalize_content(text: str) -> str:
    """Return *text* as clean Markdown.

    - CRLF line endings become LF
    - ``&nbsp; &lt; &gt; &quot; &amp;`` are decoded
    - trailing whitespace is stripped from every line
    - outside fences, ``#`` runs and ``*``/``+``/``-`` list markers get exactly
      one following space (markers are rewritten to ``-``)
    - runs of blank lines collapse to one
    """
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = decode_entities(text).strip()

    lines: list[str] = []
    in_fence = False
    for raw in text.split("\n"):
        line = raw.rstrip()
        if _FENCE_RE.match(line):
            in_fence = not in_fence
        elif not in_fence:
            line = _fix_line(line)
        lines.append(line)

    text = "\n".join(lines)
    text = _EXCESSIVE_BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()


def expand_placeholder_headings(text: str) -> str:
    """Turn ``Heading 2: x`` / ``Heading 3: x`` lines into ``## x`` / ``### x``."""
    if not text:
        return ""
    lines: list[str] = []
    in_fence = False
    for line in text.split("\n"):
        if _FENCE_RE.match(line):
            in_fence = not in_fence
        elif not in_fence:
            m = _PLACEHOLDER_HEADING_RE.match(line)
            if m:
                line = f"{'#' * int(m.group(1))} {m.group(2).strip()}"
        lines.append(line)
    return "\n".join(lines)


def normalize_slide(slide: Slide, *, placeholders: bool = False) -> Slide:
    """Return a copy of *slide* with normalized content, subslides included."""
    content = slide.content
    if placeholders:
        content = expand_placeholder_headings(content)
    return slide.model_copy(
        update={
            "content": normalize_content(content),
            "subslides": tuple(
                normalize_slide(sub, placeholders=placeholders) for sub in slide.subslides
            ),
        },
    )
