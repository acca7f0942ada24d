"""Per-kind converters from classified nodes to Markdown fragments.

Each converter takes a node (and, where it matters, the extraction policy)
and returns a Markdown string; an empty string means "nothing to emit".
:func:`convert` dispatches on :class:`~pageslides.extractors.classify.NodeKind`.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from urllib.parse import urljoin

from bs4 import Tag

from pageslides.document import element_children, has_marker, node_text
from pageslides.errors import ElementConversionError
from pageslides.extractors.classify import Classification, NodeKind
from pageslides.extractors.lists import list_to_markdown
from pageslides.profiles import ExtractionPolicy
from pageslides.settings import IMAGE_FALLBACK_ALT

_LANG_CLASS_RE = re.compile(r"language-([\w+#-]+)")
_HEADING_PLACEHOLDER_RE = re.compile(r"^Heading\s+[1-6](?![0-9])\s*:*\s*", re.IGNORECASE)

_STRONG_TAGS = ("strong", "b")
_EM_TAGS = ("em", "i")
_CODE_LANGUAGE_MARKER = "notion-code-language"
_TABLE_ROW_MARKERS = ("notion-table-row", "notion-collection-table-row")


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------

def heading_title(node: Tag) -> str:
    """Heading text with any ``Heading N:`` placeholder prefix removed."""
    return _HEADING_PLACEHOLDER_RE.sub("", node_text(node)).strip()


def heading_to_markdown(node: Tag, level: int) -> str:
    title = heading_title(node)
    if not title:
        return ""
    return f"{'#' * level} {title}"


# ---------------------------------------------------------------------------
# Code blocks
# ---------------------------------------------------------------------------

def code_language(node: Tag) -> str:
    """Language from a ``language-xxx`` class or a Notion language label."""
    candidates = [node, node.find("pre"), node.find("code")]
    for el in candidates:
        if not isinstance(el, Tag):
            continue
        for cls in el.get("class") or []:
            m = _LANG_CLASS_RE.match(str(cls))
            if m:
                return m.group(1).lower()
    for el in node.find_all(True):
        if has_marker(el, _CODE_LANGUAGE_MARKER):
            return node_text(el).strip().lower()
    return ""


def code_block_to_markdown(node: Tag) -> str:
    language = code_language(node)
    pre = node if node.name == "pre" else node.find("pre")
    code = (pre if isinstance(pre, Tag) else node).find("code")
    source = code if isinstance(code, Tag) else (pre if isinstance(pre, Tag) else node)
    # The language label lives next to the code in Notion blocks
    text = node_text(source, skip=lambda el: has_marker(el, _CODE_LANGUAGE_MARKER))
    return f"```{language}\n{text}\n```"


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def _escape_cell(text: str) -> str:
    text = " ".join(text.split())
    return text.replace("|", "\\|") or " "


def _table_rows(node: Tag) -> list[list[str]]:
    if node.name == "table" or node.find("tr") is not None:
        rows = []
        for tr in node.find_all("tr"):
            cells = [node_text(c) for c in tr.find_all(["td", "th"], recursive=False)]
            if cells:
                rows.append(cells)
        return rows
    # Notion tables and div grids: each child element is a row
    row_nodes = [
        el for el in node.find_all(True)
        if any(has_marker(el, m) for m in _TABLE_ROW_MARKERS)
    ] or element_children(node)
    return [[node_text(c) for c in element_children(row)] for row in row_nodes if element_children(row)]


def table_to_markdown(node: Tag) -> str:
    """Pipe table; the first row is the header, short rows are padded."""
    rows = _table_rows(node)
    if not rows:
        return ""
    width = max(len(r) for r in rows)
    lines = []
    for i, row in enumerate(rows):
        cells = [_escape_cell(c) for c in row] + [" "] * (width - len(row))
        lines.append("| " + " | ".join(cells) + " |")
        if i == 0:
            lines.append("| " + " | ".join(["---"] * width) + " |")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Blockquotes
# ---------------------------------------------------------------------------

def blockquote_to_markdown(node: Tag) -> str:
    direct = "".join(str(s) for s in node.find_all(string=True, recursive=False)).strip()
    children = element_children(node)
    if children and not direct:
        text = "\n".join(t for t in (node_text(c) for c in children) if t)
    else:
        text = node_text(node)
    if not text:
        return ""
    return "\n".join(f"> {line}" for line in text.split("\n"))


# ---------------------------------------------------------------------------
# Paragraphs
# ---------------------------------------------------------------------------

def _wrap_first(text: str, span: str, mark: str) -> str:
    """Wrap the first word-bounded occurrence of *span* in *mark*."""
    if not span:
        return text
    pattern = re.compile(r"(?<![\w*`])" + re.escape(span) + r"(?![\w*`])")
    return pattern.sub(lambda m: f"{mark}{m.group(0)}{mark}", text, count=1)


def paragraph_to_markdown(node: Tag, policy: ExtractionPolicy | None = None) -> str:
    text = node_text(node)
    if not text:
        img = node.find("img")
        if isinstance(img, Tag):
            return image_to_markdown(img, policy)
        return ""
    seen: set[tuple[str, str]] = set()
    for tags, mark in ((_STRONG_TAGS, "**"), (_EM_TAGS, "*"), (("code",), "`")):
        for el in node.find_all(list(tags)):
            span = node_text(el)
            if not span or "\n" in span or (span, mark) in seen:
                continue
            seen.add((span, mark))
            text = _wrap_first(text, span, mark)
    return text


# ---------------------------------------------------------------------------
# Images, dividers, fallback
# ---------------------------------------------------------------------------

def image_source(img: Tag, base_url: str = "") -> str:
    src = str(img.get("src") or img.get("data-src") or "").strip()
    if not src:
        srcset = str(img.get("srcset") or "").strip()
        if srcset:
            src = srcset.split(",")[0].strip().split(" ")[0]
    if src and base_url:
        src = urljoin(base_url, src)
    return src


def image_to_markdown(node: Tag, policy: ExtractionPolicy | None = None) -> str:
    img = node if node.name == "img" else node.find("img")
    if not isinstance(img, Tag):
        return ""
    src = image_source(img, policy.base_url if policy else "")
    if not src:
        return ""
    alt = str(img.get("alt") or img.get("title") or "").strip() or IMAGE_FALLBACK_ALT
    return f"![{alt}]({src})"


def divider_to_markdown(policy: ExtractionPolicy | None = None) -> str:
    return "---" if policy is not None and policy.emit_dividers else ""


def fallback_text(node: Tag) -> str:
    text = node_text(node).strip()
    if text.startswith("#"):
        return ""
    return text


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

_Converter = Callable[[Tag, Classification, ExtractionPolicy], str]

_CONVERTERS: dict[NodeKind, _Converter] = {
    NodeKind.HEADING: lambda n, c, p: heading_to_markdown(n, c.level),
    NodeKind.LIST: lambda n, c, p: list_to_markdown(n),
    NodeKind.CODE_BLOCK: lambda n, c, p: code_block_to_markdown(n),
    NodeKind.TABLE: lambda n, c, p: table_to_markdown(n),
    NodeKind.BLOCKQUOTE: lambda n, c, p: blockquote_to_markdown(n),
    NodeKind.PARAGRAPH: lambda n, c, p: paragraph_to_markdown(n, p),
    NodeKind.IMAGE: lambda n, c, p: image_to_markdown(n, p),
    NodeKind.DIVIDER: lambda n, c, p: divider_to_markdown(p),
    NodeKind.UNKNOWN: lambda n, c, p: fallback_text(n),
}


def convert(node: Tag, classification: Classification, policy: ExtractionPolicy) -> str:
    """Convert *node* to Markdown according to *classification*.

    Raises:
        ElementConversionError: the converter failed on this node.
    """
    converter = _CONVERTERS[classification.kind]
    try:
        return converter(node, classification, policy)
    except Exception as exc:
        raise ElementConversionError(
            f"could not convert <{node.name}> as {classification.kind.value}: {exc}",
            kind=classification.kind.value,
            tag=node.name or "",
        ) from exc
