"""Node classifier: one ordered predicate table, first match wins.

Every node maps to exactly one :class:`Classification`.  The order of
``_RULES`` resolves look-alikes, e.g. a Notion quote block built from nested
divs is never reported as a grid table.

Usage::

    from pageslides.extractors.classify import NodeKind, classify

    c = classify(node)
    if c.kind is NodeKind.HEADING and c.level == 1:
        ...
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from bs4 import Tag

from pageslides.document import class_string, element_children, has_any_marker, node_text


class NodeKind(str, Enum):
    HEADING = "heading"
    LIST = "list"
    CODE_BLOCK = "code_block"
    TABLE = "table"
    BLOCKQUOTE = "blockquote"
    PARAGRAPH = "paragraph"
    IMAGE = "image"
    DIVIDER = "divider"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Classification:
    """Tagged variant produced by :func:`classify`."""

    kind: NodeKind
    level: int = 0        # heading level, 0 for every other kind
    ordered: bool = False  # numbered list


# ---------------------------------------------------------------------------
# Marker tables (class-name fragments emitted by the source pages)
# ---------------------------------------------------------------------------

_HEADING_MARKERS: dict[int, tuple[str, ...]] = {
    1: ("notion-header-block", "notion-h1"),
    2: ("notion-sub_header-block", "notion-sub-header-block", "notion-h2"),
    3: ("notion-sub_sub_header-block", "notion-sub-sub-header-block", "notion-h3"),
}

# GitHub wraps rendered headings: <div class="markdown-heading"><h2>…</h2><a/></div>
_HEADING_WRAPPER_MARKERS: tuple[str, ...] = ("markdown-heading",)

# Notion placeholder text for level-2 blocks, "Heading 2" / "Heading 2:"
HEADING2_PREFIX_RE = re.compile(r"^Heading\s+2(?![0-9])\s*:*\s*", re.IGNORECASE)

_LIST_MARKERS: tuple[str, ...] = (
    "notion-bulleted_list-block",
    "notion-numbered_list-block",
    "notion-to_do-block",
    "notion-toggle-block",
    "notion-list-block",
)
_ORDERED_LIST_MARKERS: tuple[str, ...] = ("notion-numbered_list-block",)
_NATIVE_LIST_TAGS = frozenset({"ul", "ol"})

_CODE_MARKERS: tuple[str, ...] = ("notion-code-block",)
# Matched as whole class tokens; "notion-table" is a prefix of
# "notion-table_of_contents-block"
_TABLE_CLASSES = frozenset({"notion-table", "notion-table-block", "notion-collection-table"})
_QUOTE_MARKERS: tuple[str, ...] = ("notion-quote-block", "notion-quote")
_PARAGRAPH_MARKERS: tuple[str, ...] = ("notion-text-block", "notion-text")
_IMAGE_MARKERS: tuple[str, ...] = ("notion-image-block",)
_DIVIDER_MARKERS: tuple[str, ...] = ("notion-divider-block",)

# Rows inspected when deciding whether a div is a grid table
_GRID_SAMPLE_ROWS = 3


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def is_heading(node: Tag, level: int) -> bool:
    """True if *node* is a level-*level* heading by tag, marker or wrapper.

    The ``Heading 2`` text prefix is not considered here; see
    :func:`is_subslide_heading`.
    """
    if node.name == f"h{level}":
        return True
    if has_any_marker(node, _HEADING_MARKERS.get(level, ())):
        return True
    if has_any_marker(node, _HEADING_WRAPPER_MARKERS):
        return node.find(f"h{level}", recursive=False) is not None
    return False


def has_heading2_prefix(node: Tag) -> bool:
    return bool(HEADING2_PREFIX_RE.match(node_text(node)))


def is_subslide_heading(node: Tag) -> bool:
    """Level-2 heading by tag, marker class, or ``Heading 2`` text prefix."""
    return is_heading(node, 2) or has_heading2_prefix(node)


def is_list(node: Tag) -> bool:
    return node.name in _NATIVE_LIST_TAGS or has_any_marker(node, _LIST_MARKERS)


def is_ordered_list(node: Tag) -> bool:
    return node.name == "ol" or has_any_marker(node, _ORDERED_LIST_MARKERS)


def is_code_block(node: Tag) -> bool:
    if node.name == "pre" or has_any_marker(node, _CODE_MARKERS):
        return True
    if node.find("pre") is not None:
        return True
    # A <code> child that carries all of the container's text; inline code
    # inside running prose stays a paragraph.
    code = node.find("code")
    if code is None:
        return False
    code_text = node_text(code)
    return bool(code_text) and code_text == node_text(node)


def is_blockquote(node: Tag) -> bool:
    return node.name == "blockquote" or has_any_marker(node, _QUOTE_MARKERS)


def is_paragraph(node: Tag) -> bool:
    return node.name == "p" or has_any_marker(node, _PARAGRAPH_MARKERS)


def _looks_like_grid(node: Tag) -> bool:
    """A div whose first rows all hold the same number (>= 2) of cells."""
    if node.name != "div" or has_any_marker(node, _PARAGRAPH_MARKERS):
        return False
    rows = element_children(node)
    if not rows:
        return False
    width = len(element_children(rows[0]))
    if width < 2:
        return False
    return all(
        len(element_children(row)) == width for row in rows[1:_GRID_SAMPLE_ROWS]
    )


def _wraps_table(node: Tag) -> bool:
    """A container whose only element child is a table, as GitHub renders them."""
    children = element_children(node)
    return len(children) == 1 and children[0].name == "table"


def is_table(node: Tag) -> bool:
    if is_blockquote(node):
        return False
    if node.name == "table" or not _TABLE_CLASSES.isdisjoint(class_string(node).split()):
        return True
    return _wraps_table(node) or _looks_like_grid(node)


def is_image(node: Tag) -> bool:
    return (
        node.name == "img"
        or has_any_marker(node, _IMAGE_MARKERS)
        or node.find("img") is not None
    )


def is_divider(node: Tag) -> bool:
    return node.name == "hr" or has_any_marker(node, _DIVIDER_MARKERS)


# ---------------------------------------------------------------------------
# Ordered table
# ---------------------------------------------------------------------------

_Rule = tuple[NodeKind, int, Callable[[Tag], bool]]

_RULES: tuple[_Rule, ...] = (
    (NodeKind.HEADING, 1, lambda n: is_heading(n, 1)),
    (NodeKind.HEADING, 2, is_subslide_heading),
    (NodeKind.HEADING, 3, lambda n: is_heading(n, 3)),
    (NodeKind.LIST, 0, is_list),
    (NodeKind.CODE_BLOCK, 0, is_code_block),
    (NodeKind.TABLE, 0, is_table),
    (NodeKind.BLOCKQUOTE, 0, is_blockquote),
    (NodeKind.PARAGRAPH, 0, is_paragraph),
    (NodeKind.IMAGE, 0, is_image),
    (NodeKind.DIVIDER, 0, is_divider),
)

_UNKNOWN = Classification(NodeKind.UNKNOWN)


def classify(node: Tag) -> Classification:
    """Return the first matching :class:`Classification` for *node*."""
    for kind, level, predicate in _RULES:
        if predicate(node):
            if kind is NodeKind.LIST:
                return Classification(kind, ordered=is_ordered_list(node))
            return Classification(kind, level=level)
    return _UNKNOWN
