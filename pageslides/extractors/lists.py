"""List depth resolution and list-to-Markdown conversion.

Depth counts list ancestors of any flavour (Notion bullet/number blocks,
native ``ul``/``ol``), so mixed nesting indents consistently.  Each level is
two spaces.
"""

from __future__ import annotations

from bs4 import Tag

from pageslides.document import ancestors, element_children, node_text
from pageslides.extractors.classify import is_list, is_ordered_list

INDENT = "  "

_NATIVE_LISTS = frozenset({"ul", "ol"})

# Notion keeps the editable text of a block in one leaf element
_LEAF_SELECTORS = ('[data-content-editable-leaf="true"]', '[contenteditable="true"]')


def list_depth(node: Tag) -> int:
    """Number of strict ancestors of *node* that are lists.

    For native lists pass the ``ul``/``ol`` element itself, not an ``li``.
    """
    return sum(1 for parent in ancestors(node) if is_list(parent))


def _inside_nested_list(node: Tag, container: Tag) -> bool:
    for parent in ancestors(node):
        if parent is container:
            return False
        if is_list(parent):
            return True
    return False


def item_text(node: Tag) -> str:
    """Text of a list item without the text of any list nested inside it."""
    for selector in _LEAF_SELECTORS:
        for leaf in node.select(selector):
            if not _inside_nested_list(leaf, node):
                return node_text(leaf, skip=is_list)
    return node_text(node, skip=is_list)


def _nested_lists(node: Tag) -> list[Tag]:
    """Outermost list descendants of *node*, in document order."""
    found: list[Tag] = []
    for child in element_children(node):
        if is_list(child):
            found.append(child)
        else:
            found.extend(_nested_lists(child))
    return found


def _marker(ordered: bool) -> str:
    return "1. " if ordered else "- "


def _native_list_lines(node: Tag, lines: list[str]) -> None:
    depth = list_depth(node)
    marker = _marker(node.name == "ol")
    for li in node.find_all("li", recursive=False):
        text = item_text(li)
        if text:
            lines.append(f"{INDENT * depth}{marker}{text}")
        for nested in _nested_lists(li):
            _list_lines(nested, lines)


def _block_list_lines(node: Tag, lines: list[str]) -> None:
    text = item_text(node)
    if text:
        depth = list_depth(node)
        lines.append(f"{INDENT * depth}{_marker(is_ordered_list(node))}{text}")
    for nested in _nested_lists(node):
        _list_lines(nested, lines)


def _list_lines(node: Tag, lines: list[str]) -> None:
    if node.name in _NATIVE_LISTS:
        _native_list_lines(node, lines)
    else:
        _block_list_lines(node, lines)


def list_to_markdown(node: Tag) -> str:
    """Render *node* and every list nested inside it, one item per line.

    Items with no text are skipped; their nested items are still emitted.
    """
    lines: list[str] = []
    _list_lines(node, lines)
    return "\n".join(lines)
