"""Tests for pageslides.extractors.lists."""

from __future__ import annotations

import pytest

from pageslides.extractors.lists import item_text, list_depth, list_to_markdown


def _nested_ul(levels: int) -> str:
    html = ""
    for i in reversed(range(levels)):
        html = f"<ul><li>item{i}{html}</li></ul>"
    return html


class TestListDepth:
    def test_top_level_is_zero(self, parse_node):
        assert list_depth(parse_node("<ul><li>a</li></ul>")) == 0

    def test_native_nesting(self, parse_node):
        root = parse_node(_nested_ul(3))
        innermost = root.find_all("ul")[-1]
        assert list_depth(innermost) == 2

    def test_notion_nesting(self, parse_node):
        root = parse_node(
            '<div class="notion-bulleted_list-block"><div>a</div>'
            '<div class="notion-numbered_list-block"><div>b</div>'
            '<div class="notion-to_do-block">c</div></div></div>',
        )
        todo = root.find(class_="notion-to_do-block")
        assert list_depth(todo) == 2

    def test_mixed_notion_and_native(self, parse_node):
        root = parse_node(
            '<div class="notion-bulleted_list-block"><div>Parent</div>'
            "<div><ul><li>child</li></ul></div></div>",
        )
        assert list_depth(root.find("ul")) == 1


class TestListToMarkdown:
    @pytest.mark.parametrize("levels", [1, 2, 3, 4])
    def test_indent_is_two_spaces_per_level(self, parse_node, levels):
        md = list_to_markdown(parse_node(_nested_ul(levels)))
        lines = md.split("\n")
        assert len(lines) == levels
        for depth, line in enumerate(lines):
            assert line == "  " * depth + f"- item{depth}"

    def test_ordered_native(self, parse_node):
        assert list_to_markdown(parse_node("<ol><li>a</li><li>b</li></ol>")) == "1. a\n1. b"

    def test_empty_items_skipped(self, parse_node):
        md = list_to_markdown(parse_node("<ul><li>a</li><li> </li><li>b</li></ul>"))
        assert md == "- a\n- b"

    def test_nested_items_follow_parent(self, parse_node):
        node = parse_node("<ul><li>a<ul><li>a1</li><li>a2</li></ul></li><li>b</li></ul>")
        assert list_to_markdown(node) == "- a\n  - a1\n  - a2\n- b"

    def test_notion_block_with_leaf(self, parse_node):
        node = parse_node(
            '<div class="notion-bulleted_list-block">'
            '<div><div data-content-editable-leaf="true">Top</div></div>'
            '<div><div class="notion-bulleted_list-block">'
            '<div><div data-content-editable-leaf="true">Inner</div></div>'
            "</div></div></div>",
        )
        assert list_to_markdown(node) == "- Top\n  - Inner"

    def test_notion_numbered(self, parse_node):
        node = parse_node('<div class="notion-numbered_list-block"><div>First</div></div>')
        assert list_to_markdown(node) == "1. First"

    def test_mixed_notion_and_native(self, parse_node):
        node = parse_node(
            '<div class="notion-bulleted_list-block"><div>Parent</div>'
            "<div><ul><li>child</li></ul></div></div>",
        )
        assert list_to_markdown(node) == "- Parent\n  - child"


class TestItemText:
    def test_excludes_nested_list_text(self, parse_node):
        li = parse_node("<ul><li>outer<ul><li>inner</li></ul></li></ul>").find("li")
        assert item_text(li) == "outer"

    def test_leaf_inside_nested_list_ignored(self, parse_node):
        node = parse_node(
            '<div class="notion-bulleted_list-block"><div>Own text</div>'
            '<div class="notion-bulleted_list-block">'
            '<div data-content-editable-leaf="true">Child</div></div></div>',
        )
        assert item_text(node) == "Own text"
