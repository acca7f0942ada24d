"""Tests for pageslides.document."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from pageslides.document import (
    Document,
    has_marker,
    has_text,
    looks_like_html,
    node_text,
    outermost,
    parse_document,
    siblings_between,
)


class TestNodeText:
    def test_whitespace_collapsed(self, parse_node):
        assert node_text(parse_node("<p>a   b\n  c</p>")) == "a b c"

    def test_block_children_on_new_lines(self, parse_node):
        assert node_text(parse_node("<div><p>a</p><p>b</p></div>")) == "a\nb"

    def test_inline_children_joined(self, parse_node):
        assert node_text(parse_node("<p>a <b>bold</b> c</p>")) == "a bold c"

    def test_line_break(self, parse_node):
        assert node_text(parse_node("<p>a<br>b</p>")) == "a\nb"

    def test_preformatted_verbatim(self, parse_node):
        assert node_text(parse_node("<pre>def f():\n    return 1</pre>")) == "def f():\n    return 1"

    def test_invisible_and_comments_skipped(self, parse_node):
        node = parse_node("<div>a<script>var x;</script><!-- note -->b</div>")
        assert node_text(node) == "ab"

    def test_skip_predicate(self, parse_node):
        node = parse_node("<div>outer<ul><li>inner</li></ul></div>")
        assert node_text(node, skip=lambda n: n.name == "ul") == "outer"

    def test_none(self):
        assert node_text(None) == ""


class TestNodeHelpers:
    def test_marker_is_substring_match(self, parse_node):
        node = parse_node('<div class="notion-selectable notion-h1-block"></div>')
        assert has_marker(node, "notion-h1")
        assert not has_marker(node, "notion-h2")
        assert not has_marker(None, "notion-h1")

    def test_siblings_between(self, parse_nodes):
        a, b, c, d = parse_nodes("<h1>A</h1><p>b</p><p>c</p><h1>D</h1>")
        assert list(siblings_between(a, d)) == [b, c]
        assert list(siblings_between(a, None)) == [b, c, d]

    def test_script_has_no_text(self, parse_nodes):
        html = "<h1>A</h1><script>var x = 1;</script><style>p{}</style>"
        heading, script, style = parse_nodes(html)
        assert not has_text(script)
        assert not has_text(style)
        assert has_text(heading)

    def test_siblings_between_skips_invisible(self, parse_nodes):
        a, _, p = parse_nodes("<h1>A</h1><script>var x = 1;</script><p>b</p>")
        assert list(siblings_between(a, None)) == [p]

    def test_outermost(self, parse_node):
        root = parse_node('<div class="x"><div class="x"></div></div>')
        inner = root.find("div")
        assert outermost([root, inner]) == [root]


class TestDocument:
    def test_from_html_root_is_body(self):
        doc = Document.from_html("<h1>T</h1>")
        assert doc.root.name == "body"
        assert not doc.is_text

    def test_from_markdown_keeps_text(self):
        doc = Document.from_markdown("# T\n\n  body  ")
        assert doc.is_text
        assert doc.text() == "# T\n\n  body  "

    def test_text_of_lone_pre(self):
        doc = Document.from_html("<html><body><pre># T\n\nbody</pre></body></html>")
        assert doc.text() == "# T\n\nbody"

    def test_find_all_bad_selector(self):
        assert Document.from_html("<p>x</p>").find_all("p[") == []

    def test_find(self):
        doc = Document.from_html('<div class="a"><p class="b">x</p></div>')
        assert doc.find(".b").name == "p"
        assert doc.find(".missing") is None

    def test_elements_in_document_order(self):
        doc = Document.from_html("<div><p>a</p></div><span>b</span>")
        assert [el.name for el in doc.elements()] == ["div", "p", "span"]


class TestParseDocument:
    @pytest.mark.parametrize(
        "source, expected",
        [
            ("<!DOCTYPE html><html></html>", True),
            ("  <div>x</div>", True),
            ("<br/>", True),
            ("# Title", False),
            ("a < b and c > d", False),
            ("<https://example.com>", False),
        ],
    )
    def test_looks_like_html(self, source, expected):
        assert looks_like_html(source) is expected

    def test_sniffs_markdown(self):
        assert parse_document("# Title").is_text

    def test_sniffs_html(self):
        assert not parse_document("<h1>Title</h1>").is_text

    def test_forced_interpretation(self):
        assert parse_document("<h1>T</h1>", markdown=True).is_text
        assert not parse_document("# T", markdown=False).is_text

    def test_soup_and_document_passthrough(self):
        soup = BeautifulSoup("<p>x</p>", "lxml")
        doc = parse_document(soup)
        assert doc.soup is soup
        assert parse_document(doc) is doc
