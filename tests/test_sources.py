"""Tests for pageslides.sources."""

from __future__ import annotations

import pytest

from pageslides.document import parse_document
from pageslides.errors import UnsupportedSourceError
from pageslides.extractors.markdown import (
    MarkdownExtractor,
    RawMarkdownExtractor,
    RenderedMarkdownExtractor,
)
from pageslides.extractors.notion import NotionExtractor
from pageslides.items import SourceType
from pageslides.sources import detect_source, get_extractor


class TestDetectSource:
    @pytest.mark.parametrize(
        "url",
        [
            "https://acme.notion.site/Roadmap-0123456789abcdef",
            "https://www.notion.so/acme/Plan-abc",
            "https://notion.so/Plan-abc",
        ],
    )
    def test_notion_domains(self, url):
        assert detect_source(parse_document("<p>x</p>"), url) is SourceType.NOTION

    def test_lookalike_domain_not_notion(self):
        doc = parse_document("<p>x</p>")
        assert detect_source(doc, "https://notion.so.evil.com/page") is None

    def test_github_with_container(self, github_html, github_url):
        doc = parse_document(github_html)
        assert detect_source(doc, github_url) is SourceType.RENDERED_MARKDOWN

    def test_github_without_container(self):
        doc = parse_document("<div>x</div>")
        assert detect_source(doc, "https://github.com/acme/repo") is None

    def test_github_md_path_without_container(self, github_url):
        doc = parse_document("<div>x</div>")
        assert detect_source(doc, github_url) is SourceType.MARKDOWN

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/docs/guide.md",
            "https://example.com/docs/guide.markdown",
            "https://example.com/docs/GUIDE.MD",
        ],
    )
    def test_markdown_extension(self, url):
        assert detect_source(parse_document("<p>x</p>"), url) is SourceType.MARKDOWN

    def test_text_document(self):
        doc = parse_document("# Title\n\ntext")
        assert detect_source(doc) is SourceType.RAW_MARKDOWN

    def test_notion_page_markers(self, notion_html):
        assert detect_source(parse_document(notion_html)) is SourceType.NOTION

    def test_rendered_container_marker(self, github_html):
        doc = parse_document(github_html)
        assert detect_source(doc, "https://example.com/") is SourceType.RENDERED_MARKDOWN

    def test_plain_article_is_not_markdown(self):
        doc = parse_document("<article><h1>News</h1></article>")
        assert detect_source(doc, "https://example.com/news") is None

    def test_lone_pre(self):
        doc = parse_document("<html><body><pre># Title\n\ntext</pre></body></html>")
        assert detect_source(doc, "https://example.com/notes") is SourceType.RAW_MARKDOWN

    def test_unsupported(self):
        doc = parse_document("<div><p>hello</p></div>")
        assert detect_source(doc, "https://example.com/") is None


class TestGetExtractor:
    @pytest.mark.parametrize(
        "source_type, cls",
        [
            (SourceType.NOTION, NotionExtractor),
            (SourceType.MARKDOWN, MarkdownExtractor),
            (SourceType.RENDERED_MARKDOWN, RenderedMarkdownExtractor),
            (SourceType.RAW_MARKDOWN, RawMarkdownExtractor),
        ],
    )
    def test_mapping(self, source_type, cls):
        extractor = get_extractor(source_type, parse_document("<p>x</p>"))
        assert isinstance(extractor, cls)

    def test_string_source_type(self):
        extractor = get_extractor("raw-markdown", parse_document("# A"))
        assert isinstance(extractor, RawMarkdownExtractor)

    @pytest.mark.parametrize("source_type", [SourceType.UNKNOWN, SourceType.ERROR, "bogus"])
    def test_unmapped_raises(self, source_type):
        with pytest.raises(UnsupportedSourceError) as exc_info:
            get_extractor(source_type, parse_document("<p>x</p>"))
        assert exc_info.value.source_type == source_type

    def test_unsupported_is_lookup_error(self):
        with pytest.raises(LookupError):
            get_extractor(SourceType.UNKNOWN, parse_document("<p>x</p>"))
