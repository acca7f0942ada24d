"""Tests for pageslides.query."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest
from bs4 import BeautifulSoup

from pageslides.extractors.normalize import normalize_content
from pageslides.items import SourceType
from pageslides.query import extract, extract_and_save
from pageslides.storage import MemorySlideStore


def _deck(n: int) -> str:
    return "".join(f"<h1>Slide {i}</h1><p>body {i}</p>" for i in range(n))


class TestExtract:
    def test_notion_page(self, notion_html, notion_url):
        result = extract(notion_html, notion_url)
        assert result.ok
        assert result.source_type is SourceType.NOTION
        assert [s.title for s in result.slides] == ["Quarterly Review", "Next Steps"]

    def test_rendered_markdown_resolves_images(self, github_html, github_url):
        result = extract(github_html, github_url)
        assert result.source_type is SourceType.RENDERED_MARKDOWN
        assert result.slides[1].content.endswith("![Screenshot](https://github.com/docs/shot.png)")

    def test_markdown_url(self, raw_markdown):
        result = extract(raw_markdown, "https://example.com/deck.md")
        assert result.source_type is SourceType.MARKDOWN
        assert [s.title for s in result.slides] == ["Welcome", "Second"]

    def test_raw_text_without_url(self, raw_markdown):
        result = extract(raw_markdown)
        assert result.source_type is SourceType.RAW_MARKDOWN
        assert len(result.slides) == 2

    def test_unsupported_source(self):
        result = extract("<div><p>hello</p></div>", "https://example.com/")
        assert not result.ok
        assert result.error.startswith("Unsupported source")
        assert result.source_type is SourceType.UNKNOWN
        assert list(result.to_response()) == ["error"]

    def test_no_level1_headings_is_empty_success(self, notion_url):
        result = extract("<div><p>no headings</p></div>", notion_url)
        assert result.ok
        assert result.slides == []
        assert result.to_response() == {"slides": []}

    @pytest.mark.parametrize("n", [1, 3, 7])
    def test_one_slide_per_heading(self, notion_url, n):
        result = extract(_deck(n), notion_url)
        assert [s.title for s in result.slides] == [f"Slide {i}" for i in range(n)]
        assert [s.content for s in result.slides] == [f"body {i}" for i in range(n)]

    def test_deterministic(self, notion_html, notion_url):
        first = extract(notion_html, notion_url)
        second = extract(notion_html, notion_url)
        assert first.slides == second.slides

    def test_content_is_normalized(self, notion_html, github_html, github_url, notion_url):
        slides = extract(notion_html, notion_url).slides + extract(github_html, github_url).slides
        for slide in slides:
            assert normalize_content(slide.content) == slide.content
            for sub in slide.subslides:
                assert normalize_content(sub.content) == sub.content

    def test_no_nested_subslides(self, notion_html, notion_url):
        for slide in extract(notion_html, notion_url).slides:
            assert all(not sub.subslides for sub in slide.subslides)

    def test_source_type_override(self, github_html):
        result = extract("# A\n\nx", source_type="raw-markdown")
        assert result.source_type is SourceType.RAW_MARKDOWN
        assert [s.title for s in result.slides] == ["A"]

        result = extract(github_html, source_type=SourceType.RENDERED_MARKDOWN)
        assert [s.title for s in result.slides] == ["Project Intro", "Usage"]

    def test_beautifulsoup_input(self, notion_html, notion_url):
        result = extract(BeautifulSoup(notion_html, "lxml"), notion_url)
        assert [s.title for s in result.slides] == ["Quarterly Review", "Next Steps"]

    def test_failure_becomes_error_result(self, notion_html, notion_url, caplog):
        with (
            patch("pageslides.query.get_extractor", side_effect=RuntimeError("boom")),
            caplog.at_level(logging.ERROR),
        ):
            result = extract(notion_html, notion_url)
        assert result.error == "Extraction failed: boom"
        assert result.source_type is SourceType.ERROR
        assert result.to_response() == {"error": "Extraction failed: boom"}
        assert "Extraction failed" in caplog.text

    def test_custom_logger_receives_diagnostics(self, notion_url, caplog):
        log = logging.getLogger("pageslides.tests.host")
        with caplog.at_level(logging.WARNING):
            extract("<div><p>no headings</p></div>", notion_url, logger=log)
        assert any(r.name == "pageslides.tests.host" for r in caplog.records)


class TestExtractAndSave:
    def test_saves_slides(self, notion_html, notion_url):
        store = MemorySlideStore()
        result = extract_and_save(notion_html, notion_url, store=store)
        assert store.save_count == 1
        assert store.load_slides() == result.slides

    def test_error_not_saved(self):
        store = MemorySlideStore()
        extract_and_save("<div>x</div>", "https://example.com/", store=store)
        assert store.save_count == 0

    def test_empty_result_not_saved(self, notion_url):
        store = MemorySlideStore()
        result = extract_and_save("<div>x</div>", notion_url, store=store)
        assert result.ok
        assert store.save_count == 0
