"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from bs4 import BeautifulSoup, Tag

FIXTURES_DIR = Path(__file__).parent / "fixtures"

NOTION_URL = "https://acme.notion.site/Roadmap-0123456789abcdef"
GITHUB_URL = "https://github.com/acme/pageslides/blob/main/README.md"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def body_nodes(html: str) -> list[Tag]:
    """Parse an HTML fragment and return the element children of <body>."""
    soup = BeautifulSoup(html, "lxml")
    body = soup.find("body")
    assert isinstance(body, Tag)
    return [c for c in body.children if isinstance(c, Tag)]


@pytest.fixture
def notion_html() -> str:
    return _read_fixture("notion.html")


@pytest.fixture
def github_html() -> str:
    return _read_fixture("github_markdown.html")


@pytest.fixture
def raw_markdown() -> str:
    return _read_fixture("deck.md")


@pytest.fixture
def parse_nodes() -> Callable[[str], list[Tag]]:
    return body_nodes


@pytest.fixture
def parse_node() -> Callable[[str], Tag]:
    def _first(html: str) -> Tag:
        return body_nodes(html)[0]
    return _first


@pytest.fixture
def notion_url() -> str:
    return NOTION_URL


@pytest.fixture
def github_url() -> str:
    return GITHUB_URL
