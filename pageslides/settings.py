"""Project-wide defaults for pageslides.

Extraction behaviour that callers may want to tune per source or per domain
lives on :class:`pageslides.profiles.ExtractionPolicy`; the values here are the
fixed tables and fallbacks everything else is built from.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Source detection
# ---------------------------------------------------------------------------
NOTION_DOMAINS: tuple[str, ...] = ("notion.so", "notion.site")

# Hosts that render Markdown server-side; only trusted when a container exists
RENDERED_MARKDOWN_HOSTS: tuple[str, ...] = ("github.com", "gitlab.com")

MARKDOWN_EXTENSIONS: tuple[str, ...] = (".md", ".markdown")

# Notion page chrome, for documents saved without their URL
NOTION_PAGE_SELECTORS: tuple[str, ...] = (
    ".notion-page-content",
    ".notion-frame",
)

# Rendered-Markdown containers, most specific first
RENDERED_MARKDOWN_CONTAINERS: tuple[str, ...] = (
    ".markdown-body",  # GitHub
    ".md-content",     # GitLab
    ".wiki-content",   # GitLab wiki
    ".markdown",       # generic
)

# ``article`` is only a container once the page is already known to be Markdown
MARKDOWN_ARTICLE_FALLBACK = "article"

# ---------------------------------------------------------------------------
# Extraction defaults
# ---------------------------------------------------------------------------

# Fragments shorter than this (in words) are never dropped as duplicates
DEDUP_MIN_WORDS = 2

DEFAULT_PRESENTATION_TITLE = "Untitled Presentation"
RAW_MARKDOWN_FALLBACK_TITLE = "Presentation"
IMAGE_FALLBACK_ALT = "Image"
# Used when a level-2 heading is only a "Heading 2" placeholder
SUBSLIDE_FALLBACK_TITLE = "Subslide {index}"

# ---------------------------------------------------------------------------
# CLI / output
# ---------------------------------------------------------------------------
DEFAULT_OUTPUT_DIR = "./out"
SLIDES_JSON_NAME = "slides.json"
SLIDES_MARKDOWN_NAME = "slides.md"
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
