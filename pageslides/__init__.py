"""pageslides - turn Notion pages and Markdown documents into slides.

Quick usage::

    from pageslides import extract

    result = extract(html, url="https://acme.notion.site/Roadmap-123")
    for slide in result.slides:
        print(slide.title, len(slide.subslides))

Raw Markdown::

    result = extract("# Intro\\n\\nHello\\n\\n# Next\\n\\n- a\\n- b", url="file:///deck.md")

Persisting results::

    from pageslides import JsonSlideStore, extract_and_save

    extract_and_save(html, url, store=JsonSlideStore("out/slides.json"))
"""

from pageslides.document import Document, parse_document
from pageslides.errors import (
    ElementConversionError,
    NoBoundariesFound,
    PageSlidesError,
    UnsupportedSourceError,
)
from pageslides.items import ExtractionResult, Presentation, Slide, SourceType
from pageslides.profiles import ExtractionPolicy, default_policy, load_profile
from pageslides.query import extract, extract_and_save
from pageslides.sources import detect_source, get_extractor
from pageslides.storage import JsonSlideStore, MemorySlideStore, SlideStore

__version__ = "0.1.0"
__all__ = [
    "Document",
    "ElementConversionError",
    "ExtractionPolicy",
    "ExtractionResult",
    "JsonSlideStore",
    "MemorySlideStore",
    "NoBoundariesFound",
    "PageSlidesError",
    "Presentation",
    "Slide",
    "SlideStore",
    "SourceType",
    "UnsupportedSourceError",
    "default_policy",
    "detect_source",
    "extract",
    "extract_and_save",
    "get_extractor",
    "load_profile",
    "parse_document",
]
