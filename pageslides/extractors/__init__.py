"""Extraction sub-package: node classification, conversion and slide assembly."""

from .assemble import assemble, assemble_slides
from .classify import Classification, NodeKind, classify
from .convert import convert
from .lists import list_depth
from .markdown import MarkdownExtractor, RawMarkdownExtractor, RenderedMarkdownExtractor
from .normalize import normalize_content, normalize_slide
from .notion import NotionExtractor
from .subslides import find_subslide_headings, split_subslides, subslide_title

__all__ = [
    "Classification",
    "MarkdownExtractor",
    "NodeKind",
    "NotionExtractor",
    "RawMarkdownExtractor",
    "RenderedMarkdownExtractor",
    "assemble",
    "assemble_slides",
    "classify",
    "convert",
    "find_subslide_headings",
    "list_depth",
    "normalize_content",
    "normalize_slide",
    "split_subslides",
    "subslide_title",
]
