"""Read-only document capability shared by every extraction stage.

The extractors never inherit helpers from a base class; they receive a
:class:`Document` (or bare BeautifulSoup ``Tag`` nodes) and use the free
functions below for text retrieval, marker checks and sibling traversal.

Usage::

    from pageslides.document import parse_document

    doc = parse_document("<h1>Title</h1><p>Intro</p>")
    for h1 in doc.find_all("h1"):
        print(doc.text(h1))
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator

from bs4 import BeautifulSoup, Tag
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"[ \t\r\n\f\v\u00a0]+")
_SPACES_AROUND_NL_RE = re.compile(r" *\n *")
_MULTI_NL_RE = re.compile(r"\n{2,}")
_HTML_START_RE = re.compile(r"\s*<(?:!doctype\b|[a-z][\w-]*[\s/>])", re.IGNORECASE)

# Tags whose rendered text starts on a new line (approximates innerText)
_BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "dd", "details", "div",
        "dl", "dt", "figcaption", "figure", "footer", "form", "h1", "h2", "h3",
        "h4", "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p",
        "pre", "section", "summary", "table", "tr", "ul",
    }
)
_CELL_TAGS = frozenset({"td", "th"})
_INVISIBLE_TAGS = frozenset({"script", "style", "template", "noscript"})
_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------

def class_string(node: Tag) -> str:
    """Return the node's class attribute as one space-joined string."""
    classes = node.get("class") or []
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def has_marker(node: Tag | None, marker: str) -> bool:
    """True if *marker* occurs in the node's class attribute.

    Substring semantics on purpose: source pages emit variants such as
    ``notion-h1`` inside longer generated class names.
    """
    if node is None or not isinstance(node, Tag):
        return False
    return marker in class_string(node)


def has_any_marker(node: Tag | None, markers: tuple[str, ...]) -> bool:
    return any(has_marker(node, m) for m in markers)


def is_invisible(node: Tag) -> bool:
    """True for elements a browser never renders as text (scripts, styles)."""
    return node.name in _INVISIBLE_TAGS


def is_preformatted(node: Tag) -> bool:
    return node.name == "pre" or node.find_parent("pre") is not None


def _collect_text(
    node: Tag,
    parts: list[str],
    preformatted: bool,
    skip: Callable[[Tag], bool] | None,
) -> None:
    for child in node.children:
        if isinstance(child, _SKIPPED_STRINGS):
            continue
        if isinstance(child, NavigableString):
            parts.append(str(child) if preformatted else _WS_RE.sub(" ", str(child)))
            continue
        if not isinstance(child, Tag) or is_invisible(child):
            continue
        if skip is not None and skip(child):
            continue
        if child.name == "br":
            parts.append("\n")
            continue
        block = child.name in _BLOCK_TAGS and not preformatted
        if block:
            parts.append("\n")
        _collect_text(child, parts, preformatted or child.name == "pre", skip)
        if block:
            parts.append("\n")
        elif child.name in _CELL_TAGS:
            parts.append(" ")


def node_text(node: Tag | NavigableString | None, skip: Callable[[Tag], bool] | None = None) -> str:
    """Rendered text of *node*, roughly what a browser's ``innerText`` yields.

    Whitespace runs collapse to single spaces and block-level children start
    new lines, except inside ``<pre>`` where text is kept verbatim.  Subtrees
    for which *skip* returns True are left out entirely.
    """
    if node is None:
        return ""
    if isinstance(node, NavigableString):
        return _WS_RE.sub(" ", str(node)).strip()
    if is_invisible(node):
        return ""
    preformatted = is_preformatted(node)
    parts: list[str] = []
    _collect_text(node, parts, preformatted, skip)
    text = "".join(parts)
    if preformatted:
        return text.strip("\n").rstrip()
    text = _SPACES_AROUND_NL_RE.sub("\n", text)
    text = _MULTI_NL_RE.sub("\n", text)
    return text.strip()


def has_text(node: Tag) -> bool:
    """True if *node* renders any non-whitespace text."""
    return bool(node_text(node))


def element_children(node: Tag) -> list[Tag]:
    return [c for c in node.children if isinstance(c, Tag)]


def next_element(node: Tag) -> Tag | None:
    sibling = node.find_next_sibling()
    return sibling if isinstance(sibling, Tag) else None


def siblings_between(start: Tag, end: Tag | None) -> Iterator[Tag]:
    """Yield element siblings after *start* up to, not including, *end*.

    When *end* is None or not a following sibling, the walk runs to the last
    sibling.
    """
    current = next_element(start)
    while current is not None and current is not end:
        if not is_invisible(current):
            yield current
        current = next_element(current)


def ancestors(node: Tag) -> Iterator[Tag]:
    """Yield the strict element ancestors of *node*, nearest first."""
    for parent in node.parents:
        if isinstance(parent, BeautifulSoup):
            return
        yield parent


def outermost(nodes: list[Tag]) -> list[Tag]:
    """Drop every node that is nested inside another node of *nodes*."""
    chosen = {id(n) for n in nodes}
    return [n for n in nodes if not any(id(a) in chosen for a in ancestors(n))]


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

class Document:
    """A parsed page, or raw Markdown text, handed to an extractor.

    Args:
        soup:     Parsed tree.  Built with ``lxml`` by :func:`parse_document`.
        raw_text: Set when the input was plain Markdown rather than HTML.
    """

    def __init__(self, soup: BeautifulSoup, raw_text: str | None = None) -> None:
        self.soup = soup
        self.raw_text = raw_text

    @classmethod
    def from_html(cls, html: str) -> Document:
        return cls(BeautifulSoup(html or "", "lxml"))

    @classmethod
    def from_markdown(cls, text: str) -> Document:
        soup = BeautifulSoup("", "lxml")
        return cls(soup, raw_text=text or "")

    @property
    def is_text(self) -> bool:
        """True when the document is raw Markdown text, not an HTML tree."""
        return self.raw_text is not None

    @property
    def root(self) -> Tag:
        body = self.soup.find("body")
        return body if isinstance(body, Tag) else self.soup

    def find_all(self, selector: str) -> list[Tag]:
        """CSS-select elements; an unsupported selector yields no matches."""
        try:
            return [el for el in self.soup.select(selector) if isinstance(el, Tag)]
        except Exception as exc:
            logger.debug("CSS selector %r failed: %s", selector, exc)
            return []

    def find(self, selector: str) -> Tag | None:
        found = self.find_all(selector)
        return found[0] if found else None

    def elements(self) -> list[Tag]:
        """Every element under the root, in document order."""
        return [el for el in self.root.find_all(True) if isinstance(el, Tag)]

    def text(self, node: Tag | None = None) -> str:
        """Rendered text of *node*, or of the whole document.

        For raw Markdown input the whole-document text is the original
        string, untouched.
        """
        if node is None:
            if self.raw_text is not None:
                return self.raw_text
            root = self.root
            children = element_children(root)
            # Browsers show a plain-text file as <body><pre>…</pre></body>
            if len(children) == 1 and children[0].name == "pre":
                return children[0].get_text()
            return root.get_text()
        return node_text(node)

    def has_marker(self, node: Tag | None, marker: str) -> bool:
        return has_marker(node, marker)


def looks_like_html(source: str) -> bool:
    """True if *source* starts with an HTML tag or doctype."""
    return bool(_HTML_START_RE.match(source or ""))


def parse_document(source: str | BeautifulSoup | Document, *, markdown: bool | None = None) -> Document:
    """Build a :class:`Document` from HTML, raw Markdown, or a parsed tree.

    Args:
        source:   HTML string, Markdown string, ``BeautifulSoup`` tree or an
                  existing :class:`Document` (returned unchanged).
        markdown: Force Markdown (True) or HTML (False) interpretation of a
                  string.  ``None`` sniffs the leading characters.
    """
    if isinstance(source, Document):
        return source
    if isinstance(source, BeautifulSoup):
        return Document(source)
    if markdown is None:
        markdown = not looks_like_html(source)
    if markdown:
        return Document.from_markdown(source)
    return Document.from_html(source)
