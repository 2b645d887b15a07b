"""BeautifulSoup-backed parsing, selection and traversal.

Provides the document/element handles callers work with (`parse_fragment`,
`parse_document`, `Document`, `Element`) and implements the core's NodePort and
TreePort on top of a BeautifulSoup tree so `Element.text()` can run the plain
text extractor.

A Document owns its tree. Every Document/Element operation holds the
document's lock while it reads the tree, so handles may be shared between
threads. The extractor itself never locks anything.
"""

from __future__ import annotations

import string
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Literal

import soupsieve
from bs4 import BeautifulSoup
from bs4.element import (
    Comment,
    Doctype,
    NavigableString,
    PageElement,
    PreformattedString,
    Tag,
)
from loguru import logger

from htmlplain.core.models import Enter, Exit, NodeKind, TraversalEvent
from htmlplain.core.ports import NodePort
from htmlplain.core.text_extract import TextExtractor

type ParserName = Literal["html.parser", "lxml"]

DEFAULT_PARSER: ParserName = "html.parser"
SUPPORTED_PARSERS: frozenset[str] = frozenset({"html.parser", "lxml"})

_SERIALIZE_FORMATTER = "html5"
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_FRAGMENT_WRAPPERS = frozenset({"html", "body"})


class SelectorError(ValueError):
    """Raised when a CSS selector cannot be parsed."""


class SoupNode:
    """NodePort view over a single BeautifulSoup node."""

    __slots__ = ("element",)

    def __init__(self, element: PageElement) -> None:
        self.element = element

    def kind(self) -> NodeKind:
        element = self.element
        if isinstance(element, BeautifulSoup):
            return "document"
        if isinstance(element, Tag):
            return "element"
        if isinstance(element, Comment):
            return "comment"
        # Doctype, CData, processing instructions and declarations
        if isinstance(element, PreformattedString):
            return "other"
        if isinstance(element, NavigableString):
            return "text"
        return "other"

    def tag_name(self) -> str:
        return self.element.name if isinstance(self.element, Tag) else ""

    def content(self) -> str:
        return str(self.element) if isinstance(self.element, NavigableString) else ""


class SoupTree:
    """TreePort implementation walking a BeautifulSoup tree depth-first."""

    def traverse(self, node: NodePort) -> Iterator[TraversalEvent]:
        """
        Yield Enter/Exit events for `node` and its descendants in document order.

        Raises:
            TypeError: If `node` was not produced by this adapter.
        """
        if not isinstance(node, SoupNode):
            raise TypeError(f"SoupTree cannot traverse {type(node).__name__}")

        # (element, closing) pairs; children are pushed in reverse to pop in order
        stack: list[tuple[PageElement, bool]] = [(node.element, False)]
        while stack:
            element, closing = stack.pop()
            if closing:
                yield Exit(SoupNode(element))
                continue
            yield Enter(SoupNode(element))
            stack.append((element, True))
            if isinstance(element, Tag):
                stack.extend((child, False) for child in reversed(element.contents))


_EXTRACTOR = TextExtractor(SoupTree())


class Document:
    """
    A parsed HTML document or fragment.

    Use `parse_fragment()` or `parse_document()` rather than constructing this
    directly.
    """

    def __init__(self, soup: BeautifulSoup, root: Tag) -> None:
        self._soup = soup
        self._root = root
        self._lock = threading.Lock()

    @contextmanager
    def _locked(self) -> Iterator[BeautifulSoup]:
        with self._lock:
            yield self._soup

    def select(self, css_selector: str) -> list[Element]:
        """
        Return all elements of the document matching `css_selector`.

        Raises:
            SelectorError: If the selector is invalid.
        """
        with self._locked() as soup:
            return _select(self, soup, css_selector)

    def root_element(self) -> Element:
        """Return the document's root `<html>` element."""
        return Element(self, self._root)


class Element:
    """A handle to one element of a Document."""

    def __init__(self, document: Document, tag: Tag) -> None:
        self._document = document
        self._tag = tag

    def __repr__(self) -> str:
        return f"<Element {self._tag.name}>"

    def name(self) -> str:
        """Return the element's tag name in lower case."""
        with self._document._locked():
            return self._tag.name

    def html(self) -> str:
        """Return the element's outer HTML."""
        with self._document._locked():
            return self._tag.decode(formatter=_SERIALIZE_FORMATTER)

    def inner_html(self) -> str:
        """Return the element's inner HTML."""
        with self._document._locked():
            return self._tag.decode_contents(formatter=_SERIALIZE_FORMATTER)

    def attr(self, attribute: str) -> str | None:
        """Return the value of `attribute`, or None when it is not set."""
        with self._document._locked():
            value = self._tag.get(attribute)
        return None if value is None else str(value)

    def attrs(self) -> list[tuple[str, str]]:
        """Return all attributes as (name, value) pairs in source order."""
        with self._document._locked():
            return [(key, str(value)) for key, value in self._tag.attrs.items()]

    def select(self, css_selector: str) -> list[Element]:
        """
        Return descendant elements matching `css_selector`.

        Raises:
            SelectorError: If the selector is invalid.
        """
        with self._document._locked():
            return _select(self._document, self._tag, css_selector)

    def child_elements(self) -> list[Element]:
        """Return the element's direct child elements."""
        with self._document._locked():
            return [Element(self._document, c) for c in self._tag.children if isinstance(c, Tag)]

    def text(self) -> str:
        """Return the element's text using the simplified innerText algorithm."""
        with self._document._locked():
            return _EXTRACTOR.extract(SoupNode(self._tag))

    def has_class(self, name: str, *, case_sensitive: bool = True) -> bool:
        """
        Return True if `name` is one of the element's classes.

        Args:
            name: Class name to look for.
            case_sensitive: When False, compare with ASCII case folding.
        """
        classes = self.classes()
        if case_sensitive:
            return name in classes
        wanted = name.translate(_ASCII_LOWER)
        return any(c.translate(_ASCII_LOWER) == wanted for c in classes)

    def classes(self) -> list[str]:
        """Return the element's class names in source order."""
        value = self.attr("class")
        return value.split() if value else []


def parse_fragment(html: str, *, parser: str = DEFAULT_PARSER) -> Document:
    """
    Parse `html` as a fragment.

    Every top-level node except a doctype becomes a child of a synthetic
    `<html>` root element. Stray `<html>` and `<body>` tags, and the ones
    lxml implies around a fragment, are unwrapped into that root; an empty
    implied `<head>` is dropped.

    Raises:
        ValueError: If `parser` is not a supported parser name.
    """
    soup = _parse(html, parser)
    logger.debug("soup: parsed fragment ({} chars) with {}", len(html), parser)
    return Document(soup, _fragment_root(soup))


def parse_document(html: str, *, parser: str = DEFAULT_PARSER) -> Document:
    """
    Parse `html` as a complete document.

    The root is the document's `<html>` element, synthesised like a
    fragment's when the markup has none.

    Raises:
        ValueError: If `parser` is not a supported parser name.
    """
    soup = _parse(html, parser)
    logger.debug("soup: parsed document ({} chars) with {}", len(html), parser)
    root = soup.find("html", recursive=False)
    if isinstance(root, Tag):
        return Document(soup, root)
    return Document(soup, _fragment_root(soup))


def html_to_text(html: str, *, parser: str = DEFAULT_PARSER) -> str:
    """
    Parse `html` as a fragment and return its plain text.

    Args:
        html: HTML document or fragment.
        parser: BeautifulSoup parser name.

    Returns:
        Plain-text extraction with entities decoded and block boundaries as newlines.
    """
    return parse_fragment(html, parser=parser).root_element().text()


def _parse(html: str, parser: str) -> BeautifulSoup:
    if parser not in SUPPORTED_PARSERS:
        valid = ", ".join(sorted(SUPPORTED_PARSERS))
        raise ValueError(f"unsupported parser {parser!r} (expected one of: {valid})")
    return BeautifulSoup(html, parser, multi_valued_attributes=None)


def _fragment_root(soup: BeautifulSoup) -> Tag:
    nodes = list(_fragment_nodes(soup.contents))
    root = soup.new_tag("html")
    for node in nodes:
        root.append(node.extract())
    # only the emptied wrappers are left next to the doctype
    for leftover in [c for c in soup.contents if not isinstance(c, Doctype)]:
        leftover.decompose()
    soup.append(root)
    return root


def _fragment_nodes(nodes: list[PageElement]) -> Iterator[PageElement]:
    for node in list(nodes):
        if isinstance(node, Doctype):
            continue
        if isinstance(node, Tag) and node.name in _FRAGMENT_WRAPPERS:
            yield from _fragment_nodes(node.contents)
        elif isinstance(node, Tag) and node.name == "head" and not node.contents:
            continue
        else:
            yield node


def _select(document: Document, scope: Tag, css_selector: str) -> list[Element]:
    try:
        matches = scope.select(css_selector)
    except soupsieve.SelectorSyntaxError as exc:
        raise SelectorError(f'failed to parse selector "{css_selector}"\n{exc}') from exc
    return [Element(document, tag) for tag in matches]
