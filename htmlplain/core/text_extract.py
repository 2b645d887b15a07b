"""Plain-text extraction from a parsed HTML tree.

Implements a small subset of the `HTMLElement.innerText` algorithm: text nodes
are copied verbatim, block-level elements and `<br>` become newline markers,
and runs of markers are folded into a single group of newlines. Groups at the
very start or end of the output are dropped.

No effort is made to render tables, images, form controls or anything driven
by CSS. The intended inputs are short textual documents such as feed titles,
summaries and article bodies.

See:
    https://developer.mozilla.org/en-US/docs/Web/API/HTMLElement/innerText
    https://html.spec.whatwg.org/multipage/dom.html#the-innertext-idl-attribute
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from loguru import logger

from htmlplain.core.models import Break, ContentItem, Enter, TextRun, TraversalEvent
from htmlplain.core.ports import NodePort, TreePort

# Block-level elements as listed by MDN:
# https://developer.mozilla.org/en-US/docs/Web/HTML/Block-level_elements
BLOCK_LEVEL_ELEMENTS: frozenset[str] = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "dd",
        "details",
        "dialog",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "li",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "table",
        "ul",
    }
)


# Unicode White_Space, which unlike str.isspace excludes the \x1c-\x1f separators
_WHITE_SPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def is_block_element(name: str) -> bool:
    """Return True if `name` is a block-level tag (case-sensitive)."""
    return name in BLOCK_LEVEL_ELEMENTS


def classify(event: TraversalEvent) -> ContentItem | None:
    """
    Map a single traversal event to a content item.

    Args:
        event: An Enter or Exit event from a tree traversal.

    Returns:
        TextRun for non-blank text on enter, Break for <br> (enter only),
        <p> (2 newlines) and other block-level elements (1 newline),
        None for everything else.
    """
    node = event.node
    kind = node.kind()

    if kind == "text":
        if not isinstance(event, Enter):
            return None
        text = node.content()
        return TextRun(text) if text.strip(_WHITE_SPACE) else None

    if kind != "element":
        return None

    name = node.tag_name()
    if name == "br":
        return Break(1) if isinstance(event, Enter) else None
    if name == "p":
        return Break(2)
    if is_block_element(name):
        return Break(1)
    return None


def content_items(events: Iterable[TraversalEvent]) -> Iterator[ContentItem]:
    """Lazily classify `events`, skipping the ones that carry no content."""
    for event in events:
        item = classify(event)
        if item is not None:
            yield item


def fold(items: Iterable[ContentItem]) -> str:
    """
    Assemble content items into the final string.

    Consecutive Break items are merged into one group sized at their maximum
    count. A group is written only when text was already written before it and
    more text follows it.
    """
    parts: list[str] = []
    pending = 0  # largest count in the current break group, 0 when none is open

    for item in items:
        if isinstance(item, Break):
            pending = max(pending, item.count)
            continue
        if not item.text:
            continue
        if pending and parts:
            parts.append("\n" * pending)
        pending = 0
        parts.append(item.text)

    return "".join(parts)


class TextExtractor:
    """
    Extracts plain text from any node of a tree exposed through TreePort.

    Instances hold no per-call state and may be shared between threads as long
    as each tree being read is not mutated concurrently.
    """

    def __init__(self, tree: TreePort) -> None:
        self._tree = tree

    def extract(self, root: NodePort) -> str:
        """
        Return the plain text of `root` and its descendants.

        Args:
            root: Document, fragment root or any element node.

        Returns:
            The extracted text; empty for empty subtrees.
        """
        text = fold(content_items(self._tree.traverse(root)))
        logger.debug("text_extract: {} chars from <{}>", len(text), _describe(root))
        return text


def html_to_plain(root: NodePort, tree: TreePort) -> str:
    """Extract plain text from `root` using a one-off TextExtractor."""
    return TextExtractor(tree).extract(root)


def _describe(node: NodePort) -> str:
    kind = node.kind()
    return node.tag_name() if kind == "element" else kind
