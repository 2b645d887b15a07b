"""
Port interfaces for htmlplain.

These are Python Protocol classes defining the contracts that parser adapters
must satisfy. The core imports ONLY from this file (and models.py) for anything
that touches a parsed tree.

Adapters implement these protocols without inheriting from them (structural subtyping).
mypy verifies conformance statically.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from htmlplain.core.models import NodeKind, TraversalEvent


class NodePort(Protocol):
    """
    Read-only view of a single node in a parsed tree.

    Only the accessor matching the node's kind is meaningful: `tag_name()` for
    elements, `content()` for text nodes. Others may return an empty string.
    """

    def kind(self) -> NodeKind:
        """Return the kind of node ("document", "element", "text", ...)."""
        ...

    def tag_name(self) -> str:
        """Return the element's tag name as produced by the parser (lower-case)."""
        ...

    def content(self) -> str:
        """Return a text node's content, already entity-decoded."""
        ...


class TreePort(Protocol):
    """
    Interface for walking a parsed tree.

    The caller guarantees the tree is not mutated while a traversal is in
    progress; implementations need not copy or lock anything.
    """

    def traverse(self, node: NodePort) -> Iterable[TraversalEvent]:
        """
        Yield Enter/Exit events for `node` and its descendants in document order.

        The starting node itself produces the first Enter and the last Exit.
        """
        ...
