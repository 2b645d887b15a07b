"""
Core data models for htmlplain.

These are plain dataclasses with no external dependencies beyond the standard
library. They describe the traversal events the core consumes and the content
items it derives from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from htmlplain.core.ports import NodePort

type NodeKind = Literal["document", "element", "text", "comment", "other"]


@dataclass(frozen=True)
class Enter:
    """A node is visited for the first time (pre-order open)."""

    node: NodePort


@dataclass(frozen=True)
class Exit:
    """A node is left after all of its children were visited (post-order close)."""

    node: NodePort


type TraversalEvent = Enter | Exit


@dataclass(frozen=True)
class TextRun:
    """Literal text taken verbatim from a non-blank text node."""

    text: str


@dataclass(frozen=True)
class Break:
    """A candidate line boundary worth `count` newlines."""

    count: int

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"Break count must be >= 1, got {self.count}")


type ContentItem = TextRun | Break
