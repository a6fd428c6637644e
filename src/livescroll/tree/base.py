from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional


class ElementNode(ABC):
    """
    One text-bearing node of the on-screen document.
    Nodes are borrowed from a TreeProvider for a single caption round.
    The matcher only reads them; it never mutates a node.
    """

    @property
    @abstractmethod
    def text(self) -> Optional[str]:
        """Visible text, if any."""
        raise NotImplementedError

    @property
    @abstractmethod
    def label(self) -> Optional[str]:
        """Accessible label / description, if any."""
        raise NotImplementedError

    @abstractmethod
    def children(self) -> List["ElementNode"]:
        """Child nodes in the tree's native order."""
        raise NotImplementedError

    @abstractmethod
    def show_on_screen(self) -> bool:
        """Request this node be scrolled into view. True on success."""
        raise NotImplementedError


class TreeProvider(ABC):
    """
    Any source of element trees must implement this.
    This is how the matcher 'sees' the document.
    """

    @abstractmethod
    def root(self) -> Optional[ElementNode]:
        """Current root node, or None when there is no tree."""
        raise NotImplementedError

    def release(self, node: ElementNode) -> None:
        """The matcher no longer needs `node`. Providers may reclaim it."""

    async def snapshot(self) -> None:
        """Take a fresh tree snapshot before a round. Static trees need nothing."""
