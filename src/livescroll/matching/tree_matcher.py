"""
tree_matcher.py - Candidate gathering
=====================================
Walks the whole element tree and keeps every node that contains the anchor
word. Nodes that do not match are released as soon as their children have
been read; matching nodes stay borrowed inside the CandidateSet until the
end of the round.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional

from ..tree.base import ElementNode
from ..utils.logger import get_logger

logger = get_logger(__name__)

ReleaseFn = Callable[[ElementNode], None]


def contains_word(node: ElementNode, word: str) -> bool:
    """Case-insensitive substring test against the node's text OR label."""
    needle = word.casefold()
    for value in (node.text, node.label):
        if value and needle in str(value).casefold():
            return True
    return False


class CandidateSet:
    """
    Nodes under consideration, unique by identity, in tree order.
    Filled once by the tree walk; afterwards it only shrinks.
    """

    def __init__(self) -> None:
        self._nodes: Dict[int, ElementNode] = {}
        self._sealed = False

    def add(self, node: ElementNode) -> None:
        if self._sealed:
            raise RuntimeError("CandidateSet is sealed; candidates can only be removed")
        self._nodes.setdefault(id(node), node)

    def seal(self) -> None:
        """No more additions after the tree walk."""
        self._sealed = True

    def retain_containing(self, word: str) -> List[ElementNode]:
        """Drop every node that does not contain `word`. Returns the dropped nodes."""
        removed = [node for node in self._nodes.values() if not contains_word(node, word)]
        for node in removed:
            del self._nodes[id(node)]
        return removed

    def only(self) -> ElementNode:
        if len(self._nodes) != 1:
            raise ValueError(f"Expected exactly one candidate, have {len(self._nodes)}")
        return next(iter(self._nodes.values()))

    def drain(self) -> List[ElementNode]:
        """Remove and return all nodes."""
        nodes = list(self._nodes.values())
        self._nodes.clear()
        return nodes

    def __contains__(self, node: object) -> bool:
        return id(node) in self._nodes and self._nodes[id(node)] is node

    def __iter__(self) -> Iterator[ElementNode]:
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"CandidateSet({list(self._nodes.values())!r})"


def collect_candidates(word: str, root: Optional[ElementNode],
                       release: ReleaseFn) -> CandidateSet:
    """
    Pre-order walk from `root` collecting every node containing `word`.

    Every reachable node is visited exactly once and the walk never stops
    early. Non-matching nodes are passed to `release` right after their
    children are read and are not touched again.

    If the walk fails, every node borrowed so far is released before the
    exception propagates.
    """
    candidates = CandidateSet()
    stack: List[ElementNode] = [root] if root is not None else []
    visited = 0
    current: Optional[ElementNode] = None

    try:
        while stack:
            current = stack.pop()
            visited += 1
            # reversed so the first child is popped first
            stack.extend(reversed(current.children()))
            if contains_word(current, word):
                candidates.add(current)
            else:
                release(current)
            current = None
    except BaseException:
        leftovers = stack + candidates.drain()
        if current is not None:
            leftovers.insert(0, current)
        stack.clear()
        for node in leftovers:
            release(node)
        raise

    candidates.seal()
    logger.debug("Visited %d nodes, %d contain %r", visited, len(candidates), word)
    return candidates
