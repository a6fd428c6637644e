"""
snapshot.py - In-memory element trees
=====================================
A tree of plain nodes, built from nested dicts or a YAML file:

    text: Chapter 1
    children:
      - text: The quick brown fox
      - label: Figure 2, a lazy dog

The provider keeps track of which nodes are currently borrowed so that a
caption round that forgets to release a node shows up as `outstanding`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml

from .base import ElementNode, TreeProvider


ShowCallback = Callable[["SnapshotNode"], bool]


class SnapshotNode(ElementNode):
    """A node whose text, label and children are fixed at snapshot time."""

    def __init__(
        self,
        text: Optional[str] = None,
        label: Optional[str] = None,
        children: Optional[List["SnapshotNode"]] = None,
        node_id: Optional[str] = None,
        on_show: Optional[ShowCallback] = None,
    ):
        self._text = text
        self._label = label
        self._children = list(children or [])
        self.node_id = node_id
        self._on_show = on_show
        self._tree: Optional[SnapshotTree] = None
        self.shown = 0

    @property
    def text(self) -> Optional[str]:
        return self._text

    @property
    def label(self) -> Optional[str]:
        return self._label

    def children(self) -> List["SnapshotNode"]:
        if self._tree is not None:
            for child in self._children:
                self._tree._borrow(child)
        return list(self._children)

    def show_on_screen(self) -> bool:
        self.shown += 1
        if self._on_show is None:
            return True
        return self._on_show(self)

    def __repr__(self) -> str:
        return f"SnapshotNode(text={self._text!r}, label={self._label!r})"


class SnapshotTree(TreeProvider):
    """TreeProvider over a fixed SnapshotNode tree."""

    def __init__(self, root: Optional[SnapshotNode] = None):
        self._root = root
        self._borrowed: Dict[int, SnapshotNode] = {}
        self.released = 0
        for node in self.walk():
            node._tree = self

    def root(self) -> Optional[SnapshotNode]:
        if self._root is not None:
            self._borrow(self._root)
        return self._root

    def release(self, node: ElementNode) -> None:
        if self._borrowed.pop(id(node), None) is None:
            raise RuntimeError(f"Released a node that was not borrowed: {node!r}")
        self.released += 1

    @property
    def outstanding(self) -> List[SnapshotNode]:
        """Nodes handed out and not yet released."""
        return list(self._borrowed.values())

    def walk(self) -> List[SnapshotNode]:
        """All nodes in pre-order, without borrowing them."""
        nodes: List[SnapshotNode] = []
        stack = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            nodes.append(node)
            stack.extend(reversed(node._children))
        return nodes

    def _borrow(self, node: SnapshotNode) -> None:
        self._borrowed[id(node)] = node


def node_from_dict(data: Dict[str, Any], on_show: Optional[ShowCallback] = None) -> SnapshotNode:
    """Build a SnapshotNode tree from nested dicts with text/label/children keys."""
    if not isinstance(data, dict):
        raise ValueError(f"Tree node must be a mapping, got {type(data).__name__}")
    children = [node_from_dict(child, on_show) for child in data.get("children") or []]
    return SnapshotNode(
        text=data.get("text"),
        label=data.get("label"),
        children=children,
        node_id=data.get("id"),
        on_show=on_show,
    )


def tree_from_dict(data: Optional[Dict[str, Any]],
                   on_show: Optional[ShowCallback] = None) -> SnapshotTree:
    if not data:
        return SnapshotTree(None)
    return SnapshotTree(node_from_dict(data, on_show))


def load_tree(path: Union[str, Path], on_show: Optional[ShowCallback] = None) -> SnapshotTree:
    """Load a tree snapshot from a YAML (or JSON) file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Tree file not found at {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return tree_from_dict(data, on_show)
