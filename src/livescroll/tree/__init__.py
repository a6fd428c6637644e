"""
tree - Element tree providers
=============================
The matcher reads the on-screen document through TreeProvider.

USAGE:
    from livescroll.tree import load_tree

    provider = load_tree("page.yaml")
    root = provider.root()
"""

from .base import ElementNode, TreeProvider
from .snapshot import SnapshotNode, SnapshotTree, load_tree, node_from_dict, tree_from_dict

__all__ = [
    "ElementNode",
    "TreeProvider",
    "SnapshotNode",
    "SnapshotTree",
    "load_tree",
    "node_from_dict",
    "tree_from_dict",
]
