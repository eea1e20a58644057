"""
Tree Engine Package

Binary search tree of modification groups with a mirrored hierarchy,
plus the breadth-first and aggregation helpers it is built on.
"""

from .node import Node, NodeArena
from .ordering import Traversal, compare, sort_key
from .binary_tree import ModificationTree

__all__ = [
    "Node",
    "NodeArena",
    "Traversal",
    "compare",
    "sort_key",
    "ModificationTree",
]
