"""
Module: tree.node

Purpose:
    Node storage for the BST. Nodes live in an arena keyed by a creation
    sequence number; left/right ordering edges are two explicit maps over
    those keys. Hierarchy edges are kept elsewhere (on the groups and in
    the tree's parent map), so either edge set can be rebound without
    touching the other.

Key Classes:
    - Node: Wraps one group plus its creation sequence number
    - NodeArena: Node table and left/right edge maps

Used By:
    - tree.binary_tree.ModificationTree
    - tree.bfs
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional

from ..core.concurrency import AtomicCounter
from ..core.models.groups import ModificationGroup

Side = Literal["left", "right"]


@dataclass(eq=False)
class Node:
    """
    BST node.

    ``group`` is reassigned when an in-order successor is promoted into
    this node during removal; ``sequence`` never changes.
    """

    sequence: int
    group: ModificationGroup

    @property
    def level(self) -> int:
        return self.group.level

    def __repr__(self) -> str:
        return f"Node(sequence={self.sequence}, group={self.group.name!r})"


class NodeArena:
    """
    Node table plus left/right edge maps.

    Reads are plain dict lookups and may run while the owning tree mutates
    under its lock; a reader that finds a key missing treats the edge as
    absent.
    """

    def __init__(self):
        self._nodes: Dict[int, Node] = {}
        self._left: Dict[int, int] = {}
        self._right: Dict[int, int] = {}
        self._sequence = AtomicCounter()

    def __len__(self) -> int:
        return len(self._nodes)

    def create(self, group: ModificationGroup) -> Node:
        node = Node(sequence=self._sequence.increment(), group=group)
        self._nodes[node.sequence] = node
        return node

    def get(self, sequence: Optional[int]) -> Optional[Node]:
        if sequence is None:
            return None
        return self._nodes.get(sequence)

    def left_of(self, sequence: int) -> Optional[int]:
        return self._left.get(sequence)

    def right_of(self, sequence: int) -> Optional[int]:
        return self._right.get(sequence)

    def child(self, sequence: int, side: Side) -> Optional[int]:
        return self._left.get(sequence) if side == "left" else self._right.get(sequence)

    def children_of(self, sequence: int) -> list[int]:
        """Existing children, left before right."""
        found = []
        left = self._left.get(sequence)
        if left is not None:
            found.append(left)
        right = self._right.get(sequence)
        if right is not None:
            found.append(right)
        return found

    def link(self, parent: int, child: Optional[int], side: Side) -> None:
        """Point ``parent``'s ``side`` edge at ``child`` (None clears it)."""
        edges = self._left if side == "left" else self._right
        if child is None:
            edges.pop(parent, None)
        else:
            edges[parent] = child

    def side_of(self, parent: int, child: int) -> Optional[Side]:
        if self._left.get(parent) == child:
            return "left"
        if self._right.get(parent) == child:
            return "right"
        return None

    def discard(self, sequence: int) -> None:
        """Drop a node and its outgoing edges."""
        self._nodes.pop(sequence, None)
        self._left.pop(sequence, None)
        self._right.pop(sequence, None)
