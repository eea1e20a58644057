"""
Module: tree.bfs

Purpose:
    Breadth-first primitives over the BST edge maps. Every function takes
    the arena and a root sequence captured once by the caller and walks
    from there without any lock; a walk that races a removal may see a
    stale edge and simply skips nodes that no longer exist.

Key Functions:
    - iter_levels(): Frontier expansion yielding (depth, nodes)
    - find_node(): BFS search returning the node and its BST parent
    - level_of(): Depth of a group, -1 if absent
    - groups_at_level() / groups_up_to_level(): Level-scoped enumeration
    - count_levels(): Number of levels in the tree
    - path_to(): Ancestor nodes from root to a group (depth-first)
    - in_order(): Ordered walk in either direction

Used By:
    - tree.binary_tree.ModificationTree
"""

from __future__ import annotations

from collections import deque
from typing import Callable, Iterator, List, Optional, Tuple

from ..core.models.groups import ModificationGroup
from .node import Node, NodeArena
from .ordering import Traversal


def iter_levels(arena: NodeArena, root: Optional[int]) -> Iterator[Tuple[int, List[Node]]]:
    """
    Level-synchronous walk using a current-level and a next-level queue.

    Yields:
        (depth, nodes at that depth) from the root down
    """
    start = arena.get(root)
    if start is None:
        return
    current: deque[Node] = deque([start])
    depth = 0
    while current:
        level_nodes = list(current)
        yield depth, level_nodes
        upcoming: deque[Node] = deque()
        for node in level_nodes:
            for child_seq in arena.children_of(node.sequence):
                child = arena.get(child_seq)
                if child is not None:
                    upcoming.append(child)
        current = upcoming
        depth += 1


def find_node(
    arena: NodeArena,
    root: Optional[int],
    predicate: Callable[[Node], bool],
) -> Optional[Tuple[Node, Optional[int]]]:
    """
    BFS for the first node matching ``predicate``.

    Returns:
        (node, sequence of its BST parent or None for the root), or None
    """
    start = arena.get(root)
    if start is None:
        return None
    queue: deque[Tuple[Node, Optional[int]]] = deque([(start, None)])
    while queue:
        node, parent = queue.popleft()
        if predicate(node):
            return node, parent
        for child_seq in arena.children_of(node.sequence):
            child = arena.get(child_seq)
            if child is not None:
                queue.append((child, node.sequence))
    return None


def holds_group(group: ModificationGroup) -> Callable[[Node], bool]:
    """Predicate matching the node that wraps ``group`` (by id)."""
    group_id = group.group_id
    return lambda node: node.group.group_id == group_id


def level_of(arena: NodeArena, root: Optional[int], group: ModificationGroup) -> int:
    """Depth of ``group``, or -1 if absent or the tree is empty."""
    matches = holds_group(group)
    for depth, nodes in iter_levels(arena, root):
        if any(matches(node) for node in nodes):
            return depth
    return -1


def groups_at_level(arena: NodeArena, root: Optional[int], level: int) -> List[ModificationGroup]:
    """Groups at exactly ``level``, left to right."""
    for depth, nodes in iter_levels(arena, root):
        if depth == level:
            return [node.group for node in nodes]
    return []


def groups_up_to_level(arena: NodeArena, root: Optional[int], level: int) -> List[ModificationGroup]:
    """Groups at every depth from 0 through ``level`` inclusive, in BFS order."""
    found: List[ModificationGroup] = []
    for depth, nodes in iter_levels(arena, root):
        if depth > level:
            break
        found.extend(node.group for node in nodes)
    return found


def count_levels(arena: NodeArena, root: Optional[int]) -> int:
    """Number of levels: 0 for an empty tree, 1 for a lone root."""
    total = 0
    for _ in iter_levels(arena, root):
        total += 1
    return total


def path_to(arena: NodeArena, root: Optional[int], group: ModificationGroup) -> List[Node]:
    """
    Depth-first search for ``group``.

    Returns:
        Nodes from the root to the target inclusive, or [] if absent
    """
    start = arena.get(root)
    if start is None:
        return []
    matches = holds_group(group)
    # Each entry carries the path that led to it.
    stack: List[Tuple[Node, List[Node]]] = [(start, [start])]
    while stack:
        node, trail = stack.pop()
        if matches(node):
            return trail
        # Push right first so the left subtree is explored first.
        for child_seq in reversed(arena.children_of(node.sequence)):
            child = arena.get(child_seq)
            if child is not None:
                stack.append((child, trail + [child]))
    return []


def in_order(
    arena: NodeArena,
    root: Optional[int],
    traversal: Traversal = Traversal.IN_ORDER,
) -> List[Node]:
    """Nodes sorted by the tree comparator, ascending or descending."""
    if traversal is Traversal.IN_ORDER:
        first, second = arena.left_of, arena.right_of
    else:
        first, second = arena.right_of, arena.left_of

    ordered: List[Node] = []
    stack: List[Node] = []
    current = arena.get(root)
    while stack or current is not None:
        while current is not None:
            stack.append(current)
            current = arena.get(first(current.sequence))
        node = stack.pop()
        ordered.append(node)
        current = arena.get(second(node.sequence))
    return ordered
