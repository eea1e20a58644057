"""
Module: tree.binary_tree

Purpose:
    Provides ModificationTree - a binary search tree of ModificationGroup
    records ordered by a comparator fixed at construction, with a parent ->
    child hierarchy kept in lockstep with the BST edges. Insert creates
    both edges in one step; removal rebinds both independently.

Key Functions:
    - insert(group) / remove_group(group)
    - find_group(group) / find_leaf_owner(leaf) / contains(group)
    - level_of(group), groups_at_level(level), groups_up_to_level(level)
    - path_of(group)
    - leaves_under(group), subtree_cost(group), subtree_priority(group)
    - leaf_by_id(id, level), highest_priority_leaf_at_level(level)
    - traverse(traversal), export()

Dependencies:
    - threading (std)
    - .node.NodeArena (BST edge maps)
    - .bfs (frontier expansion)
    - .aggregation (hierarchy walks)

Concurrency:
    One tree-wide lock serialises insert/remove. Queries capture the root
    sequence once and walk without the lock, so a query racing a removal
    may briefly see a half-rebound edge. ``groups()`` copies the membership
    map under the lock. Size and depth are AtomicCounters.
    Lock order: tree lock, then group locks (parent before child).

Levels:
    Insert sets the new level incrementally (BST parent depth + 1) and
    recounts the number of levels by BFS.
    Removal recomputes every depth by BFS because a spliced subtree moves
    up. ``verify_levels()`` runs the same BFS as a consistency check.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional, Set, Union

from ..config import TreeConfig
from ..core.concurrency import AtomicCounter
from ..core.models.groups import DETACHED_LEVEL, ModificationGroup
from ..core.models.kinds import TreeOrder
from ..core.models.modification import Modification
from ..core.schemas.validator import TREE_EXPORT_SCHEMA_VERSION
from ..errors import DuplicateStateError, InvalidArgumentError, NotFoundError, require
from . import aggregation, bfs
from .node import Node, NodeArena, Side
from .ordering import Traversal, compare

logger = logging.getLogger(__name__)


class ModificationTree:
    """
    Thread-safe BST of modification groups with a mirrored hierarchy.

    Attributes:
        config: TreeConfig (ordering rule, path separator, level checks)

    Example:
        >>> tree = ModificationTree(TreeOrder.NAME)
        >>> tree.insert(global_group)
        >>> tree.insert(europe_group)
        >>> tree.path_of(europe_group)
        'Global / Europe'
    """

    def __init__(self, config: Union[TreeConfig, TreeOrder]):
        if isinstance(config, TreeOrder):
            config = TreeConfig(order=config)
        if not isinstance(config, TreeConfig):
            raise InvalidArgumentError(f"Expected TreeConfig or TreeOrder, got {config!r}")
        self.config = config

        self._lock = threading.Lock()
        self._arena = NodeArena()
        self._root: Optional[int] = None
        # Hierarchy edges, child group id -> parent group. The child side
        # lives on each group's own child list.
        self._hierarchy_parent: Dict[int, ModificationGroup] = {}
        self._members: Dict[int, ModificationGroup] = {}
        self._size = AtomicCounter()
        self._depth = AtomicCounter()

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def order(self) -> TreeOrder:
        return self.config.order

    @property
    def size(self) -> int:
        """Number of groups in the tree."""
        return self._size.value

    @property
    def depth(self) -> int:
        """Number of levels (0 when empty, 1 for a lone root)."""
        return self._depth.value

    @property
    def root(self) -> Optional[Node]:
        return self._arena.get(self._root)

    def __len__(self) -> int:
        return self.size

    def __contains__(self, group: object) -> bool:
        if not isinstance(group, ModificationGroup):
            return False
        return self.contains(group)

    def hierarchy_parent(self, group: ModificationGroup) -> Optional[ModificationGroup]:
        """Hierarchy parent of ``group``, or None for a root or absent group."""
        require(group, "group")
        return self._hierarchy_parent.get(group.group_id)

    # ─────────────────────────────────────────────────────────────────────────
    # Mutation
    # ─────────────────────────────────────────────────────────────────────────

    def insert(self, group: ModificationGroup) -> Node:
        """
        Insert a group, creating its BST edge and hierarchy edge together.

        The new node hangs left of a parent that compares greater or equal
        and right of one that compares strictly less. Its level is the
        parent's level + 1 and the parent gains it as a hierarchy child.

        Returns:
            The node created for ``group``

        Raises:
            InvalidArgumentError: If group is None
            DuplicateStateError: If the group (or a comparator-equal one)
                is already present. Nothing is changed.
        """
        require(group, "group")

        with self._lock:
            if self._root is None:
                node = self._arena.create(group)
                self._root = node.sequence
                group.set_level(0)
                self._members[group.group_id] = group
                self._size.increment()
                self._depth.set(1)
                logger.debug(f"Inserted root group {group.group_id} ({group.name!r})")
                return node

            if bfs.find_node(self._arena, self._root, bfs.holds_group(group)) is not None:
                logger.warning(f"Rejected duplicate insert of group {group.group_id}")
                raise DuplicateStateError(
                    f"ModificationGroup {group.group_id} ({group.name!r}) already exists in tree"
                )

            parent, side, parent_depth = self._insertion_point(group)
            parent_group = parent.group
            level = parent_depth + 1

            node = self._arena.create(group)
            self._arena.link(parent.sequence, node.sequence, side)
            parent_group._attach_child(group)
            self._hierarchy_parent[group.group_id] = parent_group
            group.set_level(level)
            self._members[group.group_id] = group

            self._size.increment()
            self._depth.set(bfs.count_levels(self._arena, self._root))
            logger.debug(
                f"Inserted group {group.group_id} ({group.name!r}) {side} of "
                f"{parent_group.group_id} at level {level}"
            )

            if self.config.verify_levels and not self._levels_consistent():
                logger.warning("Level bookkeeping drifted after insert; recomputing")
                self._refresh_levels()
            return node

    def _insertion_point(self, group: ModificationGroup) -> tuple[Node, Side, int]:
        # caller holds the tree lock and has checked the root exists
        current = self._arena.get(self._root)
        depth = 0
        while True:
            comparison = compare(self.order, current.group, group)
            if comparison == 0:
                logger.warning(
                    f"Rejected insert of group {group.group_id}: equal {self.order} "
                    f"to group {current.group.group_id}"
                )
                raise DuplicateStateError(
                    f"A group equal by {self.order} to {group.name!r} already exists in tree"
                )
            side: Side = "right" if comparison < 0 else "left"
            next_seq = self._arena.child(current.sequence, side)
            if next_seq is None:
                return current, side, depth
            current = self._arena.get(next_seq)
            depth += 1

    def remove_group(self, group: ModificationGroup) -> bool:
        """
        Remove a group from both the hierarchy and the BST.

        Hierarchy: the group leaves its parent's child list and its own
        children are rebound to that parent. BST: a node with fewer than
        two children is replaced by its remaining subtree; otherwise the
        in-order successor's group is promoted into the node and the
        successor's old node is spliced out of the right subtree.

        Returns:
            False if the group is not in the tree, True once removed
        """
        require(group, "group")

        with self._lock:
            found = bfs.find_node(self._arena, self._root, bfs.holds_group(group))
            if found is None:
                return False
            node, bst_parent = found

            self._unlink_hierarchy(group)
            self._unlink_bst(node, bst_parent)
            self._members.pop(group.group_id, None)
            group.set_level(DETACHED_LEVEL)

            self._size.decrement()
            self._refresh_levels()
            logger.debug(f"Removed group {group.group_id} ({group.name!r})")
            return True

    def _unlink_hierarchy(self, group: ModificationGroup) -> None:
        parent = self._hierarchy_parent.pop(group.group_id, None)
        if parent is not None:
            parent._detach_child(group)

        for child in group.children:
            group._detach_child(child)
            if parent is not None:
                parent._attach_child(child)
                self._hierarchy_parent[child.group_id] = parent
            else:
                self._hierarchy_parent.pop(child.group_id, None)

    def _unlink_bst(self, node: Node, bst_parent: Optional[int]) -> None:
        arena = self._arena
        sequence = node.sequence
        left, right = arena.left_of(sequence), arena.right_of(sequence)

        if left is None or right is None:
            self._replace_child(bst_parent, sequence, left if right is None else right)
            arena.discard(sequence)
            return

        successor_parent, successor = sequence, right
        while arena.left_of(successor) is not None:
            successor_parent, successor = successor, arena.left_of(successor)

        node.group = arena.get(successor).group
        self._replace_child(successor_parent, successor, arena.right_of(successor))
        arena.discard(successor)

    def _replace_child(self, parent: Optional[int], old: int, new: Optional[int]) -> None:
        if parent is None:
            self._root = new
            return
        side = self._arena.side_of(parent, old)
        if side is not None:
            self._arena.link(parent, new, side)

    # ─────────────────────────────────────────────────────────────────────────
    # Level bookkeeping
    # ─────────────────────────────────────────────────────────────────────────

    def _refresh_levels(self) -> None:
        # caller holds the tree lock
        levels = 0
        for depth, nodes in bfs.iter_levels(self._arena, self._root):
            for node in nodes:
                node.group._assign_level(depth)
            levels = depth + 1
        self._depth.set(levels)

    def _levels_consistent(self) -> bool:
        levels = 0
        for depth, nodes in bfs.iter_levels(self._arena, self._root):
            if any(node.group.level != depth for node in nodes):
                return False
            levels = depth + 1
        return levels == self._depth.value

    def verify_levels(self) -> bool:
        """
        Recompute every depth by BFS and compare with the cached values.

        Returns:
            True if every cached group level and the depth counter agree
        """
        return self._levels_consistent()

    def _validate_level(self, level: int) -> None:
        depth = self.depth
        if level < 0 or level >= depth:
            raise InvalidArgumentError(
                f"Level must be between 0 and {depth - 1}, got {level}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Search
    # ─────────────────────────────────────────────────────────────────────────

    def find_group(self, group: ModificationGroup) -> Node:
        """
        Find the node holding ``group`` (matched by id, BFS).

        Raises:
            NotFoundError: If the tree is empty or the group is absent
        """
        require(group, "group")
        root = self._root
        if root is None:
            raise NotFoundError("Tree is empty")
        found = bfs.find_node(self._arena, root, bfs.holds_group(group))
        if found is None:
            raise NotFoundError(f"ModificationGroup {group.group_id} ({group.name!r}) not found in tree")
        return found[0]

    def contains(self, group: ModificationGroup) -> bool:
        require(group, "group")
        return bfs.find_node(self._arena, self._root, bfs.holds_group(group)) is not None

    def find_leaf_owner(self, modification: Modification) -> Node:
        """
        Find the node whose group holds ``modification``.

        Raises:
            NotFoundError: If the tree is empty or no group holds the leaf
        """
        require(modification, "modification")
        root = self._root
        if root is None:
            raise NotFoundError("Tree is empty")
        found = bfs.find_node(
            self._arena, root, lambda node: node.group.has_modification(modification)
        )
        if found is None:
            raise NotFoundError(f"Modification {modification.modification_id} not found in tree")
        return found[0]

    # ─────────────────────────────────────────────────────────────────────────
    # Level queries
    # ─────────────────────────────────────────────────────────────────────────

    def level_of(self, group: ModificationGroup) -> int:
        """
        Level of ``group``; -1 if it is not in the tree.

        A cached level is trusted only when non-negative and the group is
        confirmed present; otherwise the level is found by BFS.
        """
        require(group, "group")
        root = self._root
        cached = group.level
        if cached >= 0 and bfs.find_node(self._arena, root, bfs.holds_group(group)) is not None:
            return cached
        return bfs.level_of(self._arena, root, group)

    def groups_at_level(self, level: int) -> List[ModificationGroup]:
        """
        Groups at exactly ``level``, left to right.

        Raises:
            InvalidArgumentError: If level is negative or >= depth
        """
        self._validate_level(level)
        return bfs.groups_at_level(self._arena, self._root, level)

    def groups_up_to_level(self, level: int) -> List[ModificationGroup]:
        """
        Groups at every level from 0 through ``level``, in BFS order.

        Raises:
            InvalidArgumentError: If level is negative or >= depth
        """
        self._validate_level(level)
        return bfs.groups_up_to_level(self._arena, self._root, level)

    def path_of(self, group: ModificationGroup) -> str:
        """
        Ancestor names from the root to ``group`` joined by the separator.

        Returns an empty string when the group is absent.
        """
        require(group, "group")
        trail = bfs.path_to(self._arena, self._root, group)
        return self.config.path_separator.join(node.group.name for node in trail)

    # ─────────────────────────────────────────────────────────────────────────
    # Leaf queries
    # ─────────────────────────────────────────────────────────────────────────

    def _leaves_at_level(self, level: int) -> List[Modification]:
        leaves: List[Modification] = []
        for group in self.groups_at_level(level):
            leaves.extend(group.modifications)
        return leaves

    def leaf_by_id(self, modification_id: int, level: int) -> Modification:
        """
        Find a leaf by id among the direct members of groups at ``level``.

        Raises:
            InvalidArgumentError: If the id is not positive or the level is
                out of range
            NotFoundError: If no group at that level holds the id
        """
        if modification_id <= 0:
            raise InvalidArgumentError("Modification ID must be positive")
        for leaf in self._leaves_at_level(level):
            if leaf.modification_id == modification_id:
                return leaf
        raise NotFoundError(
            f"No modification found with ID = {modification_id} and level = {level}"
        )

    def highest_priority_leaf_at_level(self, level: int) -> Optional[Modification]:
        """
        Leaf with the highest priority among groups at ``level``.

        Ties go to the lowest id. Returns None if the level has no leaves.
        """
        leaves = self._leaves_at_level(level)
        if not leaves:
            return None
        return max(leaves, key=lambda leaf: (leaf.priority, -leaf.modification_id))

    def leaves_under(self, group: ModificationGroup) -> Set[Modification]:
        """
        Every leaf in ``group`` and its hierarchy descendants.

        Raises:
            NotFoundError: If the group is not in the tree
        """
        self.find_group(group)
        return aggregation.collect_leaves(group)

    def subtree_cost(self, group: ModificationGroup) -> int:
        """Sum of leaf total costs under ``group``."""
        return aggregation.total_cost(self.leaves_under(group))

    def subtree_priority(self, group: ModificationGroup) -> int:
        """Sum of leaf priorities under ``group``."""
        return aggregation.total_priority(self.leaves_under(group))

    def cost_at_level(self, level: int) -> int:
        """Sum of aggregate costs of the groups at ``level``."""
        return sum(group.cost for group in self.groups_at_level(level))

    # ─────────────────────────────────────────────────────────────────────────
    # Listings / traversal / export
    # ─────────────────────────────────────────────────────────────────────────

    def groups(self) -> List[ModificationGroup]:
        """Every group in the tree, in insertion order."""
        with self._lock:
            return list(self._members.values())

    def modifications(self) -> Set[Modification]:
        """Every leaf held by a group in the tree."""
        found: Set[Modification] = set()
        for group in self.groups():
            found.update(group.modifications)
        return found

    def traverse(self, traversal: Traversal = Traversal.IN_ORDER) -> List[ModificationGroup]:
        """Groups sorted by the tree comparator (ascending or descending)."""
        return [node.group for node in bfs.in_order(self._arena, self._root, traversal)]

    def export(self) -> Dict[str, Any]:
        """
        Nested snapshot of the BST for display collaborators.

        The result passes ``validate_tree_export()``.
        """
        root = self._root
        rendered: Dict[int, Dict[str, Any]] = {}
        for depth, nodes in bfs.iter_levels(self._arena, root):
            for node in nodes:
                rendered[node.sequence] = {
                    "sequence": node.sequence,
                    "level": depth,
                    "group": node.group.to_dict(),
                    "left": None,
                    "right": None,
                }
        for sequence, entry in rendered.items():
            for side, child in (("left", self._arena.left_of(sequence)),
                                ("right", self._arena.right_of(sequence))):
                if child in rendered:
                    entry[side] = rendered[child]

        return {
            "schema_version": TREE_EXPORT_SCHEMA_VERSION,
            "order": str(self.order),
            "size": len(rendered),
            "depth": self.depth,
            "root": rendered.get(root) if root is not None else None,
        }

    def __repr__(self) -> str:
        return f"ModificationTree(order={self.order}, size={self.size}, depth={self.depth})"
