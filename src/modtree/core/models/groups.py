"""
Module: groups

Purpose:
    Provides ModificationGroup - the composite record of the tree. A group
    owns a set of leaf modifications and an ordered list of child groups.
    Its priority and cost are derived from its direct members only and
    resummed whenever membership changes.

Key Functions:
    - ModificationGroup.add_modifications(): Move leaves into the group
    - ModificationGroup.remove_modification(): Drop a leaf, clear its owner
    - ModificationGroup.set_level(): Set level and shift every descendant
    - ModificationGroup.to_dict(): Serialization for display/export

Dependencies:
    - threading (std)
    - .modification.Modification
    - .costing.CostPolicy

Used By:
    - tree.binary_tree.ModificationTree
    - tree.aggregation

Locking:
    Two independent guards. ``membership_lock`` covers the leaf set and the
    derived sums; ``children_lock`` covers the child list. Nothing else is
    acquired while ``membership_lock`` is held. A walk holding a parent's
    ``children_lock`` may take a child's locks (top-down only).
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Iterable

from ...errors import InvalidArgumentError, require
from ..concurrency import AtomicCounter
from .costing import STANDARD, CostPolicy
from .modification import Modification

logger = logging.getLogger(__name__)

_group_ids = AtomicCounter()

DETACHED_LEVEL = -1


class ModificationGroup:
    """
    Composite node aggregating leaves and child groups.

    Attributes:
        group_id: Unique, monotonically increasing id (generated)
        name: Display name (required)
        policy: Formula used for the aggregate cost
        membership_lock: Guards the member set and derived sums
        children_lock: Guards the child group list

    Invariants:
        - priority == sum of direct member priorities
        - cost == policy.aggregate(direct members)
        - every member's owner is this group
        - level is 0 for a root, -1 while detached

    Example:
        >>> a = Modification("Bonuses", 20, 10, ModificationType.MODIFY)
        >>> g = ModificationGroup([a], "Europe")
        >>> g.cost, g.priority
        (30, 20)
        >>> a.owner is g
        True
    """

    def __init__(
        self,
        modifications: Iterable[Modification],
        name: str,
        *,
        policy: CostPolicy = STANDARD,
    ):
        require(modifications, "modifications")
        require(name, "name")
        if not isinstance(policy, CostPolicy):
            raise InvalidArgumentError(f"policy does not implement CostPolicy: {policy!r}")

        self.group_id = _group_ids.increment()
        self.name = name
        self.policy = policy
        self.membership_lock = threading.Lock()
        self.children_lock = threading.Lock()

        self._modifications: set[Modification] = set()
        self._children: list[ModificationGroup] = []
        self._priority = 0
        self._cost = 0
        self._level = DETACHED_LEVEL

        self.add_modifications(modifications)

    # ─────────────────────────────────────────────────────────────────────────
    # Derived values
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def priority(self) -> int:
        """Sum of direct member priorities."""
        return self._priority

    @property
    def cost(self) -> int:
        """Aggregate cost of direct members."""
        return self._cost

    @property
    def level(self) -> int:
        return self._level

    @property
    def modifications(self) -> frozenset[Modification]:
        """Snapshot of the direct member set."""
        with self.membership_lock:
            return frozenset(self._modifications)

    @property
    def children(self) -> tuple[ModificationGroup, ...]:
        """Snapshot of the child group list."""
        with self.children_lock:
            return tuple(self._children)

    def has_modification(self, modification: Modification) -> bool:
        with self.membership_lock:
            return modification in self._modifications

    def _resum(self) -> None:
        # caller holds membership_lock
        self._priority = sum(m.priority for m in self._modifications)
        self._cost = self.policy.aggregate(self._modifications)

    # ─────────────────────────────────────────────────────────────────────────
    # Membership
    # ─────────────────────────────────────────────────────────────────────────

    def add_modifications(self, modifications: Iterable[Modification]) -> None:
        """
        Move leaves into this group.

        A leaf held by another group is removed from that group first, so
        a leaf never sits in two member sets. Each move runs under the leaf's
        own lock, so concurrent moves of one leaf are serialised.

        Args:
            modifications: Leaves to add

        Raises:
            InvalidArgumentError: If the iterable or any leaf is None
        """
        require(modifications, "modifications")
        incoming = list(modifications)
        for modification in incoming:
            require(modification, "modification")

        for modification in incoming:
            # leaf lock first, then group locks
            with modification._move_lock:
                previous = modification.owner
                if previous is not None and previous is not self:
                    previous.remove_modification(modification)
                with self.membership_lock:
                    self._modifications.add(modification)
                    modification._bind_owner(self)
                    self._resum()

    def remove_modification(self, modification: Modification) -> bool:
        """
        Remove a leaf and clear its owner handle.

        Returns:
            True if the leaf was a member, False otherwise
        """
        require(modification, "modification")
        with self.membership_lock:
            if modification not in self._modifications:
                return False
            self._modifications.discard(modification)
            modification._clear_owner()
            self._resum()
        logger.debug(
            f"Removed modification {modification.modification_id} from group {self.group_id}"
        )
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # Hierarchy (driven by the tree engine)
    # ─────────────────────────────────────────────────────────────────────────

    def _attach_child(self, child: ModificationGroup) -> None:
        require(child, "child group")
        if child is self:
            raise InvalidArgumentError("A group cannot be its own child")
        with self.children_lock:
            if child not in self._children:
                self._children.append(child)

    def _detach_child(self, child: ModificationGroup) -> bool:
        require(child, "child group")
        with self.children_lock:
            if child not in self._children:
                return False
            self._children.remove(child)
            return True

    def set_level(self, new_level: int) -> bool:
        """
        Set this group's level and shift every descendant by the same delta.

        Args:
            new_level: Level to move to

        Returns:
            False if the level was unchanged, True otherwise
        """
        if new_level == self._level:
            return False
        delta = new_level - self._level
        self._level = new_level
        for child in self.children:
            child._shift_level(delta)
        return True

    def _shift_level(self, delta: int) -> None:
        self._level += delta
        for child in self.children:
            child._shift_level(delta)

    def _assign_level(self, level: int) -> None:
        # no cascade; used when the tree recomputes every depth itself
        self._level = level

    # ─────────────────────────────────────────────────────────────────────────
    # Identity / serialization
    # ─────────────────────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModificationGroup):
            return NotImplemented
        return self.group_id == other.group_id

    def __hash__(self) -> int:
        return hash(self.group_id)

    def __repr__(self) -> str:
        return (
            f"ModificationGroup(group_id={self.group_id}, name={self.name!r}, "
            f"priority={self._priority}, cost={self._cost}, level={self._level})"
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to dictionary for display or export.

        Members are ordered by id; children keep hierarchy order.
        """
        members = sorted(self.modifications, key=lambda m: m.modification_id)
        return {
            "group_id": self.group_id,
            "name": self.name,
            "priority": self._priority,
            "cost": self._cost,
            "level": self._level,
            "modifications": [m.to_dict() for m in members],
            "child_ids": [c.group_id for c in self.children],
        }
