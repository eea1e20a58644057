"""
Module: modification

Purpose:
    Provides the Modification dataclass - the leaf record of the tree.
    A modification has fixed fields, a total cost derived once from its
    type multiplier, and a handle to the group that currently holds it.
    The handle is only ever invalidated by clearing it on detachment.

Key Functions:
    - Modification.resolved(): Remove the leaf from its owner (one-shot)
    - Modification.owner: Current owning group or None
    - Modification.to_dict(): Serialization for display/export

Dependencies:
    - dataclasses (std)
    - threading (std)
    - .costing.CostPolicy
    - ..concurrency.AtomicCounter

Used By:
    - core.models.groups.ModificationGroup
    - tree.binary_tree.ModificationTree
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from ...errors import AlreadyResolvedError, InvalidArgumentError, require
from ..concurrency import AtomicCounter
from .costing import STANDARD, CostPolicy
from .kinds import ModificationType

if TYPE_CHECKING:
    from .groups import ModificationGroup


_modification_ids = AtomicCounter()


@dataclass(eq=False)
class Modification:
    """
    Leaf cost record.

    Attributes:
        name: Display name (required)
        priority: Signed priority value
        cost: Signed base cost
        kind: ModificationType carrying the cost multiplier
        policy: Cost formula; defaults to base x multiplier
        modification_id: Unique, monotonically increasing id (generated)
        total_cost: Derived once on construction, never recomputed

    Invariants:
        - total_cost == policy.compute_total(cost, kind)
        - equality and hashing use modification_id only

    Example:
        >>> m = Modification("Hiring", 30, 100, ModificationType.REMOVE)
        >>> m.total_cost
        -100
        >>> m.owner is None
        True
    """

    name: str
    priority: int
    cost: int
    kind: ModificationType
    policy: CostPolicy = field(default=STANDARD, repr=False)
    modification_id: int = field(init=False)
    total_cost: int = field(init=False)
    _owner: Optional[ModificationGroup] = field(init=False, default=None, repr=False)
    # Serialises owner changes: read owner, detach, rebind. Always taken
    # before any group lock.
    _move_lock: threading.Lock = field(init=False, default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        """Validate fields and derive the total cost."""
        require(self.name, "name")
        if not isinstance(self.kind, ModificationType):
            raise InvalidArgumentError(f"kind must be a ModificationType: {self.kind!r}")
        if not isinstance(self.policy, CostPolicy):
            raise InvalidArgumentError(f"policy does not implement CostPolicy: {self.policy!r}")
        self.modification_id = _modification_ids.increment()
        self.total_cost = self.policy.compute_total(self.cost, self.kind)

    # ─────────────────────────────────────────────────────────────────────────
    # Owner handle
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def owner(self) -> Optional[ModificationGroup]:
        """Group currently holding this leaf, or None once resolved."""
        return self._owner

    def _bind_owner(self, group: ModificationGroup) -> None:
        self._owner = group

    def _clear_owner(self) -> None:
        self._owner = None

    def resolved(self) -> bool:
        """
        Remove this leaf from its owner's member set.

        Returns:
            True if the owner held this leaf and dropped it

        Raises:
            AlreadyResolvedError: If the owner handle is already cleared, or
                a concurrent call detached the leaf first. Treat this as
                "nothing left to do".
        """
        with self._move_lock:
            owner = self._owner
            if owner is None or not owner.remove_modification(self):
                raise AlreadyResolvedError(
                    f"Modification {self.modification_id} was already removed or never had an owner"
                )
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # Identity / serialization
    # ─────────────────────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Modification):
            return NotImplemented
        return self.modification_id == other.modification_id

    def __hash__(self) -> int:
        return hash(self.modification_id)

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to dictionary for display or export.

        Returns:
            Dict with id, name, priority, base/total cost and kind
        """
        return {
            "modification_id": self.modification_id,
            "name": self.name,
            "priority": self.priority,
            "cost": self.cost,
            "kind": str(self.kind),
            "total_cost": self.total_cost,
        }
