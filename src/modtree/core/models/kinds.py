"""
Module: kinds

Purpose:
    Fixed enumerations used by the models and the tree engine: the
    modification type with its immutable cost multiplier, and the
    ordering rule a tree is built with.

Key Classes:
    - ModificationType: ADD (1), REMOVE (-1), MODIFY (3)
    - TreeOrder: NAME, PRIORITY, TOTAL_COST

Used By:
    - core.models.costing
    - core.models.modification
    - tree.ordering
"""

from __future__ import annotations

from enum import Enum


class ModificationType(str, Enum):
    """Kind of modification, each carrying a fixed cost multiplier."""
    ADD = "add"
    REMOVE = "remove"
    MODIFY = "modify"

    @property
    def multiplier(self) -> int:
        """Integer the base cost is multiplied by."""
        return _MULTIPLIERS[self]

    def __str__(self) -> str:
        return self.value


_MULTIPLIERS = {
    ModificationType.ADD: 1,
    ModificationType.REMOVE: -1,
    ModificationType.MODIFY: 3,
}


class TreeOrder(str, Enum):
    """Field a tree orders its groups by."""
    NAME = "name"              # Lexicographic group name
    PRIORITY = "priority"      # Sum of member priorities
    TOTAL_COST = "total_cost"  # Aggregate member cost

    def __str__(self) -> str:
        return self.value
