"""
Module: tree.ordering

Purpose:
    The fixed comparator a tree is built with, and the traversal
    directions it can be read in.

Key Functions:
    - compare(order, a, b): three-way comparison of two groups
    - sort_key(order): key function matching compare()

Used By:
    - tree.binary_tree.ModificationTree
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from ..core.models.groups import ModificationGroup
from ..core.models.kinds import TreeOrder


class Traversal(str, Enum):
    """Direction of an ordered walk."""
    IN_ORDER = "in_order"            # Ascending by comparator
    REVERSE_ORDER = "reverse_order"  # Descending by comparator

    def __str__(self) -> str:
        return self.value


def sort_key(order: TreeOrder) -> Callable[[ModificationGroup], Any]:
    """Key function for ``order``."""
    if order is TreeOrder.NAME:
        return lambda group: group.name
    if order is TreeOrder.PRIORITY:
        return lambda group: group.priority
    if order is TreeOrder.TOTAL_COST:
        return lambda group: group.cost
    raise ValueError(f"Unknown tree order: {order!r}")


def compare(order: TreeOrder, a: ModificationGroup, b: ModificationGroup) -> int:
    """
    Three-way comparison of ``a`` against ``b``.

    Returns:
        Negative if a sorts before b, zero if equal, positive otherwise
    """
    key = sort_key(order)
    ka, kb = key(a), key(b)
    return (ka > kb) - (ka < kb)
