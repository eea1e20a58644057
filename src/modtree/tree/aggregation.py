"""
Module: tree.aggregation

Purpose:
    Subtree leaf collection and cost/priority sums. The walk follows the
    hierarchy mirror (each group's child list), not the BST, and takes the
    per-group guards so that it never blocks on the tree lock.

Key Functions:
    - collect_leaves(group): Union of member sets over a hierarchy subtree
    - total_cost(leaves) / total_priority(leaves)
"""

from __future__ import annotations

from typing import Iterable, Optional, Set

from ..core.models.groups import ModificationGroup
from ..core.models.modification import Modification


def collect_leaves(
    group: ModificationGroup,
    accumulator: Optional[Set[Modification]] = None,
) -> Set[Modification]:
    """
    Collect every leaf under ``group``, the group's own members included.

    Locks ``membership_lock`` while copying members, then holds
    ``children_lock`` while recursing into each child.
    """
    if accumulator is None:
        accumulator = set()

    with group.membership_lock:
        accumulator.update(group._modifications)

    with group.children_lock:
        for child in group._children:
            collect_leaves(child, accumulator)

    return accumulator


def total_cost(leaves: Iterable[Modification]) -> int:
    """Sum of leaf total costs."""
    return sum(leaf.total_cost for leaf in leaves)


def total_priority(leaves: Iterable[Modification]) -> int:
    return sum(leaf.priority for leaf in leaves)
