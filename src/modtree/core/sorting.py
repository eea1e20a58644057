"""
Module: sorting

Purpose:
    Stateless sort helpers for leaves and groups. Both record types expose
    ``name``, ``priority`` and ``cost``, so every helper accepts either.

Key Functions:
    - sort_by_name(items, descending=False)
    - sort_by_priority(items, descending=False)
    - sort_by_cost(items, descending=False)

Used By:
    - tree.binary_tree.ModificationTree listings (callers sort the result)
"""

from __future__ import annotations

from typing import Iterable, List, TypeVar

from ..errors import require

T = TypeVar("T")


def sort_by_name(items: Iterable[T], descending: bool = False) -> List[T]:
    """Sort leaves or groups by name."""
    return sorted(require(items, "items"), key=lambda item: item.name, reverse=descending)


def sort_by_priority(items: Iterable[T], descending: bool = False) -> List[T]:
    """Sort leaves or groups by priority (aggregate priority for groups)."""
    return sorted(require(items, "items"), key=lambda item: item.priority, reverse=descending)


def sort_by_cost(items: Iterable[T], descending: bool = False) -> List[T]:
    """
    Sort by cost.

    Leaves are ordered by their total cost, groups by their aggregate cost.
    """
    def _key(item) -> int:
        return getattr(item, "total_cost", item.cost)

    return sorted(require(items, "items"), key=_key, reverse=descending)
