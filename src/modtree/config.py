"""
Module: config

Purpose:
    Configuration dataclass for a ModificationTree. Immutable
    configuration with validation on construction.

Key Classes:
    - TreeConfig: Ordering rule and engine options

Dependencies:
    - dataclasses (std)

Used By:
    - tree.binary_tree.ModificationTree
"""

from __future__ import annotations

from dataclasses import dataclass

from .core.models.kinds import TreeOrder
from .errors import InvalidArgumentError


@dataclass(frozen=True)
class TreeConfig:
    """
    Configuration for a modification tree (immutable).

    Attributes:
        order: Comparator kind, fixed for the lifetime of the tree
        path_separator: Joins ancestor names in ``path_of``
        verify_levels: Run a full BFS level check after every insert

    Example:
        >>> config = TreeConfig(order=TreeOrder.NAME)
        >>> config.path_separator
        ' / '
    """

    order: TreeOrder
    path_separator: str = " / "
    verify_levels: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not isinstance(self.order, TreeOrder):
            raise InvalidArgumentError(f"order must be a TreeOrder: {self.order!r}")
        if not self.path_separator:
            raise InvalidArgumentError("path_separator cannot be empty")
