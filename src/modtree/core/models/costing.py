"""
Module: costing

Purpose:
    Cost capability contract. A leaf asks its policy for its total cost
    once, at creation; a group asks its policy for the aggregate of its
    direct members every time membership changes. Specialised variants
    (e.g. discounted ones) are expressed as a different policy, so the
    tree algorithms never look at concrete types.

Key Classes:
    - CostPolicy: Protocol with compute_total() and aggregate()
    - StandardCostPolicy: base x multiplier, plain sum
    - DiscountedCostPolicy: standard formulas scaled by a rate

Used By:
    - core.models.modification.Modification
    - core.models.groups.ModificationGroup
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Protocol, runtime_checkable

from ...errors import InvalidArgumentError
from .kinds import ModificationType

if TYPE_CHECKING:
    from .modification import Modification


@runtime_checkable
class CostPolicy(Protocol):
    """Formula pair used by leaves and groups to derive their cost."""

    def compute_total(self, base_cost: int, kind: ModificationType) -> int:
        """Total cost of a single leaf."""
        ...

    def aggregate(self, members: Iterable[Modification]) -> int:
        """Aggregate cost of a group's direct members."""
        ...


@dataclass(frozen=True)
class StandardCostPolicy:
    """
    Default formulas.

    Example:
        >>> StandardCostPolicy().compute_total(10, ModificationType.MODIFY)
        30
    """

    def compute_total(self, base_cost: int, kind: ModificationType) -> int:
        return base_cost * kind.multiplier

    def aggregate(self, members: Iterable[Modification]) -> int:
        return sum(m.total_cost for m in members)


@dataclass(frozen=True)
class DiscountedCostPolicy(StandardCostPolicy):
    """
    Standard formulas scaled by ``rate`` and truncated toward zero.

    Attributes:
        rate: Multiplier applied to every result, in (0, 1]
    """

    rate: float = 0.9

    def __post_init__(self) -> None:
        if not 0 < self.rate <= 1:
            raise InvalidArgumentError(f"rate must be in (0, 1]: {self.rate}")

    def compute_total(self, base_cost: int, kind: ModificationType) -> int:
        return int(super().compute_total(base_cost, kind) * self.rate)

    def aggregate(self, members: Iterable[Modification]) -> int:
        return int(super().aggregate(members) * self.rate)


STANDARD = StandardCostPolicy()
