"""
Modification Tree Core Package

Shared data models and utilities used by the tree engine.
"""

from .models import (
    CostPolicy,
    DiscountedCostPolicy,
    Modification,
    ModificationGroup,
    ModificationType,
    StandardCostPolicy,
    TreeOrder,
)
from .concurrency import AtomicCounter

__all__ = [
    "CostPolicy",
    "DiscountedCostPolicy",
    "Modification",
    "ModificationGroup",
    "ModificationType",
    "StandardCostPolicy",
    "TreeOrder",
    "AtomicCounter",
]
