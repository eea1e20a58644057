"""
Core Models Package

Leaf and composite records of the modification tree.

**DESIGN RATIONALE:**

1. Leaves are fixed at creation. Their total cost is derived once and the
   only later change is detachment from the owning group.
2. Groups derive priority and cost from their direct members. The values
   are resummed on every membership change, never across the subtree.
3. Cost formulas live in a CostPolicy handed to the record at
   construction, so discounted variants need no subclass.

| Type | Role |
|------|------|
| `ModificationType` | ADD / REMOVE / MODIFY with fixed multiplier |
| `TreeOrder` | Ordering rule of a tree |
| `Modification` | Leaf record |
| `ModificationGroup` | Composite record, hierarchy node |
"""

from .kinds import ModificationType, TreeOrder
from .costing import CostPolicy, DiscountedCostPolicy, StandardCostPolicy
from .modification import Modification
from .groups import ModificationGroup

__all__ = [
    "ModificationType",
    "TreeOrder",
    "CostPolicy",
    "StandardCostPolicy",
    "DiscountedCostPolicy",
    "Modification",
    "ModificationGroup",
]
