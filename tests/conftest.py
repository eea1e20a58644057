import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import modtree
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from modtree import (  # noqa: E402
    Modification,
    ModificationGroup,
    ModificationTree,
    ModificationType,
    TreeOrder,
)

ADD = ModificationType.ADD
REMOVE = ModificationType.REMOVE
MODIFY = ModificationType.MODIFY

# Insertion order matters: it fixes the shape of the name-ordered tree.
#
#                Global modifications
#               /                    \
#           Europe                  Hungary
#           /                            \
#     District I.                       Office
#       /                                   \
#   Budapest                                Test
REGION_SPECS = {
    "global": ("Global modifications", [
        ("Test1", 10, 2324, ADD), ("Something", 20, 33253, MODIFY),
        ("Hiring", 30, 1, REMOVE), ("Firing", 10, 67, ADD),
    ]),
    "europe": ("Europe", [
        ("Bonuses", 20, -123, MODIFY), ("Hardware", 30, 33333333, REMOVE),
        ("Marketing", 11, 0, ADD), ("OverTime", 22, 1, MODIFY),
    ]),
    "district": ("District I.", [
        ("Test9", 33, 5, REMOVE), ("Investment", 15, 34, ADD),
        ("Insurance", 25, 23, MODIFY), ("Vis Major", 37, 23, REMOVE),
    ]),
    "hungary": ("Hungary", [
        ("Extra", 3432, 1, ADD), ("Surprise", 7, 33, MODIFY), ("Name", 3, 87, REMOVE),
    ]),
    "budapest": ("Budapest", [("Parking", 5, 12, ADD), ("Catering", 8, 40, MODIFY)]),
    "office": ("Office", [("Rent", 14, 900, ADD)]),
    "test": ("Test", [("Audit", 3, 87, REMOVE)]),
}


# Common test fixtures
@pytest.fixture
def make_leaf():
    """Factory for leaf modifications with sensible defaults."""
    def _make(name="Leaf", priority=10, cost=100, kind=ADD, **kwargs):
        return Modification(name, priority, cost, kind, **kwargs)
    return _make


@pytest.fixture
def make_group():
    """Factory for groups built from (name, priority, cost, kind) tuples."""
    def _make(name, specs=(), **kwargs):
        return ModificationGroup([Modification(*spec) for spec in specs], name, **kwargs)
    return _make


@pytest.fixture
def regions(make_group):
    """Fresh region groups keyed by short name, not yet in any tree."""
    return {key: make_group(name, specs) for key, (name, specs) in REGION_SPECS.items()}


@pytest.fixture
def region_tree(regions):
    """Name-ordered tree holding every region group."""
    tree = ModificationTree(TreeOrder.NAME)
    for group in regions.values():
        tree.insert(group)
    return tree
