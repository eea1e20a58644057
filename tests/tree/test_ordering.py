"""
Unit Tests for Tree Ordering

Tests for compare() and sort_key() across the three orders.
"""

import pytest

from modtree.core.models.groups import ModificationGroup
from modtree.core.models.kinds import ModificationType, TreeOrder
from modtree.core.models.modification import Modification
from modtree.tree.ordering import Traversal, compare, sort_key


@pytest.fixture
def pair():
    cheap = ModificationGroup([Modification("a", 50, 10, ModificationType.ADD)], "Zulu")
    dear = ModificationGroup([Modification("b", 5, 10, ModificationType.MODIFY)], "Alpha")
    return cheap, dear


class TestCompare:
    """Tests for compare."""

    def test_compare_when_name_order_then_lexicographic(self, pair):
        cheap, dear = pair
        assert compare(TreeOrder.NAME, dear, cheap) == -1
        assert compare(TreeOrder.NAME, cheap, dear) == 1

    def test_compare_when_priority_order_then_by_sum(self, pair):
        cheap, dear = pair
        assert compare(TreeOrder.PRIORITY, cheap, dear) == 1

    def test_compare_when_total_cost_order_then_by_aggregate(self, pair):
        cheap, dear = pair
        assert compare(TreeOrder.TOTAL_COST, cheap, dear) == -1

    def test_compare_when_same_group_then_zero(self, pair):
        cheap, _ = pair
        for order in TreeOrder:
            assert compare(order, cheap, cheap) == 0

    def test_sort_key_when_used_with_sorted_then_matches_compare(self, pair):
        cheap, dear = pair
        assert sorted([cheap, dear], key=sort_key(TreeOrder.TOTAL_COST)) == [cheap, dear]
        assert sorted([cheap, dear], key=sort_key(TreeOrder.NAME)) == [dear, cheap]

    def test_traversal_str_when_called_then_value(self):
        assert str(Traversal.REVERSE_ORDER) == "reverse_order"
