"""
Unit Tests for Enumerations

Tests for ModificationType multipliers and TreeOrder values.
"""

import pytest

from modtree.core.models.kinds import ModificationType, TreeOrder


class TestModificationType:
    """Tests for ModificationType enum."""

    @pytest.mark.parametrize("kind,multiplier", [
        (ModificationType.ADD, 1),
        (ModificationType.REMOVE, -1),
        (ModificationType.MODIFY, 3),
    ])
    def test_multiplier_when_accessed_then_matches_kind(self, kind, multiplier):
        assert kind.multiplier == multiplier

    def test_str_when_called_then_returns_value(self):
        assert str(ModificationType.MODIFY) == "modify"

    def test_lookup_when_by_value_then_returns_member(self):
        assert ModificationType("remove") is ModificationType.REMOVE


class TestTreeOrder:
    """Tests for TreeOrder enum."""

    def test_values_when_listed_then_three_orders(self):
        assert {o.value for o in TreeOrder} == {"name", "priority", "total_cost"}

    def test_lookup_when_unknown_value_then_raises(self):
        with pytest.raises(ValueError):
            TreeOrder("random")
