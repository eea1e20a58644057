"""
Unit Tests for ModificationGroup Model

Tests for membership, derived sums, level shifting and serialization.
"""

import pytest

from modtree.core.models.costing import DiscountedCostPolicy
from modtree.core.models.groups import ModificationGroup
from modtree.core.models.kinds import ModificationType, TreeOrder
from modtree.core.models.modification import Modification
from modtree.errors import InvalidArgumentError
from modtree.tree import ModificationTree


class TestModificationGroup:
    """Tests for ModificationGroup."""

    @pytest.fixture
    def leaves(self):
        return [
            Modification("Test1", 10, 2324, ModificationType.ADD),
            Modification("Something", 20, 33253, ModificationType.MODIFY),
            Modification("Hiring", 30, 1, ModificationType.REMOVE),
            Modification("Firing", 10, 67, ModificationType.ADD),
        ]

    # ─────────────────────────────────────────────────────────────────────────
    # Derived Value Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_init_when_members_given_then_cost_is_sum_of_totals(self, leaves):
        """Cost is the sum of direct member totals."""
        g = ModificationGroup(leaves, "Global modifications")
        assert g.cost == sum(m.total_cost for m in leaves)
        assert g.cost == 2324 + 99759 - 1 + 67

    def test_init_when_members_given_then_priority_is_sum(self, leaves):
        """Priority is the sum of direct member priorities."""
        g = ModificationGroup(leaves, "Global modifications")
        assert g.priority == 70

    def test_init_when_members_given_then_owner_is_group(self, leaves):
        """Every member points back at the group."""
        g = ModificationGroup(leaves, "Global modifications")
        assert all(m.owner is g for m in leaves)

    def test_init_when_new_then_detached_level(self, leaves):
        """Groups start detached."""
        assert ModificationGroup(leaves, "Global").level == -1

    def test_init_when_discounted_policy_then_aggregate_scaled(self):
        """A discounted group scales its aggregate, not its members."""
        members = [
            Modification("a", 1, 100, ModificationType.ADD),
            Modification("b", 1, 5, ModificationType.ADD),
        ]
        g = ModificationGroup(members, "Discounted", policy=DiscountedCostPolicy())
        assert g.cost == 94
        assert members[0].total_cost == 100

    def test_init_when_modifications_none_then_raises_error(self):
        """None for the member set is an invalid argument."""
        with pytest.raises(InvalidArgumentError):
            ModificationGroup(None, "Broken")  # type: ignore[arg-type]

    # ─────────────────────────────────────────────────────────────────────────
    # Membership Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_add_modifications_when_none_then_raises_error(self, leaves):
        """add_modifications(None) is rejected."""
        g = ModificationGroup(leaves, "Global")
        with pytest.raises(InvalidArgumentError):
            g.add_modifications(None)  # type: ignore[arg-type]

    def test_add_modifications_when_contains_none_then_nothing_added(self, leaves):
        """A None inside the iterable rejects the whole call."""
        g = ModificationGroup([], "Empty")
        with pytest.raises(InvalidArgumentError):
            g.add_modifications([leaves[0], None])
        assert g.modifications == frozenset()

    def test_add_modifications_when_leaf_owned_elsewhere_then_moves_it(self, leaves):
        """Adding a leaf detaches it from its previous owner."""
        source = ModificationGroup(leaves, "Source")
        target = ModificationGroup([], "Target")
        moved = leaves[0]

        target.add_modifications([moved])

        assert moved.owner is target
        assert moved not in source.modifications
        assert source.cost == sum(m.total_cost for m in leaves[1:])
        assert target.cost == moved.total_cost

    def test_add_modifications_when_called_then_resums(self, leaves):
        """Cost and priority change after adding members."""
        g = ModificationGroup(leaves[:2], "Global")
        cost_before = g.cost
        g.add_modifications(leaves[2:])
        assert g.cost != cost_before
        assert g.priority == 70

    def test_remove_modification_when_member_then_clears_owner(self, leaves):
        """Removing a member clears its owner handle and resums."""
        g = ModificationGroup(leaves, "Global")
        assert g.remove_modification(leaves[0]) is True
        assert leaves[0].owner is None
        assert g.priority == 60

    def test_remove_modification_when_not_member_then_returns_false(self, leaves):
        """Removing a stranger is a no-op."""
        g = ModificationGroup(leaves[:1], "Global")
        assert g.remove_modification(leaves[1]) is False

    def test_remove_modification_when_none_then_raises_error(self, leaves):
        g = ModificationGroup(leaves, "Global")
        with pytest.raises(InvalidArgumentError):
            g.remove_modification(None)  # type: ignore[arg-type]

    def test_modifications_when_duplicates_added_then_set_semantics(self, leaves):
        """The member set never holds a leaf twice."""
        g = ModificationGroup(leaves + leaves[:2], "Global")
        assert len(g.modifications) == 4

    # ─────────────────────────────────────────────────────────────────────────
    # Level Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_set_level_when_unchanged_then_returns_false(self, leaves):
        """Setting the current level reports no change."""
        g = ModificationGroup(leaves, "Global")
        assert g.set_level(g.level) is False

    def test_set_level_when_changed_then_shifts_descendants(self):
        """Every hierarchy descendant moves by the same delta."""
        top = ModificationGroup([Modification("a", 40, 1, ModificationType.ADD)], "Global")
        mid = ModificationGroup([Modification("b", 30, 1, ModificationType.ADD)], "Europe")
        low = ModificationGroup([Modification("c", 20, 1, ModificationType.ADD)], "Hungary")
        tree = ModificationTree(TreeOrder.PRIORITY)
        for g in (top, mid, low):
            tree.insert(g)
        assert (top.level, mid.level, low.level) == (0, 1, 2)

        assert top.set_level(5) is True

        assert (top.level, mid.level, low.level) == (5, 6, 7)

    # ─────────────────────────────────────────────────────────────────────────
    # Identity / Serialization Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_eq_when_same_name_then_distinct(self):
        """Groups compare by id."""
        a = ModificationGroup([], "Europe")
        b = ModificationGroup([], "Europe")
        assert a != b
        assert a.group_id < b.group_id

    def test_to_dict_when_called_then_members_sorted_by_id(self, leaves):
        """to_dict() lists members by ascending id."""
        g = ModificationGroup(reversed(leaves), "Global")
        d = g.to_dict()
        ids = [m["modification_id"] for m in d["modifications"]]
        assert ids == sorted(ids)
        assert d["child_ids"] == []
        assert d["cost"] == g.cost
