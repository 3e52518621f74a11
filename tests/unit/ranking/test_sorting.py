"""Tests for quote sorting."""

import pytest

from bridge.ranking import SortOrder, sort_quotes
from tests.helpers import make_composed_quote


def bridge_ids(quotes):
    return [q.quote.bridge_id for q in quotes]


class TestSortByCost:
    """Tests for cost-ascending order."""

    def test_lowest_cost_first(self):
        """Costs -3 and -5 sort to [-5, -3]."""
        quotes = [
            make_composed_quote(bridge_id="b", cost=-3),
            make_composed_quote(bridge_id="a", cost=-5),
        ]

        result = sort_quotes(quotes, SortOrder.COST_ASC)

        assert [q.cost.fiat for q in result] == [-5, -3]

    def test_default_order_is_cost(self):
        quotes = [make_composed_quote(bridge_id="b", cost=2), make_composed_quote(bridge_id="a", cost=1)]

        assert bridge_ids(sort_quotes(quotes)) == ["a", "b"]

    def test_stable_for_equal_costs(self):
        """Equal costs keep arrival order."""
        quotes = [
            make_composed_quote(bridge_id="first", cost=-4),
            make_composed_quote(bridge_id="cheap", cost=-9),
            make_composed_quote(bridge_id="second", cost=-4),
            make_composed_quote(bridge_id="third", cost=-4),
        ]

        result = sort_quotes(quotes, SortOrder.COST_ASC)

        assert bridge_ids(result) == ["cheap", "first", "second", "third"]

    def test_unknown_cost_sorts_last(self):
        quotes = [
            make_composed_quote(bridge_id="unknown", cost=None),
            make_composed_quote(bridge_id="known", cost=10),
        ]

        assert bridge_ids(sort_quotes(quotes, SortOrder.COST_ASC)) == ["known", "unknown"]

    def test_does_not_mutate_input(self):
        quotes = [make_composed_quote(bridge_id="b", cost=2), make_composed_quote(bridge_id="a", cost=1)]

        sort_quotes(quotes)

        assert bridge_ids(quotes) == ["b", "a"]


class TestSortByEta:
    """Tests for ETA-ascending order."""

    def test_fastest_first(self):
        quotes = [
            make_composed_quote(bridge_id="slow", eta=900),
            make_composed_quote(bridge_id="fast", eta=30),
            make_composed_quote(bridge_id="medium", eta=300),
        ]

        assert bridge_ids(sort_quotes(quotes, SortOrder.ETA_ASC)) == ["fast", "medium", "slow"]

    def test_stable_for_equal_eta(self):
        quotes = [
            make_composed_quote(bridge_id="first", eta=60, cost=-1),
            make_composed_quote(bridge_id="second", eta=60, cost=-10),
        ]

        assert bridge_ids(sort_quotes(quotes, SortOrder.ETA_ASC)) == ["first", "second"]


class TestSortOrder:
    """Tests for SortOrder values."""

    @pytest.mark.parametrize(
        "value,expected",
        [("cost_ascending", SortOrder.COST_ASC), ("eta_ascending", SortOrder.ETA_ASC)],
    )
    def test_from_string(self, value, expected):
        assert SortOrder(value) == expected
