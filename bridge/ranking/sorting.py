"""Sort orders for composed quotes."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from enum import Enum

from bridge.models.amounts import ComposedQuote


class SortOrder(str, Enum):
    """How quotes are ordered for the user."""

    COST_ASC = "cost_ascending"
    ETA_ASC = "eta_ascending"


def _cost_key(quote: ComposedQuote) -> tuple[bool, Decimal]:
    # Unknown costs sort after every known cost
    cost = quote.cost.fiat
    return (cost is None, cost if cost is not None else Decimal(0))


def _eta_key(quote: ComposedQuote) -> int:
    return quote.estimated_processing_time_in_seconds


def sort_quotes(
    quotes: Iterable[ComposedQuote],
    sort_order: SortOrder = SortOrder.COST_ASC,
) -> list[ComposedQuote]:
    """Sort quotes by the given order.

    Sorting is stable: quotes with equal keys keep their input order.

    Args:
        quotes: Composed quotes in arrival order
        sort_order: COST_ASC (best net value first) or ETA_ASC (fastest first)

    Returns:
        New sorted list
    """
    if sort_order == SortOrder.ETA_ASC:
        return sorted(quotes, key=_eta_key)
    return sorted(quotes, key=_cost_key)
