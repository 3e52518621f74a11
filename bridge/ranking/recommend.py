"""Recommended quote selection.

The recommendation guards the dimension the list is NOT sorted by:
- sorted by cost: the cheapest quote whose ETA is under the ceiling
- sorted by ETA: the fastest quote whose return is within tolerance of
  the best return

If no quote passes the guard, the top of the sorted list is recommended.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

import structlog

from bridge.constants import (
    BRIDGE_QUOTE_MAX_ETA_SECONDS,
    BRIDGE_QUOTE_MAX_RETURN_DIFFERENCE_PERCENTAGE,
)
from bridge.models.amounts import ComposedQuote
from bridge.ranking.sorting import SortOrder

logger = structlog.get_logger()


def best_return(quotes: Sequence[ComposedQuote]) -> Decimal:
    """Highest adjusted return in fiat, counting unknown returns as 0."""
    return max(
        (q.adjusted_return.fiat if q.adjusted_return.fiat is not None else Decimal(0))
        for q in quotes
    )


def is_return_reasonable(
    adjusted_return_fiat: Decimal | None,
    best_return_fiat: Decimal,
    return_tolerance: Decimal,
) -> bool:
    """True if a return is within tolerance of the best return.

    An unknown return is reasonable. A best return of zero leaves no ratio
    to take, and only a return matching it passes.
    """
    if adjusted_return_fiat is None:
        return True
    if best_return_fiat == 0:
        return adjusted_return_fiat >= best_return_fiat
    return adjusted_return_fiat / best_return_fiat >= return_tolerance


def is_eta_reasonable(estimated_processing_time_in_seconds: int, eta_ceiling_seconds: int) -> bool:
    """True if a quote completes strictly before the ceiling."""
    return estimated_processing_time_in_seconds < eta_ceiling_seconds


def recommended_quote(
    sorted_quotes: Sequence[ComposedQuote],
    sort_order: SortOrder,
    *,
    return_tolerance: Decimal = BRIDGE_QUOTE_MAX_RETURN_DIFFERENCE_PERCENTAGE,
    eta_ceiling_seconds: int = BRIDGE_QUOTE_MAX_ETA_SECONDS,
) -> ComposedQuote | None:
    """Pick the quote to present when the user has made no selection.

    Args:
        sorted_quotes: Quotes already sorted by sort_order
        sort_order: The order the quotes were sorted by
        return_tolerance: Minimum fraction of the best return
        eta_ceiling_seconds: Exclusive ETA ceiling

    Returns:
        The recommended quote, or None for an empty batch
    """
    if not sorted_quotes:
        return None

    if sort_order == SortOrder.ETA_ASC:
        best = best_return(sorted_quotes)
        for quote in sorted_quotes:
            if is_return_reasonable(quote.adjusted_return.fiat, best, return_tolerance):
                return quote
    else:
        for quote in sorted_quotes:
            if is_eta_reasonable(quote.estimated_processing_time_in_seconds, eta_ceiling_seconds):
                return quote

    logger.debug(
        "recommended_quote_fallback_to_top",
        sort_order=sort_order.value,
        quote_count=len(sorted_quotes),
    )
    return sorted_quotes[0]
