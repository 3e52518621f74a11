"""Resolution of the user's selected quote across refreshes."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from bridge.models.amounts import ComposedQuote, QuoteIdentity
from bridge.models.quote import Quote

logger = structlog.get_logger()


def quote_identity(quote: ComposedQuote | Quote) -> QuoteIdentity:
    """Identity of a quote's route: provider, first bridge and step count."""
    if isinstance(quote, ComposedQuote):
        return quote.identity
    return QuoteIdentity.of(quote)


def find_by_identity(
    quotes: Sequence[ComposedQuote],
    identity: QuoteIdentity,
) -> ComposedQuote | None:
    """First quote in the list with the given identity."""
    for quote in quotes:
        if quote.identity == identity:
            return quote
    return None


def resolve_selection(
    selected: ComposedQuote | None,
    sorted_quotes: Sequence[ComposedQuote],
    refresh_count: int,
) -> ComposedQuote | None:
    """Re-identify the user's selection in the newest batch.

    On the first batch of a request the selection was made against this
    very batch and is returned as is. On later batches the quote with the
    same identity is returned, or None if the route is no longer offered.

    Args:
        selected: The previously selected quote
        sorted_quotes: The newest batch, sorted
        refresh_count: Number of batches delivered for the current request

    Returns:
        The matching quote from the newest batch, or None
    """
    if refresh_count <= 1:
        return selected
    if selected is None:
        return None

    match = find_by_identity(sorted_quotes, selected.identity)
    if match is None:
        logger.debug(
            "selected_quote_not_in_batch",
            identity=str(selected.identity),
            refresh_count=refresh_count,
        )
    return match


def active_quote(
    selected: ComposedQuote | None,
    recommended: ComposedQuote | None,
) -> ComposedQuote | None:
    """The quote that would be submitted: the selection, else the recommendation."""
    return selected if selected is not None else recommended
