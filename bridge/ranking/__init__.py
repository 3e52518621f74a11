"""Quote ranking, recommendation and selection."""

from bridge.ranking.recommend import (
    best_return,
    is_eta_reasonable,
    is_return_reasonable,
    recommended_quote,
)
from bridge.ranking.selection import (
    active_quote,
    find_by_identity,
    quote_identity,
    resolve_selection,
)
from bridge.ranking.sorting import SortOrder, sort_quotes

__all__ = [
    # Sorting
    "SortOrder",
    "sort_quotes",
    # Recommendation
    "best_return",
    "is_eta_reasonable",
    "is_return_reasonable",
    "recommended_quote",
    # Selection
    "active_quote",
    "find_by_identity",
    "quote_identity",
    "resolve_selection",
]
