"""Quote refresh continuation policy."""

from __future__ import annotations


def should_refresh(
    refresh_count: int,
    max_refresh_count: int,
    insufficient_balance_override: bool = False,
) -> bool:
    """Decide whether another quote refresh cycle should be scheduled.

    Args:
        refresh_count: Batches delivered for the current request
        max_refresh_count: Refresh cycles allowed per request
        insufficient_balance_override: Set on forked test networks; suspends
            refreshing regardless of the count

    Returns:
        True if another cycle should run
    """
    if insufficient_balance_override:
        return False
    return refresh_count < max_refresh_count


def seconds_until_next_refresh(
    last_fetched_ms: int | None,
    refresh_rate_seconds: int,
    now_ms: int,
) -> int:
    """Whole seconds left before the next scheduled fetch, never negative.

    Returns the full refresh interval while no batch has been fetched.
    """
    if last_fetched_ms is None:
        return refresh_rate_seconds
    elapsed_ms = max(0, now_ms - last_fetched_ms)
    remaining_ms = refresh_rate_seconds * 1000 - elapsed_ms
    return max(0, -(-remaining_ms // 1000))
