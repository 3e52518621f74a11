"""Keyed cache for derived projections.

Composed quotes are a pure function of (quotes, rates, gas prices). The
cache stores results under a key built from those inputs' values, so equal
inputs map to one entry regardless of object identity.

Usage:
    cache: ProjectionCache[tuple, list[ComposedQuote]] = ProjectionCache(max_entries=8)
    composed = cache.get_or_compute(key, lambda: compose_quotes(...))
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class ProjectionCache(Generic[K, V]):
    """Least-recently-used cache of computed values.

    Attributes:
        max_entries: Number of entries kept before the oldest is evicted
        hits: Number of lookups served from the cache
        misses: Number of lookups that computed a new value
    """

    def __init__(self, max_entries: int = 16) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[K, V] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get_or_compute(self, key: K, compute: Callable[[], V]) -> V:
        """Return the cached value for key, computing and storing it if absent."""
        if key in self._entries:
            self._entries.move_to_end(key)
            self.hits += 1
            return self._entries[key]

        self.misses += 1
        value = compute()
        self._entries[key] = value
        if len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return value

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
