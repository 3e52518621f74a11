"""Debouncing and request supersession for the quote flow.

User input (amount typed, asset or chain changed) fires many times in a
row. A Debouncer holds one cancellable timer per call site so only the
last input within the delay issues a request.

Every request gets a RequestTicket from the RequestTracker. A new request
supersedes the previous ticket, and a fetch that completes with a
superseded ticket is dropped by the consumer.

Usage:
    tracker = RequestTracker()
    request_quotes = Debouncer(0.3, lambda request: start_fetch(tracker.begin(request)))

    # on every input change
    request_quotes(request)

    # when the fetch completes
    if tracker.is_current(ticket):
        apply(result)
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

from bridge.models.request import QuoteRequest

logger = structlog.get_logger()


class Debouncer:
    """Delay a callback until calls stop arriving for `delay` seconds.

    Each call cancels the pending timer and starts a new one with the
    latest arguments. Timers run on an asyncio event loop.

    Args:
        delay: Quiet period in seconds
        callback: Function invoked with the last call's arguments
        loop: Event loop for the timers; defaults to the running loop
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[..., Any],
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if delay < 0:
            raise ValueError(f"Debounce delay cannot be negative: {delay}")
        self.delay = delay
        self._callback = callback
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._pending_args: tuple[tuple[Any, ...], dict[str, Any]] | None = None

    @property
    def pending(self) -> bool:
        """True if a call is waiting for its timer."""
        return self._handle is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._pending_args = (args, kwargs)
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending_args = None

    def flush(self) -> None:
        """Run the pending call now instead of waiting for the timer."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._fire()

    def _fire(self) -> None:
        pending = self._pending_args
        self._handle = None
        self._pending_args = None
        if pending is None:
            return
        args, kwargs = pending
        self._callback(*args, **kwargs)


@dataclass(frozen=True)
class RequestTicket:
    """Handle identifying one issued request.

    Attributes:
        generation: Monotonic counter; higher is newer
        request: The request parameters, None for a reset
    """

    generation: int
    request: QuoteRequest | None


@dataclass(frozen=True)
class Superseded:
    """Signal that a ticket's results must no longer be applied."""

    previous: RequestTicket
    current: RequestTicket


class RequestTracker:
    """Issues request tickets and records supersession signals.

    Only the latest ticket is current. Each time a ticket is replaced a
    Superseded signal is queued; consumers drain the queue to cancel work
    started for old tickets.
    """

    def __init__(self) -> None:
        self._current = RequestTicket(generation=0, request=None)
        self._signals: deque[Superseded] = deque()

    @property
    def current(self) -> RequestTicket:
        return self._current

    def begin(self, request: QuoteRequest | None) -> RequestTicket:
        """Issue a ticket for a new request, superseding the current one."""
        previous = self._current
        self._current = RequestTicket(generation=previous.generation + 1, request=request)
        self._signals.append(Superseded(previous=previous, current=self._current))
        logger.debug(
            "request_superseded",
            previous_generation=previous.generation,
            generation=self._current.generation,
        )
        return self._current

    def supersede(self) -> RequestTicket:
        """Invalidate the current ticket without starting a new request."""
        return self.begin(None)

    def is_current(self, ticket: RequestTicket) -> bool:
        return ticket.generation == self._current.generation

    def drain_signals(self) -> list[Superseded]:
        """Return and clear the queued supersession signals, oldest first."""
        signals = list(self._signals)
        self._signals.clear()
        return signals
