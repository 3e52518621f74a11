"""Session state and public entry points of the quote engine.

BridgeQuoteEngine owns the state of one bridge flow: the current quote
request, the latest quote batch, the user's selection, the sort order and
the market data snapshots. Mutations go through its methods; every read
recomputes a projection over the current state:

    raw batch + rates + gas --compose--> ComposedQuotes
        --sort--> ranked --recommend/resolve--> active quote
        --validate--> ValidationErrors

Fetching is done by the caller. Results are applied with the ticket that
was current when the fetch started, and results for superseded requests
are discarded.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any

import structlog
from pydantic import ValidationError

from bridge.chains import NetworkConfig
from bridge.config import DEFAULT_BRIDGE_CONFIG, BridgeConfig
from bridge.math import to_rate
from bridge.math.normalize import Rate
from bridge.metrics import ExchangeRates, QuoteComposer, resolve_dest_exchange_rate
from bridge.models.amounts import ComposedQuote, QuoteIdentity
from bridge.models.gas import FeesPerGas, GasFeeEstimates
from bridge.models.quote import QuoteResponse
from bridge.models.request import QuoteRequest
from bridge.models.types import is_native_address, normalize_address
from bridge.ranking import (
    SortOrder,
    active_quote,
    find_by_identity,
    recommended_quote,
    resolve_selection,
    sort_quotes,
)
from bridge.refresh import seconds_until_next_refresh, should_refresh
from bridge.scheduler import RequestTicket, RequestTracker
from bridge.validation import (
    ValidationErrors,
    from_amount_in_fiat,
    get_validation_errors,
    validated_src_amount,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class QuoteBatch:
    """The raw quotes of one delivery plus fetch metadata.

    Attributes:
        quotes: Quote responses in arrival order
        fetched_at_ms: When the batch arrived, None before the first fetch
        is_loading: Whether a fetch for the current request is in flight
        refresh_count: Batches delivered for the current request
        request: The request the quotes were fetched for
    """

    quotes: tuple[QuoteResponse, ...] = ()
    fetched_at_ms: int | None = None
    is_loading: bool = False
    refresh_count: int = 0
    request: QuoteRequest | None = None


@dataclass(frozen=True)
class BridgeQuotes:
    """Everything the UI shows about the current quotes."""

    sorted_quotes: list[ComposedQuote]
    recommended_quote: ComposedQuote | None
    active_quote: ComposedQuote | None
    quotes_last_fetched_ms: int | None
    is_loading: bool
    quotes_refresh_count: int
    is_quote_going_to_refresh: bool


@dataclass(frozen=True)
class _TokenRate:
    """An exchange rate tagged with the token it was fetched for."""

    token_address: str
    rate: Decimal | None


@dataclass
class _SessionState:
    request: QuoteRequest | None = None
    src_decimals: int | None = None
    batch: QuoteBatch = field(default_factory=QuoteBatch)
    selected: ComposedQuote | None = None
    sort_order: SortOrder = SortOrder.COST_ASC
    src_rate: _TokenRate | None = None
    dest_rate: _TokenRate | None = None
    dest_network: NetworkConfig | None = None


def _now_ms() -> int:
    return int(time.time() * 1000)


class BridgeQuoteEngine:
    """Quote aggregation, ranking and validation for one bridge session.

    Args:
        config: Thresholds and refresh settings
        composer: Quote composer (and its fee calculator and cache)
        tracker: Request ticket issuer
        clock: Returns the current time in milliseconds
    """

    def __init__(
        self,
        config: BridgeConfig | None = None,
        composer: QuoteComposer | None = None,
        tracker: RequestTracker | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.config = config or DEFAULT_BRIDGE_CONFIG
        self._composer = composer or QuoteComposer()
        self._tracker = tracker or RequestTracker()
        self._clock = clock or _now_ms
        self._state = _SessionState()

        # Wallet-wide market data, kept across sessions
        self._native_rate: Decimal | None = None
        self._cached_currency_rates: dict[str, Mapping[str, Any]] = {}
        self._gas_fee_estimates: GasFeeEstimates | None = None

    # ------------------------------------------------------------------
    # Request lifecycle
    # ------------------------------------------------------------------

    @property
    def request(self) -> QuoteRequest | None:
        return self._state.request

    @property
    def current_ticket(self) -> RequestTicket:
        return self._tracker.current

    @property
    def tracker(self) -> RequestTracker:
        return self._tracker

    @property
    def batch(self) -> QuoteBatch:
        return self._state.batch

    def update_quote_request(
        self,
        request: QuoteRequest | Mapping[str, Any],
        *,
        src_decimals: int | None = None,
    ) -> RequestTicket:
        """Start a new quote request.

        Changing any request parameter discards the current batch and
        selection and supersedes in-flight fetches. Exchange rates fetched
        for a token that is no longer part of the request are dropped.

        Args:
            request: New request parameters
            src_decimals: Decimals of the source token, used to value the
                requested amount

        Returns:
            The ticket fetches for this request must be applied with
        """
        if not isinstance(request, QuoteRequest):
            request = QuoteRequest.model_validate(request)

        state = self._state
        if request == state.request:
            if src_decimals is not None:
                state.src_decimals = src_decimals
            return self._tracker.current

        if state.src_rate and not request.matches_src_token(state.src_rate.token_address):
            state.src_rate = None
        if state.dest_rate and not request.matches_dest_token(state.dest_rate.token_address):
            state.dest_rate = None

        state.request = request
        state.src_decimals = src_decimals
        state.batch = QuoteBatch()
        state.selected = None

        ticket = self._tracker.begin(request)
        logger.debug(
            "quote_request_updated",
            generation=ticket.generation,
            src_chain_id=request.src_chain_id,
            dest_chain_id=request.dest_chain_id,
        )
        return ticket

    def begin_fetch(self, ticket: RequestTicket) -> bool:
        """Mark a fetch as in flight. Returns False for a superseded ticket."""
        if not self._tracker.is_current(ticket):
            return False
        self._state.batch = replace(self._state.batch, is_loading=True)
        return True

    def fail_fetch(self, ticket: RequestTicket) -> bool:
        """Mark a fetch as finished without results."""
        if not self._tracker.is_current(ticket):
            return False
        self._state.batch = replace(self._state.batch, is_loading=False)
        return True

    def apply_quote_batch(
        self,
        ticket: RequestTicket,
        payloads: Iterable[QuoteResponse | Mapping[str, Any]],
        fetched_at_ms: int | None = None,
    ) -> bool:
        """Replace the current batch with freshly fetched quotes.

        Args:
            ticket: Ticket the fetch was started with
            payloads: Quote responses, parsed or raw
            fetched_at_ms: Arrival time; defaults to the engine clock

        Returns:
            False if the ticket was superseded and the results were dropped
        """
        if not self._tracker.is_current(ticket) or ticket.request is None:
            logger.debug(
                "stale_quote_batch_dropped",
                generation=ticket.generation,
                current_generation=self._tracker.current.generation,
            )
            return False

        quotes = tuple(self._parse_quotes(payloads, ticket.request))
        refresh_count = self._state.batch.refresh_count + 1
        self._state.batch = QuoteBatch(
            quotes=quotes,
            fetched_at_ms=fetched_at_ms if fetched_at_ms is not None else self._clock(),
            is_loading=False,
            refresh_count=refresh_count,
            request=ticket.request,
        )

        if refresh_count > 1 and self._state.selected is not None:
            self._state.selected = resolve_selection(
                self._state.selected, self.get_ranked_quotes(), refresh_count
            )

        logger.debug(
            "quote_batch_applied",
            generation=ticket.generation,
            quote_count=len(quotes),
            refresh_count=refresh_count,
        )
        return True

    def reset_state(self) -> None:
        """Tear down the session: request, batch, selection and token rates."""
        self._tracker.supersede()
        self._state = _SessionState()

    # ------------------------------------------------------------------
    # Market data
    # ------------------------------------------------------------------

    def set_src_exchange_rate(self, token_address: str, rate: Rate | None) -> bool:
        """Record the source token's rate. Dropped if the token is no longer the source."""
        request = self._state.request
        if request is not None and not request.matches_src_token(token_address):
            logger.debug("stale_exchange_rate_dropped", side="src", token=token_address)
            return False
        self._state.src_rate = _TokenRate(normalize_address(token_address), to_rate(rate))
        return True

    def set_dest_exchange_rate(self, token_address: str, rate: Rate | None) -> bool:
        """Record the destination token's rate. Dropped if the token is no longer the destination."""
        request = self._state.request
        if request is not None and not request.matches_dest_token(token_address):
            logger.debug("stale_exchange_rate_dropped", side="dest", token=token_address)
            return False
        self._state.dest_rate = _TokenRate(normalize_address(token_address), to_rate(rate))
        return True

    def set_native_exchange_rate(self, rate: Rate | None) -> None:
        self._native_rate = to_rate(rate)

    def set_cached_currency_rates(self, rates: Mapping[str, Mapping[str, Any]]) -> None:
        """Record cached {ticker: {"conversionRate": x}} native currency rates."""
        self._cached_currency_rates = dict(rates)

    def set_gas_fee_estimates(self, estimates: GasFeeEstimates | Mapping[str, Any] | None) -> None:
        if estimates is not None and not isinstance(estimates, GasFeeEstimates):
            estimates = GasFeeEstimates.model_validate(estimates)
        self._gas_fee_estimates = estimates

    def set_dest_network(self, network: NetworkConfig | None) -> None:
        """Record the destination network, used for its native currency rate."""
        self._state.dest_network = network

    # ------------------------------------------------------------------
    # User preferences
    # ------------------------------------------------------------------

    @property
    def sort_order(self) -> SortOrder:
        return self._state.sort_order

    def set_sort_order(self, sort_order: SortOrder | str) -> None:
        self._state.sort_order = SortOrder(sort_order)

    def set_selected_quote(
        self,
        selection: ComposedQuote | QuoteIdentity | None,
    ) -> ComposedQuote | None:
        """Select a quote, or clear the selection with None.

        A QuoteIdentity is looked up in the current ranked quotes; an
        identity with no match clears the selection.

        Returns:
            The selected quote, or None
        """
        if isinstance(selection, QuoteIdentity):
            match = find_by_identity(self.get_ranked_quotes(), selection)
            if match is None:
                logger.warning("selected_identity_not_found", identity=str(selection))
            selection = match
        self._state.selected = selection
        return selection

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def exchange_rates(self) -> ExchangeRates:
        """Snapshot of the rates that apply to the current request."""
        state = self._state
        request = state.request

        src_rate = state.src_rate.rate if state.src_rate else None
        dest_token_rate = state.dest_rate.rate if state.dest_rate else None
        dest_rate = resolve_dest_exchange_rate(
            dest_token_rate,
            request.dest_token_address if request else None,
            state.dest_network.native_currency if state.dest_network else None,
            self._cached_currency_rates,
        )
        return ExchangeRates(
            src_token_rate=src_rate,
            dest_token_rate=dest_rate,
            native_rate=self._native_rate,
        )

    def fees_per_gas(self) -> FeesPerGas | None:
        return FeesPerGas.from_estimates(self._gas_fee_estimates, self.config.preferred_gas_estimate)

    def get_composed_quotes(self) -> tuple[ComposedQuote, ...]:
        """Quotes of the current batch with metrics, in arrival order."""
        return self._composer.compose(
            self._state.batch.quotes, self.exchange_rates(), self.fees_per_gas()
        )

    def get_ranked_quotes(self, sort_order: SortOrder | None = None) -> list[ComposedQuote]:
        return sort_quotes(self.get_composed_quotes(), sort_order or self._state.sort_order)

    def get_recommended_quote(self) -> ComposedQuote | None:
        sort_order = self._state.sort_order
        return recommended_quote(
            self.get_ranked_quotes(sort_order),
            sort_order,
            return_tolerance=self.config.max_return_difference_percentage,
            eta_ceiling_seconds=self.config.eta_ceiling_seconds,
        )

    def get_selected_quote(self) -> ComposedQuote | None:
        """The user's selection re-identified in the current batch."""
        return resolve_selection(
            self._state.selected,
            self.get_ranked_quotes(),
            self._state.batch.refresh_count,
        )

    def get_active_quote(self) -> ComposedQuote | None:
        return active_quote(self.get_selected_quote(), self.get_recommended_quote())

    def should_continue_refreshing(self) -> bool:
        request = self._state.request
        return should_refresh(
            self._state.batch.refresh_count,
            self.config.max_refresh_count,
            insufficient_balance_override=bool(request and request.insufficient_bal),
        )

    def seconds_until_next_refresh(self, now_ms: int | None = None) -> int:
        return seconds_until_next_refresh(
            self._state.batch.fetched_at_ms,
            self.config.refresh_rate_seconds,
            now_ms if now_ms is not None else self._clock(),
        )

    def get_bridge_quotes(self) -> BridgeQuotes:
        batch = self._state.batch
        sorted_quotes = self.get_ranked_quotes()
        recommended = self.get_recommended_quote()
        return BridgeQuotes(
            sorted_quotes=sorted_quotes,
            recommended_quote=recommended,
            active_quote=active_quote(self.get_selected_quote(), recommended),
            quotes_last_fetched_ms=batch.fetched_at_ms,
            is_loading=batch.is_loading,
            quotes_refresh_count=batch.refresh_count,
            is_quote_going_to_refresh=self.should_continue_refreshing(),
        )

    def validated_src_amount(self) -> Decimal | None:
        request = self._state.request
        if request is None:
            return None
        return validated_src_amount(request.src_token_amount, self._state.src_decimals)

    def from_amount_in_fiat(self) -> Decimal | None:
        request = self._state.request
        if request is None:
            return None
        rates = self.exchange_rates()
        return from_amount_in_fiat(
            self.validated_src_amount(),
            is_native_address(request.src_token_address),
            rates.src_token_rate,
            rates.native_rate,
        )

    def get_validation_errors(self) -> ValidationErrors:
        batch = self._state.batch
        estimates = self._gas_fee_estimates
        return get_validation_errors(
            self.get_active_quote(),
            quotes_last_fetched_ms=batch.fetched_at_ms,
            is_loading=batch.is_loading,
            from_amount_fiat=self.from_amount_in_fiat(),
            src_amount=self.validated_src_amount(),
            network_congestion=estimates.network_congestion if estimates else None,
            config=self.config,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _parse_quotes(
        self,
        payloads: Iterable[QuoteResponse | Mapping[str, Any]],
        request: QuoteRequest,
    ) -> Iterable[QuoteResponse]:
        for payload in payloads:
            if isinstance(payload, QuoteResponse):
                response = payload
            else:
                try:
                    response = QuoteResponse.model_validate(payload)
                except ValidationError as err:
                    logger.warning("quote_payload_invalid", error_count=err.error_count())
                    continue

            if not _matches_request(response, request):
                logger.warning(
                    "quote_request_mismatch",
                    bridge_id=response.quote.bridge_id,
                    src_chain_id=response.quote.src_chain_id,
                    dest_chain_id=response.quote.dest_chain_id,
                )
                continue
            yield response


def _matches_request(response: QuoteResponse, request: QuoteRequest) -> bool:
    quote = response.quote
    return (
        quote.src_chain_id == request.src_chain_id
        and quote.dest_chain_id == request.dest_chain_id
        and request.matches_src_token(quote.src_asset.address)
        and request.matches_dest_token(quote.dest_asset.address)
    )
