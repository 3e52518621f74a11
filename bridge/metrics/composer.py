"""Quote metrics composition.

Turns raw quote responses into ComposedQuotes under one snapshot of
exchange rates and gas prices. Composition is pure: composing the same
quotes with the same snapshot always yields equal results, so it can be
rerun whenever any input changes.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

import structlog

from bridge.cache import ProjectionCache
from bridge.fees import DEFAULT_FEE_CALCULATOR, FeeCalculator, FeeError
from bridge.math import to_decimal, to_fiat
from bridge.metrics.rates import ExchangeRates
from bridge.models.amounts import ComposedQuote, FiatAmount, TokenAmount
from bridge.models.gas import FeesPerGas
from bridge.models.quote import Quote, QuoteResponse

logger = structlog.get_logger()


@dataclass(frozen=True)
class ComposeResult:
    """Result of composing one quote.

    Attributes:
        quote: The composed quote, or None on error
        error: If composition failed, the type of error that occurred
        error_detail: Optional human-readable detail about the error
    """

    quote: ComposedQuote | None
    error: FeeError | None = None
    error_detail: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, quote: ComposedQuote) -> ComposeResult:
        return cls(quote=quote)

    @classmethod
    def failed(cls, error: FeeError, detail: str | None = None) -> ComposeResult:
        return cls(quote=None, error=error, error_detail=detail)


def received_amount(quote: Quote, exchange_rate: Decimal | None) -> TokenAmount:
    """Destination amount in whole tokens and fiat."""
    if quote.dest_asset.decimals is None:
        raise ValueError("Destination asset has no decimals")
    raw = to_decimal(quote.dest_token_amount, quote.dest_asset.decimals)
    return TokenAmount(raw=raw, fiat=to_fiat(raw, exchange_rate))


def sent_amount(quote: Quote, exchange_rate: Decimal | None) -> TokenAmount:
    """Source amount plus the embedded protocol fee, in whole tokens and fiat."""
    if quote.src_asset.decimals is None:
        raise ValueError("Source asset has no decimals")
    raw = to_decimal(
        quote.src_token_amount + quote.fee_data.protocol_fee,
        quote.src_asset.decimals,
    )
    return TokenAmount(raw=raw, fiat=to_fiat(raw, exchange_rate))


def swap_rate(sent_raw: Decimal, received_raw: Decimal) -> Decimal | None:
    """Destination tokens received per source token sent, None if nothing is sent."""
    if sent_raw == 0:
        return None
    return received_raw / sent_raw


def adjusted_return(
    received_fiat: Decimal | None,
    total_network_fee_fiat: Decimal | None,
) -> FiatAmount:
    """Received value net of network fees."""
    if received_fiat is None or total_network_fee_fiat is None:
        return FiatAmount(fiat=None)
    return FiatAmount(fiat=received_fiat - total_network_fee_fiat)


def cost(adjusted_return_fiat: Decimal | None, sent_fiat: Decimal | None) -> FiatAmount:
    """Net value lost by the trade; more negative is a better deal."""
    if adjusted_return_fiat is None or sent_fiat is None:
        return FiatAmount(fiat=None)
    return FiatAmount(fiat=adjusted_return_fiat - sent_fiat)


def compose_quote(
    response: QuoteResponse,
    rates: ExchangeRates,
    fees_per_gas: FeesPerGas | None,
    calculator: FeeCalculator = DEFAULT_FEE_CALCULATOR,
) -> ComposeResult:
    """Compute the metrics of one quote.

    Args:
        response: The raw quote response
        rates: Exchange rate snapshot
        fees_per_gas: Base and priority fee, or None while unknown
        calculator: Network fee calculator

    Returns:
        ComposeResult with the composed quote or the reason it was rejected
    """
    quote = response.quote

    if response.trade is None:
        return ComposeResult.failed(FeeError.MISSING_TRADE, "Quote has no trade transaction")
    if quote.src_asset.decimals is None or quote.dest_asset.decimals is None:
        return ComposeResult.failed(
            FeeError.MISSING_DECIMALS,
            f"Missing decimals for {quote.src_asset.symbol} or {quote.dest_asset.symbol}",
        )

    fee = calculator.total_network_fee(
        response,
        fees_per_gas.base_fee if fees_per_gas else None,
        fees_per_gas.priority_fee if fees_per_gas else None,
        rates.native_rate,
    )
    if fee.error is not None:
        return ComposeResult.failed(fee.error, fee.error_detail)
    network_fee = fee.amount if fee.amount is not None else TokenAmount(raw=None, fiat=None)

    received = received_amount(quote, rates.dest_token_rate)
    sent = sent_amount(quote, rates.sent_rate(quote.src_asset.is_native))
    adjusted = adjusted_return(received.fiat, network_fee.fiat)

    return ComposeResult.ok(
        ComposedQuote(
            response=response,
            received_amount=received,
            sent_amount=sent,
            total_network_fee=network_fee,
            adjusted_return=adjusted,
            cost=cost(adjusted.fiat, sent.fiat),
            swap_rate=swap_rate(sent.raw, received.raw),
        )
    )


def compose_quotes(
    responses: Iterable[QuoteResponse],
    rates: ExchangeRates,
    fees_per_gas: FeesPerGas | None,
    calculator: FeeCalculator = DEFAULT_FEE_CALCULATOR,
) -> list[ComposedQuote]:
    """Compose a batch, dropping quotes that cannot be composed.

    Input order is preserved for the quotes that survive.
    """
    composed: list[ComposedQuote] = []
    for response in responses:
        result = compose_quote(response, rates, fees_per_gas, calculator)
        if result.quote is None:
            logger.warning(
                "quote_dropped",
                bridge_id=response.quote.bridge_id,
                error=result.error.value if result.error else None,
                detail=result.error_detail,
            )
            continue
        composed.append(result.quote)
    return composed


class QuoteComposer:
    """Composes quote batches, caching results by input values.

    Rate updates and batch updates arrive independently, so the same
    batch is composed many times. Each distinct (batch, rates, gas)
    combination is computed once.
    """

    def __init__(
        self,
        calculator: FeeCalculator | None = None,
        cache: ProjectionCache[tuple, tuple[ComposedQuote, ...]] | None = None,
    ) -> None:
        self.calculator = calculator or DEFAULT_FEE_CALCULATOR
        self.cache = cache or ProjectionCache(max_entries=8)

    def compose(
        self,
        responses: Sequence[QuoteResponse],
        rates: ExchangeRates,
        fees_per_gas: FeesPerGas | None,
    ) -> tuple[ComposedQuote, ...]:
        key = (batch_fingerprint(responses), rates, fees_per_gas)
        return self.cache.get_or_compute(
            key,
            lambda: tuple(compose_quotes(responses, rates, fees_per_gas, self.calculator)),
        )


def batch_fingerprint(responses: Sequence[QuoteResponse]) -> tuple[str, ...]:
    """Value-based key of a batch of quote responses."""
    return tuple(response.model_dump_json() for response in responses)
