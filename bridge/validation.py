"""Validation of the active quote before submission.

ValidationErrors is a snapshot recomputed from the latest quotes, the
requested amount and the gas state. Balances are fetched asynchronously
and may not be ready when the snapshot is built, so balance checks are
methods taking the balance as an argument.

None of the checks raise on missing inputs; a check whose inputs are
absent reports False.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from bridge.config import DEFAULT_BRIDGE_CONFIG, BridgeConfig
from bridge.math import to_decimal, to_rate
from bridge.math.normalize import Rate
from bridge.models.amounts import ComposedQuote


@dataclass(frozen=True)
class ValidationErrors:
    """Warnings and blockers for the active quote.

    Attributes:
        is_no_quotes_available: A fetch completed and returned nothing usable
        is_src_amount_too_low: Source amount at or below the minimum fiat amount
        is_src_amount_less_than_30: Sent amount below the soft fiat threshold
            (30 by default); a warning, not a blocker
        is_estimated_return_low: Fees eat a disproportionate share of the trade
        is_network_congested: Source network congestion is busy or worse
    """

    is_no_quotes_available: bool
    is_src_amount_too_low: bool
    is_src_amount_less_than_30: bool
    is_estimated_return_low: bool
    is_network_congested: bool
    active_quote: ComposedQuote | None = None
    validated_src_amount: Decimal | None = None

    def is_insufficient_balance(self, balance: Decimal | None) -> bool:
        """True if the source asset balance cannot cover the requested amount."""
        if self.validated_src_amount is None or balance is None:
            return False
        return balance < self.validated_src_amount

    def is_insufficient_gas_balance(self, native_balance: Decimal | None) -> bool:
        """True if the native balance cannot cover the active quote's network fee."""
        if native_balance is None or self.active_quote is None:
            return False
        fee = self.active_quote.total_network_fee.raw
        if fee is None:
            return False
        return fee > native_balance

    @property
    def blocks_submission(self) -> bool:
        """True if a hard validation error prevents submitting the active quote."""
        return self.active_quote is None or self.is_no_quotes_available or self.is_src_amount_too_low


def validated_src_amount(src_token_amount: int | str | None, decimals: int | None) -> Decimal | None:
    """Requested source amount in whole tokens, None until amount and decimals are known."""
    if src_token_amount is None or src_token_amount == "" or decimals is None:
        return None
    try:
        return to_decimal(src_token_amount, decimals)
    except ValueError:
        return None


def from_amount_in_fiat(
    validated_amount: Decimal | None,
    src_is_native: bool,
    src_token_rate: Rate | None,
    native_rate: Rate | None,
) -> Decimal | None:
    """Fiat value of the requested source amount, None when no rate is known."""
    if validated_amount is None:
        return None
    rate = to_rate(native_rate if src_is_native else src_token_rate)
    if rate is None:
        return None
    return validated_amount * rate


def get_validation_errors(
    active_quote: ComposedQuote | None,
    *,
    quotes_last_fetched_ms: int | None,
    is_loading: bool,
    from_amount_fiat: Decimal | None = None,
    src_amount: Decimal | None = None,
    network_congestion: Decimal | None = None,
    config: BridgeConfig = DEFAULT_BRIDGE_CONFIG,
) -> ValidationErrors:
    """Evaluate every validation rule against the current snapshot.

    Args:
        active_quote: The selected or recommended quote
        quotes_last_fetched_ms: When the last batch arrived, None if never
        is_loading: Whether a fetch is in flight
        from_amount_fiat: Fiat value of the requested source amount
        src_amount: Requested source amount in whole tokens
        network_congestion: Congestion metric from the gas fee source
        config: Thresholds

    Returns:
        ValidationErrors snapshot
    """
    sent_fiat = active_quote.sent_amount.fiat if active_quote else None
    adjusted_fiat = active_quote.adjusted_return.fiat if active_quote else None

    is_no_quotes_available = (
        active_quote is None and bool(quotes_last_fetched_ms) and not is_loading
    )

    is_src_amount_too_low = (
        src_amount is not None
        and from_amount_fiat is not None
        and Decimal(0) < from_amount_fiat <= config.min_fiat_src_amount
    )

    # Any positive sent value below the soft threshold warns, including
    # amounts already under the hard minimum.
    is_src_amount_less_than_30 = (
        sent_fiat is not None and Decimal(0) < sent_fiat < config.soft_fiat_src_amount
    )

    is_estimated_return_low = (
        bool(sent_fiat)
        and adjusted_fiat is not None
        and adjusted_fiat < config.max_return_difference_percentage * sent_fiat
    )

    is_network_congested = (
        network_congestion is not None and network_congestion >= config.congestion_busy_threshold
    )

    return ValidationErrors(
        is_no_quotes_available=is_no_quotes_available,
        is_src_amount_too_low=is_src_amount_too_low,
        is_src_amount_less_than_30=is_src_amount_less_than_30,
        is_estimated_return_low=is_estimated_return_low,
        is_network_congested=is_network_congested,
        active_quote=active_quote,
        validated_src_amount=src_amount,
    )
