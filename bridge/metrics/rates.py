"""Exchange rate snapshots used to value quotes in fiat."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from bridge.math import to_rate
from bridge.math.normalize import Rate
from bridge.models.types import is_native_address, normalize_address


@dataclass(frozen=True)
class ExchangeRates:
    """Fiat exchange rates for one recomputation pass.

    Attributes:
        src_token_rate: Fiat value of one source token
        dest_token_rate: Fiat value of one destination token, already
            resolved with resolve_dest_exchange_rate
        native_rate: Fiat value of one source-chain native token
    """

    src_token_rate: Decimal | None = None
    dest_token_rate: Decimal | None = None
    native_rate: Decimal | None = None

    @classmethod
    def of(
        cls,
        src_token_rate: Rate | None = None,
        dest_token_rate: Rate | None = None,
        native_rate: Rate | None = None,
    ) -> ExchangeRates:
        """Build a snapshot, coercing each rate to Decimal."""
        return cls(
            src_token_rate=to_rate(src_token_rate),
            dest_token_rate=to_rate(dest_token_rate),
            native_rate=to_rate(native_rate),
        )

    def sent_rate(self, src_is_native: bool) -> Decimal | None:
        """Rate for the sent amount: native rate for native assets."""
        return self.native_rate if src_is_native else self.src_token_rate


def resolve_dest_exchange_rate(
    dest_token_rate: Rate | None,
    dest_token_address: str | None,
    dest_native_currency: str | None,
    cached_currency_rates: Mapping[str, Mapping[str, Any]] | None,
) -> Decimal | None:
    """Pick the destination token's exchange rate.

    A destination chain can be selected before the user adds it to the
    wallet, in which case no live rate is fetched for its native asset.
    The cached rate of the chain's native currency is used instead.

    Args:
        dest_token_rate: Live rate fetched for the destination token
        dest_token_address: Destination token address
        dest_native_currency: Native currency ticker of the destination chain
        cached_currency_rates: {ticker: {"conversionRate": x}} cache

    Returns:
        The rate, or None when neither source has one
    """
    if dest_token_rate is not None:
        return to_rate(dest_token_rate)
    if not is_native_address(dest_token_address) or not dest_native_currency:
        return None
    cached = (cached_currency_rates or {}).get(dest_native_currency)
    if not cached:
        return None
    return to_rate(cached.get("conversionRate"))


def rate_from_snapshot(
    snapshot: Mapping[str, Mapping[str, Any]] | None,
    token_address: str,
) -> Decimal | None:
    """Read one token's rate from a {tokenAddress: {"conversionRate": x}} snapshot.

    Address lookup is case-insensitive since rate services return
    checksummed addresses.
    """
    if not snapshot:
        return None
    wanted = normalize_address(token_address)
    for address, entry in snapshot.items():
        if normalize_address(address) == wanted and entry:
            return to_rate(entry.get("conversionRate"))
    return None
