"""Derived quote metrics.

These are plain frozen dataclasses rather than pydantic models: they are
computed locally, never parsed from a payload.

Every fiat field is Decimal | None. None means the fiat value is unknown
(no exchange rate yet), which is different from a value of zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from bridge.models.quote import Quote, QuoteResponse


@dataclass(frozen=True)
class TokenAmount:
    """An amount in whole-token (or native) units with its fiat value.

    Attributes:
        raw: Amount in whole-token units, or None when the amount itself is
            unknown (a network fee before gas prices arrive)
        fiat: Fiat value, or None when no exchange rate is known
    """

    raw: Decimal | None
    fiat: Decimal | None = None


@dataclass(frozen=True)
class FiatAmount:
    """A value that only exists in fiat."""

    fiat: Decimal | None = None


@dataclass(frozen=True)
class QuoteIdentity:
    """Identifies "the same route" across quote refreshes.

    Built from the provider, the first bridge hop and the number of steps.
    Amounts, object identity and list position change between refreshes and
    are not part of it.
    """

    bridge_id: str
    first_bridge: str
    step_count: int

    def __str__(self) -> str:
        return f"{self.bridge_id}-{self.first_bridge}-{self.step_count}"

    @classmethod
    def of(cls, quote: Quote) -> QuoteIdentity:
        return cls(
            bridge_id=quote.bridge_id,
            first_bridge=quote.bridges[0] if quote.bridges else "",
            step_count=len(quote.steps),
        )


@dataclass(frozen=True)
class ComposedQuote:
    """A quote response enriched with currency-aware metrics.

    Attributes:
        response: The raw quote response
        received_amount: Destination amount (raw and fiat)
        sent_amount: Source amount including the protocol fee (raw and fiat)
        total_network_fee: Gas plus relayer fee in native units (raw and fiat)
        adjusted_return: Received fiat minus total network fee fiat
        cost: Adjusted return minus sent fiat; lower is better
        swap_rate: Received raw per sent raw, None when nothing is sent
    """

    response: QuoteResponse
    received_amount: TokenAmount
    sent_amount: TokenAmount
    total_network_fee: TokenAmount
    adjusted_return: FiatAmount
    cost: FiatAmount
    swap_rate: Decimal | None

    @property
    def quote(self) -> Quote:
        return self.response.quote

    @property
    def estimated_processing_time_in_seconds(self) -> int:
        return self.response.estimated_processing_time_in_seconds

    @property
    def identity(self) -> QuoteIdentity:
        return QuoteIdentity.of(self.response.quote)
