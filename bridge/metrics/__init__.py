"""Quote metrics: received, sent, fees, adjusted return and cost."""

from bridge.metrics.composer import (
    ComposeResult,
    QuoteComposer,
    adjusted_return,
    batch_fingerprint,
    compose_quote,
    compose_quotes,
    cost,
    received_amount,
    sent_amount,
    swap_rate,
)
from bridge.metrics.rates import ExchangeRates, rate_from_snapshot, resolve_dest_exchange_rate

__all__ = [
    "ComposeResult",
    "ExchangeRates",
    "QuoteComposer",
    "adjusted_return",
    "batch_fingerprint",
    "compose_quote",
    "compose_quotes",
    "cost",
    "rate_from_snapshot",
    "received_amount",
    "resolve_dest_exchange_rate",
    "sent_amount",
    "swap_rate",
]
