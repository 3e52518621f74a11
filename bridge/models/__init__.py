"""Pydantic models for bridge quote data structures."""

from bridge.models.amounts import ComposedQuote, FiatAmount, QuoteIdentity, TokenAmount
from bridge.models.gas import FeesPerGas, GasFeeEstimates, GasFeeLevel
from bridge.models.quote import (
    BridgeAsset,
    FeeAmount,
    FeeData,
    Quote,
    QuoteResponse,
    Step,
    TxData,
)
from bridge.models.request import QuoteRequest, is_valid_quote_request
from bridge.models.types import (
    Address,
    Quantity,
    Uint256,
    is_native_address,
    normalize_address,
)

__all__ = [
    # Types
    "Address",
    "Quantity",
    "Uint256",
    "is_native_address",
    "normalize_address",
    # Quote models
    "BridgeAsset",
    "FeeAmount",
    "FeeData",
    "Quote",
    "QuoteResponse",
    "Step",
    "TxData",
    # Request
    "QuoteRequest",
    "is_valid_quote_request",
    # Derived metrics
    "ComposedQuote",
    "FiatAmount",
    "QuoteIdentity",
    "TokenAmount",
    # Gas
    "FeesPerGas",
    "GasFeeEstimates",
    "GasFeeLevel",
]
