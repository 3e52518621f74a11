"""Pydantic models for bridge aggregator quote payloads.

Only the fields the quote engine consumes are modelled; unknown fields are
ignored so new aggregator releases do not break parsing.
"""

from typing import Any

from pydantic import BaseModel, Field

from bridge.models.types import Address, Quantity, Uint256, is_native_address


class BridgeAsset(BaseModel):
    """Token metadata attached to each side of a quote."""

    address: Address
    chain_id: int = Field(alias="chainId")
    symbol: str | None = None
    name: str | None = None
    # Decimals may be missing from a malformed payload. Such a quote is
    # rejected during composition rather than at parse time.
    decimals: int | None = Field(default=None, ge=0, le=77)

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def is_native(self) -> bool:
        return is_native_address(self.address)


class FeeAmount(BaseModel):
    """A fee embedded in the quoted source amount."""

    amount: Uint256 = 0
    asset: BridgeAsset | None = None

    model_config = {"populate_by_name": True, "frozen": True}


class FeeData(BaseModel):
    """Fee breakdown of a quote."""

    metabridge: FeeAmount = Field(default_factory=FeeAmount)

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def protocol_fee(self) -> int:
        """Protocol fee in source token smallest units."""
        return self.metabridge.amount


class Step(BaseModel):
    """One hop of a bridge route."""

    action: str | None = None
    src_chain_id: int | None = Field(default=None, alias="srcChainId")
    dest_chain_id: int | None = Field(default=None, alias="destChainId")
    protocol: dict[str, Any] | None = None

    model_config = {"populate_by_name": True, "frozen": True}


class Quote(BaseModel):
    """The priced route returned by one provider."""

    request_id: str | None = Field(default=None, alias="requestId")
    src_chain_id: int = Field(alias="srcChainId")
    src_asset: BridgeAsset = Field(alias="srcAsset")
    src_token_amount: Uint256 = Field(alias="srcTokenAmount")
    dest_chain_id: int = Field(alias="destChainId")
    dest_asset: BridgeAsset = Field(alias="destAsset")
    dest_token_amount: Uint256 = Field(alias="destTokenAmount")
    fee_data: FeeData = Field(default_factory=FeeData, alias="feeData")
    bridge_id: str = Field(alias="bridgeId")
    bridges: tuple[str, ...] = ()
    steps: tuple[Step, ...] = ()

    model_config = {"populate_by_name": True, "frozen": True}


class TxData(BaseModel):
    """An unsigned transaction attached to a quote."""

    chain_id: int | None = Field(default=None, alias="chainId")
    to: Address | None = None
    from_: Address | None = Field(default=None, alias="from")
    value: Quantity = 0
    data: str | None = None
    gas_limit: int | None = Field(default=None, ge=0, alias="gasLimit")

    model_config = {"populate_by_name": True, "frozen": True}


class QuoteResponse(BaseModel):
    """A quote together with the transactions needed to execute it."""

    quote: Quote
    trade: TxData | None = None
    approval: TxData | None = None
    estimated_processing_time_in_seconds: int = Field(
        alias="estimatedProcessingTimeInSeconds", ge=0
    )
    # L1 data fee charged by rollups on top of execution gas, in wei
    l1_gas_fees_in_hex_wei: Quantity | None = Field(default=None, alias="l1GasFeesInHexWei")

    model_config = {"populate_by_name": True, "frozen": True}
