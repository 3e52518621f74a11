"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_quote_response
    # or
    from tests.helpers.factories import make_quote_payload, make_composed_quote

    response = make_quote_response(bridge_id="lifi", dest_token_amount=99_500_000)
"""

from decimal import Decimal
from typing import Any

from bridge.models import (
    ComposedQuote,
    FiatAmount,
    QuoteRequest,
    QuoteResponse,
    TokenAmount,
)
from tests.helpers.constants import (
    BRIDGE_CONTRACT,
    DAI,
    ETHEREUM,
    OPTIMISM,
    USDC,
    USDC_OPTIMISM,
    USER,
)

_SYMBOLS = {USDC: "USDC", USDC_OPTIMISM: "USDC", DAI: "DAI"}


def make_asset(
    address: str = USDC,
    chain_id: int = ETHEREUM,
    decimals: int | None = 6,
    symbol: str | None = None,
) -> dict[str, Any]:
    """Create an asset payload as sent by the aggregator."""
    return {
        "address": address,
        "chainId": chain_id,
        "symbol": symbol or _SYMBOLS.get(address, "ETH"),
        "name": symbol or _SYMBOLS.get(address, "Ether"),
        "decimals": decimals,
    }


def make_quote_payload(
    *,
    bridge_id: str = "lifi",
    bridges: tuple[str, ...] = ("across",),
    step_count: int = 1,
    src_chain_id: int = ETHEREUM,
    dest_chain_id: int = OPTIMISM,
    src_token: str = USDC,
    dest_token: str = USDC_OPTIMISM,
    src_decimals: int | None = 6,
    dest_decimals: int | None = 6,
    src_token_amount: int | str = 100_000_000,  # 100 USDC
    dest_token_amount: int | str = 99_500_000,  # 99.5 USDC
    protocol_fee: int | str = 0,
    trade_value: str = "0x0",
    trade_gas_limit: int | None = 200_000,
    approval_gas_limit: int | None = None,
    include_trade: bool = True,
    eta: int = 60,
    l1_gas_fees: str | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """Create a raw quote response payload with sensible defaults.

    The default is 100 USDC on Ethereum bridged to 99.5 USDC on Optimism
    with a 200k gas trade and no approval.

    Args:
        bridge_id: Aggregated provider id
        bridges: Bridge hops; the first one is part of the route identity
        step_count: Number of route steps
        src_token_amount: Source amount in smallest units
        dest_token_amount: Destination amount in smallest units
        protocol_fee: Embedded protocol fee in source smallest units
        trade_value: Native value of the trade transaction, hex wei
        trade_gas_limit: Gas limit of the trade transaction
        approval_gas_limit: Gas limit of the approval, None for no approval
        include_trade: Whether the payload carries a trade transaction
        eta: Estimated processing time in seconds
        l1_gas_fees: L1 data fee, hex wei

    Returns:
        Payload dict in the aggregator's camelCase wire format
    """
    payload: dict[str, Any] = {
        "quote": {
            "requestId": request_id or f"{bridge_id}-request",
            "srcChainId": src_chain_id,
            "srcAsset": make_asset(src_token, src_chain_id, src_decimals),
            "srcTokenAmount": str(src_token_amount),
            "destChainId": dest_chain_id,
            "destAsset": make_asset(dest_token, dest_chain_id, dest_decimals),
            "destTokenAmount": str(dest_token_amount),
            "feeData": {
                "metabridge": {
                    "amount": str(protocol_fee),
                    "asset": make_asset(src_token, src_chain_id, src_decimals),
                }
            },
            "bridgeId": bridge_id,
            "bridges": list(bridges),
            "steps": [
                {
                    "action": "bridge",
                    "srcChainId": src_chain_id,
                    "destChainId": dest_chain_id,
                    "protocol": {"name": bridges[0] if bridges else bridge_id},
                }
                for _ in range(step_count)
            ],
        },
        "estimatedProcessingTimeInSeconds": eta,
    }
    if include_trade:
        payload["trade"] = {
            "chainId": src_chain_id,
            "to": BRIDGE_CONTRACT,
            "from": USER,
            "value": trade_value,
            "data": "0x",
            "gasLimit": trade_gas_limit,
        }
    if approval_gas_limit is not None:
        payload["approval"] = {
            "chainId": src_chain_id,
            "to": src_token,
            "from": USER,
            "value": "0x0",
            "data": "0x095ea7b3",
            "gasLimit": approval_gas_limit,
        }
    if l1_gas_fees is not None:
        payload["l1GasFeesInHexWei"] = l1_gas_fees
    return payload


def make_quote_response(**kwargs: Any) -> QuoteResponse:
    """Create a parsed QuoteResponse. Accepts make_quote_payload arguments."""
    return QuoteResponse.model_validate(make_quote_payload(**kwargs))


def make_quote_request(
    *,
    src_chain_id: int = ETHEREUM,
    dest_chain_id: int = OPTIMISM,
    src_token: str = USDC,
    dest_token: str = USDC_OPTIMISM,
    src_token_amount: int | None = 100_000_000,
    insufficient_bal: bool = False,
) -> QuoteRequest:
    """Create a quote request matching the make_quote_payload defaults."""
    return QuoteRequest(
        srcChainId=src_chain_id,
        destChainId=dest_chain_id,
        srcTokenAddress=src_token,
        destTokenAddress=dest_token,
        srcTokenAmount=src_token_amount,
        insufficientBal=insufficient_bal,
    )


def _optional_decimal(value: Decimal | int | str | None) -> Decimal | None:
    return None if value is None else Decimal(value)


def make_composed_quote(
    *,
    cost: Decimal | int | str | None = -5,
    adjusted_return: Decimal | int | str | None = 95,
    sent_fiat: Decimal | int | str | None = 100,
    eta: int = 60,
    bridge_id: str = "lifi",
    bridges: tuple[str, ...] = ("across",),
    step_count: int = 1,
    network_fee: Decimal | int | str | None = "0.0024",
) -> ComposedQuote:
    """Create a ComposedQuote with metrics set directly.

    Ranking and validation only read the metrics, so they are given as
    fiat values rather than derived from a payload.
    """
    response = make_quote_response(
        bridge_id=bridge_id,
        bridges=bridges,
        step_count=step_count,
        eta=eta,
    )
    return ComposedQuote(
        response=response,
        received_amount=TokenAmount(raw=Decimal("99.5"), fiat=None),
        sent_amount=TokenAmount(raw=Decimal(100), fiat=_optional_decimal(sent_fiat)),
        total_network_fee=TokenAmount(raw=_optional_decimal(network_fee), fiat=None),
        adjusted_return=FiatAmount(fiat=_optional_decimal(adjusted_return)),
        cost=FiatAmount(fiat=_optional_decimal(cost)),
        swap_rate=Decimal("0.995"),
    )
