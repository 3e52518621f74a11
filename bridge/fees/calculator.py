"""Network fee calculator for bridge quotes.

A quote's network fee has two parts, both paid in the source chain's
native asset:
- relayer fee: native value attached to the trade transaction beyond the
  swapped principal
- gas fee: (trade + approval gas) * (base + priority fee per gas), plus
  the chain's extra settlement (L1 data) fee when it has one
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

import structlog

from bridge.fees.config import DEFAULT_FEE_CONFIG, FeeConfig
from bridge.fees.result import FeeError, FeeResult
from bridge.math import to_decimal, to_fiat
from bridge.math.normalize import Rate
from bridge.models.amounts import TokenAmount
from bridge.models.quote import QuoteResponse

logger = structlog.get_logger()


class FeeCalculator(Protocol):
    """Protocol for network fee calculation.

    Implementations can be swapped for testing or for chains with
    different fee models.
    """

    def relayer_fee(
        self,
        response: QuoteResponse,
        native_exchange_rate: Rate | None,
    ) -> FeeResult:
        """Calculate the relayer fee of a quote in native units."""
        ...

    def gas_fee(
        self,
        response: QuoteResponse,
        base_fee_per_gas: Decimal | None,
        priority_fee_per_gas: Decimal | None,
        native_exchange_rate: Rate | None,
    ) -> FeeResult:
        """Calculate the gas fee of a quote in native units."""
        ...

    def total_network_fee(
        self,
        response: QuoteResponse,
        base_fee_per_gas: Decimal | None,
        priority_fee_per_gas: Decimal | None,
        native_exchange_rate: Rate | None,
    ) -> FeeResult:
        """Calculate gas fee plus relayer fee."""
        ...


class DefaultFeeCalculator:
    """Default implementation of network fee calculation.

    Attributes:
        config: Fee configuration settings
    """

    def __init__(self, config: FeeConfig | None = None):
        """Initialize with optional configuration.

        Args:
            config: Fee configuration. Uses DEFAULT_FEE_CONFIG if not provided.
        """
        self.config = config or DEFAULT_FEE_CONFIG

    def relayer_fee(
        self,
        response: QuoteResponse,
        native_exchange_rate: Rate | None,
    ) -> FeeResult:
        """Calculate the relayer fee of a quote.

        The trade's native value pays the relayer. When the source asset is
        itself native, the value also carries the swapped principal (source
        amount plus protocol fee), which is not a fee and is subtracted.

        Args:
            response: The quote response
            native_exchange_rate: Fiat value of one native token, or None

        Returns:
            FeeResult with the relayer fee in native units
        """
        if response.trade is None:
            return FeeResult.with_error(FeeError.MISSING_TRADE, "Quote has no trade transaction")

        quote = response.quote
        principal = 0
        if quote.src_asset.is_native:
            principal = quote.src_token_amount + quote.fee_data.protocol_fee

        relayer_fee_wei = response.trade.value - principal
        if relayer_fee_wei < 0:
            logger.warning(
                "relayer_fee_negative",
                bridge_id=quote.bridge_id,
                trade_value=response.trade.value,
                principal=principal,
            )
            return FeeResult.with_error(
                FeeError.INVALID_AMOUNT,
                f"Trade value {response.trade.value} is below the principal {principal}",
            )

        raw = to_decimal(relayer_fee_wei, self.config.native_decimals)
        return FeeResult.with_amount(TokenAmount(raw=raw, fiat=to_fiat(raw, native_exchange_rate)))

    def gas_fee(
        self,
        response: QuoteResponse,
        base_fee_per_gas: Decimal | None,
        priority_fee_per_gas: Decimal | None,
        native_exchange_rate: Rate | None,
    ) -> FeeResult:
        """Calculate the gas fee of a quote.

        gas (gwei) = (trade gas + approval gas) * (base + priority) + settlement fee

        Args:
            response: The quote response
            base_fee_per_gas: Estimated base fee in decimal gwei
            priority_fee_per_gas: Priority fee in decimal gwei
            native_exchange_rate: Fiat value of one native token, or None

        Returns:
            FeeResult with the gas fee in native units
        """
        if response.trade is None:
            return FeeResult.with_error(FeeError.MISSING_TRADE, "Quote has no trade transaction")

        if base_fee_per_gas is None or priority_fee_per_gas is None:
            return FeeResult.with_error(
                FeeError.MISSING_GAS_PRICE,
                "Base fee and priority fee are required to price gas",
            )

        total_gas_limit = response.trade.gas_limit or 0
        if response.approval is not None:
            total_gas_limit += response.approval.gas_limit or 0
        fee_per_gas = base_fee_per_gas + priority_fee_per_gas
        gas_fee_in_gas_unit = total_gas_limit * fee_per_gas

        settlement_fee = self._settlement_fee(response)
        if settlement_fee is not None:
            gas_fee_in_gas_unit += settlement_fee

        raw = gas_fee_in_gas_unit.scaleb(-(self.config.native_decimals - self.config.gas_price_decimals))

        logger.debug(
            "gas_fee_calculated",
            bridge_id=response.quote.bridge_id,
            total_gas_limit=total_gas_limit,
            fee_per_gas=str(fee_per_gas),
            settlement_fee=str(settlement_fee) if settlement_fee is not None else None,
        )

        return FeeResult.with_amount(TokenAmount(raw=raw, fiat=to_fiat(raw, native_exchange_rate)))

    def total_network_fee(
        self,
        response: QuoteResponse,
        base_fee_per_gas: Decimal | None,
        priority_fee_per_gas: Decimal | None,
        native_exchange_rate: Rate | None,
    ) -> FeeResult:
        """Calculate the total network fee of a quote.

        Raw amounts are summed. Fiat amounts are summed treating a missing
        addend as zero; the sum is None only when both are None.

        Missing gas prices make the fee unknown rather than failing: the
        result is valid and both its raw and fiat amounts are None.
        """
        gas = self.gas_fee(response, base_fee_per_gas, priority_fee_per_gas, native_exchange_rate)
        if gas.is_error and gas.error != FeeError.MISSING_GAS_PRICE:
            return gas
        relayer = self.relayer_fee(response, native_exchange_rate)
        if relayer.is_error:
            return relayer

        if gas.amount is None or relayer.amount is None:
            logger.debug("network_fee_unknown", bridge_id=response.quote.bridge_id)
            return FeeResult.with_amount(TokenAmount(raw=None, fiat=None))

        return FeeResult.with_amount(
            TokenAmount(
                raw=_sum_raw(gas.amount.raw, relayer.amount.raw),
                fiat=_sum_fiat(gas.amount.fiat, relayer.amount.fiat),
            )
        )

    def _settlement_fee(self, response: QuoteResponse) -> Decimal | None:
        """Extra settlement fee converted from wei to the gas price unit.

        Returns None when the quote carries no fee or its chain does not
        charge one.
        """
        fee_wei = response.l1_gas_fees_in_hex_wei
        if fee_wei is None:
            return None

        chain_id = response.quote.src_chain_id
        if not self.config.accepts_settlement_fee(chain_id):
            logger.debug(
                "settlement_fee_ignored",
                bridge_id=response.quote.bridge_id,
                src_chain_id=chain_id,
            )
            return None

        return to_decimal(fee_wei, self.config.gas_price_decimals)


def _sum_raw(a: Decimal | None, b: Decimal | None) -> Decimal | None:
    if a is None or b is None:
        return None
    return a + b


def _sum_fiat(a: Decimal | None, b: Decimal | None) -> Decimal | None:
    if a is None and b is None:
        return None
    return (a or Decimal(0)) + (b or Decimal(0))


# Default calculator instance
DEFAULT_FEE_CALCULATOR = DefaultFeeCalculator()
