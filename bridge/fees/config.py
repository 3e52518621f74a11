"""Fee configuration for the quote engine."""

from dataclasses import dataclass

from bridge.constants import GWEI_DECIMALS, L1_DATA_FEE_CHAIN_IDS, NATIVE_DECIMALS


@dataclass(frozen=True)
class FeeConfig:
    """Centralized configuration for network fee calculation.

    Attributes:
        native_decimals: Decimals of the native asset (default: 18)
        gas_price_decimals: Decimals of the gas price unit relative to wei
            (default: 9, i.e. gwei)
        settlement_fee_chain_ids: Source chains whose quotes may carry an
            extra settlement (L1 data) fee. None accepts the fee from any
            chain. A quote without the fee adds nothing.
    """

    native_decimals: int = NATIVE_DECIMALS
    gas_price_decimals: int = GWEI_DECIMALS
    settlement_fee_chain_ids: frozenset[int] | None = L1_DATA_FEE_CHAIN_IDS

    def accepts_settlement_fee(self, chain_id: int) -> bool:
        if self.settlement_fee_chain_ids is None:
            return True
        return chain_id in self.settlement_fee_chain_ids


# Default configuration instance
DEFAULT_FEE_CONFIG = FeeConfig()
