"""Network fee calculation for bridge quotes.

A quote's network fee is the relayer fee (native value attached on top of
the principal) plus gas for the approval and trade transactions. Chains
listed in ``FeeConfig.settlement_fee_chain_ids`` also add the L1 settlement
fee reported with the quote.

    calculator = DefaultFeeCalculator()
    fee = calculator.total_network_fee(response, base_fee, priority_fee, native_rate)
    if fee.is_error:
        log_and_skip(fee.error)
"""

from bridge.fees.calculator import (
    DEFAULT_FEE_CALCULATOR,
    DefaultFeeCalculator,
    FeeCalculator,
)
from bridge.fees.config import DEFAULT_FEE_CONFIG, FeeConfig
from bridge.fees.result import FeeError, FeeResult

__all__ = [
    "DEFAULT_FEE_CALCULATOR",
    "DEFAULT_FEE_CONFIG",
    "DefaultFeeCalculator",
    "FeeCalculator",
    "FeeConfig",
    "FeeError",
    "FeeResult",
]
