"""Gas fee estimates supplied by the wallet's gas fee source."""

from decimal import Decimal

from pydantic import BaseModel, Field


class GasFeeLevel(BaseModel):
    """Suggested EIP-1559 fees for one speed level, in decimal gwei."""

    suggested_max_fee_per_gas: Decimal | None = Field(
        default=None, alias="suggestedMaxFeePerGas"
    )
    suggested_max_priority_fee_per_gas: Decimal | None = Field(
        default=None, alias="suggestedMaxPriorityFeePerGas"
    )

    model_config = {"populate_by_name": True, "frozen": True}


class GasFeeEstimates(BaseModel):
    """Fee market snapshot for the source chain."""

    estimated_base_fee: Decimal | None = Field(default=None, alias="estimatedBaseFee")
    low: GasFeeLevel | None = None
    medium: GasFeeLevel | None = None
    high: GasFeeLevel | None = None
    network_congestion: Decimal | None = Field(default=None, alias="networkCongestion")

    model_config = {"populate_by_name": True, "frozen": True}

    def level(self, name: str) -> GasFeeLevel | None:
        if name not in ("low", "medium", "high"):
            raise ValueError(f"Unknown gas estimate level: {name}")
        return getattr(self, name)


class FeesPerGas(BaseModel):
    """Base and priority fee used to price a quote's gas, in decimal gwei."""

    base_fee: Decimal
    priority_fee: Decimal

    model_config = {"frozen": True}

    @classmethod
    def from_estimates(cls, estimates: GasFeeEstimates | None, level: str) -> "FeesPerGas | None":
        """Pick the base fee and the priority fee of the given level.

        Returns None while either value is unknown.
        """
        if estimates is None or estimates.estimated_base_fee is None:
            return None
        fee_level = estimates.level(level)
        if fee_level is None or fee_level.suggested_max_priority_fee_per_gas is None:
            return None
        return cls(
            base_fee=estimates.estimated_base_fee,
            priority_fee=fee_level.suggested_max_priority_fee_per_gas,
        )
