"""Fee calculation result types."""

from dataclasses import dataclass
from enum import Enum

from bridge.models.amounts import TokenAmount


class FeeError(Enum):
    """Reasons a quote's metrics cannot be computed."""

    MISSING_TRADE = "missing_trade"
    MISSING_DECIMALS = "missing_decimals"
    MISSING_GAS_PRICE = "missing_gas_price"
    INVALID_AMOUNT = "invalid_amount"


@dataclass(frozen=True)
class FeeResult:
    """Result of a fee calculation.

    Fee failures are expected for individual malformed quotes, so they are
    returned as values instead of raised.

    Attributes:
        amount: The fee in native units, or None on error
        error: If calculation failed, the type of error that occurred
        error_detail: Optional human-readable detail about the error

    Examples:
        result = FeeResult.with_amount(TokenAmount(raw=Decimal("0.002")))
        assert result.is_valid

        result = FeeResult.with_error(FeeError.MISSING_TRADE)
        assert result.is_error
    """

    amount: TokenAmount | None
    error: FeeError | None = None
    error_detail: str | None = None

    @property
    def is_valid(self) -> bool:
        """True if calculation succeeded."""
        return self.error is None

    @property
    def is_error(self) -> bool:
        """True if calculation failed with an error."""
        return self.error is not None

    @classmethod
    def with_amount(cls, amount: TokenAmount) -> "FeeResult":
        """Create a successful result."""
        return cls(amount=amount)

    @classmethod
    def with_error(cls, error: FeeError, detail: str | None = None) -> "FeeResult":
        """Create an error result."""
        return cls(amount=None, error=error, error_detail=detail)
