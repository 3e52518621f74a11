"""Quote request parameters and their validation."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from bridge.models.types import Address, Uint256, normalize_address

_STRING_FIELDS = ("srcTokenAddress", "destTokenAddress")
_NUMBER_FIELDS = ("srcChainId", "destChainId", "slippage")


class QuoteRequest(BaseModel):
    """Parameters of one quote request sent to the aggregator.

    Two requests are the same request when all fields compare equal;
    results fetched for any other request are stale.
    """

    src_chain_id: int = Field(alias="srcChainId")
    dest_chain_id: int = Field(alias="destChainId")
    src_token_address: Address = Field(alias="srcTokenAddress")
    dest_token_address: Address = Field(alias="destTokenAddress")
    src_token_amount: Uint256 | None = Field(default=None, alias="srcTokenAmount")
    slippage: float = 0.5
    # Set for forked test networks where the aggregator cannot see the
    # simulated balance. Suspends quote refreshing.
    insufficient_bal: bool = Field(default=False, alias="insufficientBal")

    model_config = {"populate_by_name": True, "frozen": True}

    def matches_src_token(self, address: str) -> bool:
        return normalize_address(address) == normalize_address(self.src_token_address)

    def matches_dest_token(self, address: str) -> bool:
        return normalize_address(address) == normalize_address(self.dest_token_address)


def is_valid_quote_request(partial: Mapping[str, Any], require_amount: bool = True) -> bool:
    """Check that a partial request has every field needed to fetch quotes.

    Args:
        partial: Request fields keyed by their camelCase names
        require_amount: Whether srcTokenAmount must be present

    Returns:
        True if all string fields are non-empty strings and all numeric
        fields are real numbers
    """
    string_fields = _STRING_FIELDS + (("srcTokenAmount",) if require_amount else ())

    for field in string_fields:
        value = partial.get(field)
        if not isinstance(value, str) or value == "":
            return False

    for field in _NUMBER_FIELDS:
        value = partial.get(field)
        if isinstance(value, bool) or not isinstance(value, int | float):
            return False
        # NaN never equals itself
        if value != value:
            return False

    return True
