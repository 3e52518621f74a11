"""Shared type definitions for bridge quote models.

These types are used across quote, request and gas fee models.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from bridge.constants import NATIVE_ADDRESS

# Maximum uint256 value
UINT256_MAX = 2**256 - 1


def validate_uint256(value: Any) -> int:
    """Validate a non-negative integer amount given as int or decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        The amount as an int

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 cannot be a boolean")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    return int_value


def validate_quantity(value: Any) -> int:
    """Validate a wei quantity given as hex string, decimal string or int.

    Transaction values and L1 fees arrive hex encoded ("0x5af3107a4000"),
    while some providers send plain decimal strings.
    """
    if isinstance(value, str) and value.lower().startswith("0x"):
        if value.lower() == "0x":
            return 0
        try:
            return validate_uint256(int(value, 16))
        except ValueError as err:
            raise ValueError(f"Invalid hex quantity: '{value}'") from err
    return validate_uint256(value)


# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# 256-bit unsigned integer, accepted as int or decimal string
Uint256 = Annotated[
    int,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer in the token's smallest unit"),
]

# Wei quantity, accepted as hex string, decimal string or int
Quantity = Annotated[
    int,
    BeforeValidator(validate_quantity),
    Field(description="Wei quantity, hex or decimal encoded"),
]


def normalize_address(address: str) -> str:
    """Normalize an Ethereum address to lowercase with 0x prefix."""
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr


def is_native_address(address: str | None) -> bool:
    """True if the address denotes the chain's native asset."""
    if not address:
        return False
    return normalize_address(address) == NATIVE_ADDRESS
