"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Chain ids, token addresses and transaction parties
- factories: Quote payload, quote request and composed quote factories
"""

from tests.helpers.constants import (
    ARBITRUM,
    BASE,
    DAI,
    ETHEREUM,
    LINEA,
    NATIVE,
    NOW_MS,
    OPTIMISM,
    POLYGON,
    USDC,
    USDC_OPTIMISM,
    USER,
    WETH_ARBITRUM,
)
from tests.helpers.factories import (
    make_asset,
    make_composed_quote,
    make_quote_payload,
    make_quote_request,
    make_quote_response,
)

__all__ = [
    # Chains
    "ETHEREUM",
    "OPTIMISM",
    "POLYGON",
    "BASE",
    "ARBITRUM",
    "LINEA",
    # Tokens
    "NATIVE",
    "USDC",
    "USDC_OPTIMISM",
    "DAI",
    "WETH_ARBITRUM",
    "USER",
    "NOW_MS",
    # Factories
    "make_asset",
    "make_composed_quote",
    "make_quote_payload",
    "make_quote_request",
    "make_quote_response",
]
