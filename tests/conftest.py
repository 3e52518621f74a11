"""Pytest configuration and fixtures."""

from decimal import Decimal

import pytest

from bridge.chains import NetworkConfig
from bridge.config import BridgeConfig
from bridge.engine import BridgeQuoteEngine
from bridge.metrics import ExchangeRates
from bridge.models import FeesPerGas, QuoteResponse
from tests.helpers import NOW_MS, OPTIMISM, USDC, USDC_OPTIMISM, make_quote_response


# =============================================================================
# Market data
# =============================================================================


@pytest.fixture
def rates() -> ExchangeRates:
    """USDC at 1.00 on both sides, ETH at 2000."""
    return ExchangeRates.of(src_token_rate=1, dest_token_rate=1, native_rate=2000)


@pytest.fixture
def fees_per_gas() -> FeesPerGas:
    """10 gwei base fee plus 2 gwei priority fee."""
    return FeesPerGas(base_fee=Decimal("10"), priority_fee=Decimal("2"))


@pytest.fixture
def gas_fee_estimates() -> dict:
    """Gas fee source payload matching the fees_per_gas fixture."""
    return {
        "estimatedBaseFee": "10",
        "low": {"suggestedMaxFeePerGas": "11", "suggestedMaxPriorityFeePerGas": "1"},
        "medium": {"suggestedMaxFeePerGas": "12", "suggestedMaxPriorityFeePerGas": "2"},
        "high": {"suggestedMaxFeePerGas": "14", "suggestedMaxPriorityFeePerGas": "4"},
        "networkCongestion": "0.3",
    }


# =============================================================================
# Quotes
# =============================================================================


@pytest.fixture
def usdc_response() -> QuoteResponse:
    """100 USDC on Ethereum to 99.5 USDC on Optimism."""
    return make_quote_response()


@pytest.fixture
def three_responses() -> list[QuoteResponse]:
    """Three routes for the default request, in arrival order."""
    return [
        make_quote_response(bridge_id="lifi", bridges=("across",), dest_token_amount=99_000_000),
        make_quote_response(
            bridge_id="socket", bridges=("hop",), dest_token_amount=99_600_000, eta=900
        ),
        make_quote_response(
            bridge_id="lifi", bridges=("stargate",), dest_token_amount=99_300_000, eta=30
        ),
    ]


# =============================================================================
# Engine
# =============================================================================


@pytest.fixture
def config() -> BridgeConfig:
    return BridgeConfig()


@pytest.fixture
def engine(config: BridgeConfig, gas_fee_estimates: dict) -> BridgeQuoteEngine:
    """An engine with market data loaded and a fixed clock."""
    engine = BridgeQuoteEngine(config=config, clock=lambda: NOW_MS)
    engine.set_native_exchange_rate(2000)
    engine.set_gas_fee_estimates(gas_fee_estimates)
    engine.set_src_exchange_rate(USDC, 1)
    engine.set_dest_exchange_rate(USDC_OPTIMISM, 1)
    engine.set_dest_network(NetworkConfig(chain_id=OPTIMISM, name="OP Mainnet", native_currency="ETH"))
    return engine
