"""Tests for exchange rate snapshots."""

from decimal import Decimal

from bridge.metrics import ExchangeRates, rate_from_snapshot, resolve_dest_exchange_rate
from tests.helpers import NATIVE, USDC, USDC_OPTIMISM


class TestExchangeRates:
    """Tests for ExchangeRates."""

    def test_of_coerces_to_decimal(self):
        rates = ExchangeRates.of(src_token_rate=1, dest_token_rate="0.5", native_rate=2000.5)

        assert rates.src_token_rate == Decimal(1)
        assert rates.dest_token_rate == Decimal("0.5")
        assert rates.native_rate == Decimal("2000.5")

    def test_sent_rate(self):
        rates = ExchangeRates.of(src_token_rate=1, native_rate=2000)

        assert rates.sent_rate(src_is_native=False) == Decimal(1)
        assert rates.sent_rate(src_is_native=True) == Decimal(2000)

    def test_equal_snapshots_are_equal(self):
        """Snapshots compare by value, so they can key the composition cache."""
        assert ExchangeRates.of(1, 2, 3) == ExchangeRates.of("1", "2", "3")
        assert hash(ExchangeRates.of(1, 2, 3)) == hash(ExchangeRates.of("1", "2", "3"))


class TestResolveDestExchangeRate:
    """Tests for resolve_dest_exchange_rate."""

    CACHED = {"ETH": {"conversionRate": 2500}, "POL": {"conversionRate": "0.4"}}

    def test_live_rate_wins(self):
        rate = resolve_dest_exchange_rate(Decimal("2600"), NATIVE, "ETH", self.CACHED)

        assert rate == Decimal("2600")

    def test_native_falls_back_to_cached_currency_rate(self):
        """A chain not yet added to the wallet has no live native rate."""
        rate = resolve_dest_exchange_rate(None, NATIVE, "POL", self.CACHED)

        assert rate == Decimal("0.4")

    def test_token_does_not_fall_back(self):
        assert resolve_dest_exchange_rate(None, USDC_OPTIMISM, "ETH", self.CACHED) is None

    def test_unknown_currency(self):
        assert resolve_dest_exchange_rate(None, NATIVE, "BNB", self.CACHED) is None

    def test_nothing_known(self):
        assert resolve_dest_exchange_rate(None, None, None, None) is None


class TestRateFromSnapshot:
    """Tests for rate_from_snapshot."""

    def test_case_insensitive(self):
        snapshot = {USDC.upper().replace("0X", "0x"): {"conversionRate": 0.9998}}

        assert rate_from_snapshot(snapshot, USDC) == Decimal("0.9998")

    def test_missing_token(self):
        assert rate_from_snapshot({USDC: {"conversionRate": 1}}, USDC_OPTIMISM) is None

    def test_empty_snapshot(self):
        assert rate_from_snapshot(None, USDC) is None
