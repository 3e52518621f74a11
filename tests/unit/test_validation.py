"""Tests for active quote validation."""

from decimal import Decimal

import pytest

from bridge.config import BridgeConfig
from bridge.validation import from_amount_in_fiat, get_validation_errors, validated_src_amount
from tests.helpers import make_composed_quote

FETCHED_AT = 1_700_000_000_000


def validate(active_quote=None, **kwargs):
    kwargs.setdefault("quotes_last_fetched_ms", FETCHED_AT)
    kwargs.setdefault("is_loading", False)
    return get_validation_errors(active_quote, **kwargs)


# --- No quotes ---


class TestNoQuotesAvailable:
    """Tests for is_no_quotes_available."""

    def test_fetched_and_empty(self):
        assert validate(None).is_no_quotes_available

    def test_never_fetched(self):
        assert not validate(None, quotes_last_fetched_ms=None).is_no_quotes_available

    def test_still_loading(self):
        assert not validate(None, is_loading=True).is_no_quotes_available

    def test_has_quote(self):
        assert not validate(make_composed_quote()).is_no_quotes_available


# --- Source amount tiers ---


class TestSrcAmountTooLow:
    """Tests for the hard minimum."""

    def test_below_minimum(self):
        errors = validate(src_amount=Decimal(4), from_amount_fiat=Decimal(4))

        assert errors.is_src_amount_too_low

    def test_at_minimum_is_too_low(self):
        assert validate(src_amount=Decimal(5), from_amount_fiat=Decimal(5)).is_src_amount_too_low

    def test_above_minimum(self):
        errors = validate(src_amount=Decimal("5.01"), from_amount_fiat=Decimal("5.01"))

        assert not errors.is_src_amount_too_low

    def test_zero_fiat_not_flagged(self):
        assert not validate(src_amount=Decimal(0), from_amount_fiat=Decimal(0)).is_src_amount_too_low

    def test_unknown_fiat_not_flagged(self):
        assert not validate(src_amount=Decimal(1), from_amount_fiat=None).is_src_amount_too_low

    def test_no_amount_not_flagged(self):
        assert not validate(src_amount=None, from_amount_fiat=Decimal(1)).is_src_amount_too_low

    def test_both_tiers_with_higher_minimum(self):
        """A sent value of 25 under a 30 minimum trips both tiers."""
        config = BridgeConfig(min_fiat_src_amount=Decimal(30))
        quote = make_composed_quote(sent_fiat=25)

        errors = validate(
            quote,
            src_amount=Decimal(25),
            from_amount_fiat=Decimal(25),
            config=config,
        )

        assert errors.is_src_amount_too_low
        assert errors.is_src_amount_less_than_30


class TestSrcAmountLessThan30:
    """Tests for the soft warning tier."""

    @pytest.mark.parametrize(
        "sent_fiat,expected",
        [
            ("29.99", True),
            ("30.00", False),
            ("30.01", False),
            ("0.01", True),
            ("0", False),
        ],
    )
    def test_boundary(self, sent_fiat, expected):
        quote = make_composed_quote(sent_fiat=sent_fiat)

        assert validate(quote).is_src_amount_less_than_30 is expected

    def test_unknown_sent_fiat(self):
        assert not validate(make_composed_quote(sent_fiat=None)).is_src_amount_less_than_30

    def test_is_warning_only(self):
        errors = validate(make_composed_quote(sent_fiat=10))

        assert errors.is_src_amount_less_than_30
        assert not errors.blocks_submission


# --- Return and congestion ---


class TestEstimatedReturnLow:
    """Tests for is_estimated_return_low."""

    def test_low_return(self):
        quote = make_composed_quote(sent_fiat=100, adjusted_return="79.99")

        assert validate(quote).is_estimated_return_low

    def test_return_at_threshold(self):
        quote = make_composed_quote(sent_fiat=100, adjusted_return=80)

        assert not validate(quote).is_estimated_return_low

    def test_unknown_return(self):
        quote = make_composed_quote(sent_fiat=100, adjusted_return=None)

        assert not validate(quote).is_estimated_return_low

    def test_zero_sent(self):
        quote = make_composed_quote(sent_fiat=0, adjusted_return=-1)

        assert not validate(quote).is_estimated_return_low


class TestNetworkCongested:
    """Tests for is_network_congested."""

    def test_busy(self):
        assert validate(network_congestion=Decimal("0.66")).is_network_congested

    def test_not_busy(self):
        assert not validate(network_congestion=Decimal("0.65")).is_network_congested

    def test_unknown(self):
        assert not validate(network_congestion=None).is_network_congested


# --- Balances ---


class TestBalances:
    """Tests for the balance checks."""

    def test_insufficient_balance(self):
        errors = validate(make_composed_quote(), src_amount=Decimal(100))

        assert errors.is_insufficient_balance(Decimal("99.99"))
        assert not errors.is_insufficient_balance(Decimal(100))

    def test_balance_unknown(self):
        errors = validate(make_composed_quote(), src_amount=Decimal(100))

        assert not errors.is_insufficient_balance(None)

    def test_insufficient_gas_balance(self):
        errors = validate(make_composed_quote(network_fee="0.0024"))

        assert errors.is_insufficient_gas_balance(Decimal("0.002"))
        assert not errors.is_insufficient_gas_balance(Decimal("0.0024"))

    def test_gas_balance_unknown(self):
        errors = validate(make_composed_quote(network_fee="0.0024"))

        assert not errors.is_insufficient_gas_balance(None)

    def test_zero_gas_balance_is_insufficient(self):
        """An empty wallet is a known balance, not a missing one."""
        errors = validate(make_composed_quote(network_fee="0.0024"))

        assert errors.is_insufficient_gas_balance(Decimal(0))

    def test_unknown_network_fee(self):
        """Until gas prices arrive the fee is unknown and nothing is flagged."""
        errors = validate(make_composed_quote(network_fee=None))

        assert not errors.is_insufficient_gas_balance(Decimal(0))


# --- Helpers ---


class TestSourceAmountHelpers:
    """Tests for validated_src_amount and from_amount_in_fiat."""

    def test_validated_src_amount(self):
        assert validated_src_amount(100_000_000, 6) == Decimal(100)

    def test_validated_src_amount_needs_decimals(self):
        assert validated_src_amount(100_000_000, None) is None
        assert validated_src_amount(None, 6) is None

    def test_from_amount_in_fiat_token(self):
        assert from_amount_in_fiat(Decimal(100), False, Decimal("0.99"), Decimal(2000)) == Decimal(99)

    def test_from_amount_in_fiat_native(self):
        assert from_amount_in_fiat(Decimal("0.5"), True, None, Decimal(2000)) == Decimal(1000)

    def test_from_amount_in_fiat_unknown_rate(self):
        assert from_amount_in_fiat(Decimal(100), False, None, Decimal(2000)) is None
