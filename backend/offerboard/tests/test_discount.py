"""
Unit Tests for the Discount Calculator

Labels, color categories and price text for percent / fixed / trial offers.
"""

import pytest

from offerboard.core.currency import format_price, get_symbol
from offerboard.core.discount import base_price, compute_discount, discount_for_offer
from offerboard.schemas.offers import ColorTag

from conftest import make_offer, make_tier


class TestBasePrice:
    """Tests for picking the tier price by cadence."""

    def test_month_uses_monthly_price(self):
        assert base_price("month", make_tier(monthly_price=1500, yearly_price=15000)) == 1500

    def test_year_uses_yearly_price(self):
        assert base_price("year", make_tier(monthly_price=1500, yearly_price=15000)) == 15000

    def test_missing_tier_is_zero(self):
        assert base_price("month", None) == 0

    def test_missing_price_is_zero(self):
        assert base_price("year", make_tier(yearly_price=None)) == 0


class TestPercentDiscount:
    """Tests for percent offers."""

    def test_twenty_percent_off_monthly(self):
        result = compute_discount("percent", 20, "month", "USD", make_tier(monthly_price=2000))

        assert result.original_price == 2000
        assert result.discounted_price == 1600
        assert result.label == "20% off"
        assert result.color_tag is ColorTag.POSITIVE
        assert result.original_price_text == "$20.00"
        assert result.discounted_price_text == "$16.00"

    def test_fractional_percent_label(self):
        result = compute_discount("percent", 12.5, "month", "USD", make_tier(monthly_price=1000))

        assert result.label == "12.5% off"
        assert result.discounted_price_text == "$8.75"

    def test_hundred_percent_is_free(self):
        result = compute_discount("percent", 100, "year", "USD", make_tier(yearly_price=5000))

        assert result.discounted_price == 0
        assert result.discounted_price_text == "$0.00"

    def test_thousands_separator(self):
        result = compute_discount("percent", 10, "year", "EUR", make_tier(yearly_price=1234500))

        assert result.original_price_text == "€12,345.00"
        assert result.discounted_price_text == "€11,110.50"


class TestFixedDiscount:
    """Tests for fixed-amount offers."""

    def test_fixed_amount_off(self):
        result = compute_discount("fixed", 500, "month", "USD", make_tier(monthly_price=1000))

        assert result.discounted_price == 500
        assert result.label == "5.00 USD off"
        assert result.color_tag is ColorTag.INFORMATIONAL
        assert result.original_price_text == "$10.00"
        assert result.discounted_price_text == "$5.00"

    def test_amount_larger_than_price_clamps_to_zero(self):
        result = compute_discount("fixed", 5000, "month", "USD", make_tier(monthly_price=1000))

        assert result.discounted_price == 0
        assert result.discounted_price_text == "$0.00"

    def test_label_uses_currency_code(self):
        result = compute_discount("fixed", 150000, "year", "gbp", make_tier(yearly_price=300000))

        assert result.label == "1,500.00 GBP off"
        assert result.discounted_price_text == "£1,500.00"


class TestTrialDiscount:
    """Tests for free-trial offers."""

    @pytest.mark.parametrize("monthly_price", [0, 999, 2000, 1000000])
    def test_original_price_text_always_empty(self, monthly_price):
        result = compute_discount("trial", 7, "month", "USD", make_tier(monthly_price=monthly_price))

        assert result.original_price_text == ""

    def test_trial_label_and_price(self):
        result = compute_discount("trial", 14, "month", "USD", make_tier(monthly_price=2000))

        assert result.label == "14 days free"
        assert result.color_tag is ColorTag.ACCENT
        assert result.discounted_price == 2000
        assert result.discounted_price_text == "$20.00"


class TestDefensiveDefaults:
    """Malformed-but-typed input degrades instead of raising."""

    def test_unknown_type_has_empty_label(self):
        result = compute_discount("bogo", 50, "month", "USD", make_tier(monthly_price=2000))

        assert result.label == ""
        assert result.color_tag is ColorTag.NONE
        assert result.discounted_price == 2000
        assert result.original_price_text == "$20.00"

    def test_missing_tier_prices_at_zero(self):
        result = compute_discount("percent", 20, "month", "USD", None)

        assert result.original_price_text == "$0.00"
        assert result.discounted_price_text == "$0.00"

    def test_missing_currency_defaults_to_usd(self):
        result = compute_discount("fixed", 100, "month", None, make_tier(monthly_price=1000))

        assert result.label == "1.00 USD off"
        assert result.discounted_price_text == "$9.00"

    def test_unknown_currency_falls_back_to_code(self):
        result = compute_discount("percent", 50, "month", "SEK", make_tier(monthly_price=1000))

        assert result.discounted_price_text == "SEK5.00"

    def test_pure_and_repeatable(self):
        tier = make_tier(monthly_price=2000)
        first = compute_discount("percent", 20, "month", "USD", tier)
        second = compute_discount("percent", 20, "month", "USD", tier)

        assert first == second
        assert tier.monthly_price == 2000


class TestCurrencyHelpers:
    """Tests for symbol lookup and price formatting."""

    def test_known_symbols(self):
        assert get_symbol("USD") == "$"
        assert get_symbol("eur") == "€"

    def test_empty_currency_has_no_symbol(self):
        assert get_symbol("") == ""

    def test_format_price_rounds_to_two_decimals(self):
        assert format_price(1333.3333, "USD") == "$13.33"

    def test_half_cent_ties_round_up(self):
        assert format_price(1012.5, "USD") == "$10.13"
        assert format_price(12.5, "USD") == "$0.13"


class TestHalfCentPrices:
    """Discounts landing exactly on half a cent round up."""

    def test_half_off_odd_price(self):
        result = compute_discount("percent", 50, "month", "USD", make_tier(monthly_price=2025))

        assert result.discounted_price == 1012.5
        assert result.discounted_price_text == "$10.13"

    def test_half_off_small_price(self):
        result = compute_discount("percent", 50, "month", "USD", make_tier(monthly_price=25))

        assert result.discounted_price_text == "$0.13"

    def test_fixed_label_half_cent(self):
        result = compute_discount("fixed", 12.5, "month", "USD", make_tier(monthly_price=1000))

        assert result.label == "0.13 USD off"


def test_discount_for_offer_uses_offer_fields():
    offer = make_offer("o1", type="fixed", amount=250, cadence="year", currency="EUR")
    result = discount_for_offer(offer, make_tier(yearly_price=1000))

    assert result.label == "2.50 EUR off"
    assert result.discounted_price_text == "€7.50"
