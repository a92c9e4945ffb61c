"""Tests for the value objects — Money, DiscountRate, CashFlow, NPVCalculation."""

from datetime import timezone
from decimal import Decimal

import pytest

from npv_calculator.errors import (
    IncompatibleCurrencyError,
    InvalidArgumentError,
    MissingArgumentError,
)
from npv_calculator.models.values import MAX_AMOUNT, CashFlow, DiscountRate, Money, NPVCalculation


# ── Money ──────────────────────────────────────────────────────────────────

class TestMoney:
    def test_default_currency_is_usd(self):
        assert Money(Decimal("10")).currency == "USD"

    def test_float_amount_converted_without_binary_noise(self):
        assert Money(0.1, "USD").amount == Decimal("0.1")

    def test_empty_currency_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Money(Decimal("1"), "")

    def test_none_currency_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Money(Decimal("1"), None)

    def test_addition_same_currency(self):
        total = Money(Decimal("10.50"), "EUR") + Money(Decimal("-0.25"), "EUR")
        assert total == Money(Decimal("10.25"), "EUR")

    def test_add_method_matches_operator(self):
        a, b = Money(Decimal("1"), "USD"), Money(Decimal("2"), "USD")
        assert a.add(b) == a + b

    def test_addition_different_currency_fails(self):
        with pytest.raises(IncompatibleCurrencyError):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_equality_by_value(self):
        assert Money(Decimal("500"), "USD") == Money(Decimal("500.00"), "USD")
        assert Money(Decimal("500"), "USD") != Money(Decimal("500"), "GBP")

    @pytest.mark.parametrize("amount", [Decimal("8e28"), Decimal("-8e28"), Decimal("NaN"), Decimal("Infinity")])
    def test_amount_outside_range_rejected(self, amount):
        with pytest.raises(InvalidArgumentError, match="outside the supported range"):
            Money(amount)

    def test_sum_beyond_range_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Money(MAX_AMOUNT) + Money(Decimal("1"))

    def test_sum_of_large_amounts_keeps_cents(self):
        total = Money(Decimal("1e26")) + Money(Decimal("0.95"))
        assert total.amount == Decimal("100000000000000000000000000.95")

    def test_display(self):
        assert str(Money(Decimal("-12.5"), "EUR")) == "EUR -12.50"

    def test_immutable(self):
        m = Money(Decimal("1"))
        with pytest.raises(AttributeError):
            m.amount = Decimal("2")


# ── DiscountRate ───────────────────────────────────────────────────────────

class TestDiscountRate:
    def test_display_format(self):
        assert str(DiscountRate(0.05)) == "5.00%"

    def test_display_format_fractional_percent(self):
        assert str(DiscountRate(Decimal("0.0125"))) == "1.25%"
        assert str(DiscountRate(Decimal("1"))) == "100.00%"

    def test_display_rounds_half_up(self):
        assert str(DiscountRate.from_percentage(Decimal("1.125"))) == "1.13%"

    def test_from_percentage(self):
        assert DiscountRate.from_percentage(5).value == Decimal("0.05")

    def test_percentage_view(self):
        assert DiscountRate(Decimal("0.075")).percentage == Decimal("7.5")

    def test_minus_one_allowed(self):
        assert DiscountRate(-1).value == Decimal("-1")

    def test_below_minus_one_rejected(self):
        with pytest.raises(InvalidArgumentError):
            DiscountRate(Decimal("-1.01"))

    def test_none_rejected(self):
        with pytest.raises(MissingArgumentError):
            DiscountRate(None)

    def test_from_percentage_none_rejected(self):
        with pytest.raises(MissingArgumentError):
            DiscountRate.from_percentage(None)


# ── CashFlow ───────────────────────────────────────────────────────────────

class TestCashFlow:
    def test_negative_period_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Period cannot be negative"):
            CashFlow(-1, Money(Decimal("100")))

    @pytest.mark.parametrize("period", [1.5, "2", True])
    def test_non_integer_period_rejected(self, period):
        with pytest.raises(InvalidArgumentError, match="Period must be an integer"):
            CashFlow(period, Money(Decimal("100")))

    def test_missing_amount_rejected(self):
        with pytest.raises(MissingArgumentError):
            CashFlow(0, None)

    def test_period_zero_is_face_value(self):
        cf = CashFlow(0, Money(Decimal("-1000"), "USD"))
        assert cf.present_value(DiscountRate(Decimal("0.25"))) == Money(Decimal("-1000"), "USD")

    def test_present_value_one_period(self):
        cf = CashFlow(1, Money(Decimal("110")))
        assert cf.present_value(DiscountRate(Decimal("0.1"))).amount == Decimal("100.00")

    def test_present_value_rounded_to_cents(self):
        cf = CashFlow(2, Money(Decimal("300")))
        # 300 / 1.21 = 247.933...
        assert cf.present_value(DiscountRate(Decimal("0.1"))).amount == Decimal("247.93")

    def test_rounding_is_half_even(self):
        cf = CashFlow(0, Money(Decimal("0.125")))
        assert cf.present_value(DiscountRate(0)).amount == Decimal("0.12")

    def test_large_amount_keeps_cents(self):
        cf = CashFlow(0, Money(Decimal("1e26")))
        pv = cf.present_value(DiscountRate(Decimal("0.05")))
        assert pv.amount == Decimal("100000000000000000000000000.00")

    def test_large_amount_discounted(self):
        cf = CashFlow(1, Money(Decimal("2e26")))
        assert cf.present_value(DiscountRate(Decimal("1"))).amount == Decimal("1e26")

    def test_present_value_beyond_range_rejected(self):
        cf = CashFlow(5, Money(Decimal("1e28")))
        with pytest.raises(InvalidArgumentError, match="outside the supported range"):
            cf.present_value(DiscountRate(Decimal("-0.99")))

    def test_currency_preserved(self):
        cf = CashFlow(3, Money(Decimal("500"), "JPY"))
        assert cf.present_value(DiscountRate(Decimal("0.05"))).currency == "JPY"


# ── NPVCalculation ─────────────────────────────────────────────────────────

class TestNPVCalculation:
    def test_timestamp_is_utc(self):
        calc = NPVCalculation(DiscountRate(Decimal("0.05")), Money(Decimal("1")))
        assert calc.calculated_at.tzinfo == timezone.utc

    def test_missing_rate_rejected(self):
        with pytest.raises(MissingArgumentError):
            NPVCalculation(None, Money(Decimal("1")))

    def test_missing_npv_rejected(self):
        with pytest.raises(MissingArgumentError):
            NPVCalculation(DiscountRate(0), None)
