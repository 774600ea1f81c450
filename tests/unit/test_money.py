"""Tests for the Money value type."""

from decimal import Decimal

import pytest

from bookstore_analytics.core.errors import CurrencyMismatch
from bookstore_analytics.core.money import (
    RETAIL_MULTIPLIER,
    Money,
    retail_price,
    scale,
)


class TestConstruction:
    def test_of_string_keeps_exact_value(self):
        assert Money.of("12.34").amount == Decimal("12.34")

    def test_default_currency_is_usd(self):
        assert Money.of(1).currency == "USD"

    def test_amount_is_scaled_to_two_digits(self):
        assert Money.of(5).amount == Decimal("5.00")
        assert str(Money.of(5).amount) == "5.00"

    def test_round_half_up(self):
        assert Money.of("1.005").amount == Decimal("1.01")
        assert Money.of("1.004").amount == Decimal("1.00")

    def test_round_half_up_away_from_zero_for_negatives(self):
        assert Money.of("-1.005").amount == Decimal("-1.01")

    def test_float_goes_through_str(self):
        assert Money.of(0.1).amount == Decimal("0.10")
        assert Money.of(2.675).amount == Decimal("2.68")

    def test_direct_construction_also_scales(self):
        assert Money(Decimal("3.14159")).amount == Decimal("3.14")

    def test_zero(self):
        assert Money.zero().is_zero()
        assert Money.zero("EUR").currency == "EUR"

    def test_minor_units_round_trip(self):
        m = Money.of("12.34")
        assert m.minor_units == 1234
        assert Money.from_minor_units(1234) == m

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            Money.of(True)

    def test_garbage_string_rejected(self):
        with pytest.raises(ValueError):
            Money.of("twelve")

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError):
            Money.of("NaN")
        with pytest.raises(ValueError):
            Money.of(float("inf"))

    def test_scale_helper(self):
        assert scale("0.125") == Decimal("0.13")


class TestArithmetic:
    def test_add_has_no_float_drift(self):
        assert Money.of(0.1) + Money.of(0.2) == Money.of("0.30")

    def test_subtract(self):
        assert Money.of("10.00") - Money.of("0.01") == Money.of("9.99")

    def test_multiply_by_int(self):
        assert Money.of("10.00") * 3 == Money.of("30.00")
        assert 3 * Money.of("10.00") == Money.of("30.00")

    def test_multiply_rounds_after_product(self):
        # 0.35 * 1.5 = 0.525 -> 0.53
        assert Money.of("0.35").multiply(Decimal("1.5")) == Money.of("0.53")

    def test_divide_rounds_half_up(self):
        assert Money.of("10.00").divide(3) == Money.of("3.33")
        assert Money.of("1.00").divide(8) == Money.of("0.13")

    def test_divide_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            Money.of(1).divide(0)

    def test_builtin_sum_starts_from_zero(self):
        assert sum([Money.of(1), Money.of(2)]) == Money.of(3)

    def test_sum_classmethod(self):
        assert Money.sum([Money.of("1.10"), Money.of("2.20")]) == Money.of("3.30")
        assert Money.sum([]) == Money.zero()

    def test_negation(self):
        assert -Money.of("1.50") == Money.of("-1.50")

    def test_operations_return_new_instances(self):
        a = Money.of(1)
        b = a + Money.of(1)
        assert a == Money.of(1)
        assert b is not a

    def test_multiply_by_money_is_unsupported(self):
        with pytest.raises(TypeError):
            Money.of(1) * Money.of(2)


class TestCurrency:
    def test_add_mismatch_raises(self):
        with pytest.raises(CurrencyMismatch) as exc:
            Money.of(1, "USD") + Money.of(1, "EUR")
        assert exc.value.left == "USD"
        assert exc.value.right == "EUR"

    def test_compare_mismatch_raises(self):
        with pytest.raises(CurrencyMismatch):
            Money.of(1, "USD") < Money.of(2, "EUR")

    def test_different_currencies_not_equal(self):
        assert Money.of(1, "USD") != Money.of(1, "EUR")


class TestOrderingAndFormatting:
    def test_ordering(self):
        assert Money.of(1) < Money.of(2)
        assert Money.of(2) >= Money.of(2)
        assert max([Money.of(3), Money.of(7), Money.of(5)]) == Money.of(7)

    def test_hashable(self):
        assert len({Money.of("1.00"), Money.of(1), Money.of("1.001")}) == 1

    def test_format(self):
        assert Money.of("1234.5").format() == "$1,234.50"
        assert Money.of("-1").format() == "-$1.00"
        assert Money.of("7.2").format("€") == "€7.20"

    def test_str(self):
        assert str(Money.of("3.5")) == "USD 3.50"


class TestRetailPrice:
    def test_margin_constant(self):
        assert RETAIL_MULTIPLIER == Decimal("1.11")

    def test_retail_price(self):
        assert retail_price(Money.of("10.00")) == Money.of("11.10")

    def test_retail_price_rounds_half_up(self):
        # 8.50 * 1.11 = 9.435
        assert retail_price(Money.of("8.50")) == Money.of("9.44")
