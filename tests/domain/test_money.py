"""Unit tests for the Money value object."""

from decimal import Decimal

import pytest

from core.domain.value_objects import Money


def test_amount_is_coerced_to_decimal():
    money = Money(amount="12.50")

    assert isinstance(money.amount, Decimal)
    assert money.amount == Decimal("12.50")
    assert money.currency == "USD"


def test_float_goes_through_str_not_binary():
    assert Money.of(0.1).amount == Decimal("0.1")


def test_invalid_currency_rejected():
    with pytest.raises(ValueError, match="3-letter"):
        Money(amount=Decimal("1"), currency="US")


def test_non_finite_amount_rejected():
    with pytest.raises(ValueError, match="finite"):
        Money(amount=Decimal("NaN"))


def test_addition_keeps_full_precision():
    total = Money.of("0.005") + Money.of("0.005")

    assert total.amount == Decimal("0.010")


def test_mixed_currency_arithmetic_rejected():
    with pytest.raises(ValueError, match="different currencies"):
        Money.of("1.00", "USD") + Money.of("1.00", "EUR")


def test_adding_non_money_rejected():
    with pytest.raises(TypeError):
        Money.of("1.00") + Decimal("1.00")


def test_multiplication_is_not_rounded():
    scaled = Money.of("4.115") * 3

    assert scaled.amount == Decimal("12.345")
    assert (3 * Money.of("4.115")).amount == Decimal("12.345")


@pytest.mark.parametrize(
    "amount,expected",
    [
        ("12.345", "12.35"),
        ("12.344", "12.34"),
        ("0.005", "0.01"),
        ("7.6", "7.60"),
        ("-1.005", "-1.01"),
    ],
)
def test_round2_is_half_up(amount, expected):
    assert Money.of(amount).round2().amount == Decimal(expected)


def test_comparisons():
    assert Money.of("99.99") < Money.of("100.00")
    assert Money.of("100.00") >= Money.of("100")
    assert Money.zero().is_zero()
    assert Money.of("-0.01").is_negative()
