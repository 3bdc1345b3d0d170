"""Unit tests for PricingEngine totals."""

from decimal import Decimal

import pytest

from factories import make_item, make_order
from core.domain.enums import OrderStatus
from core.domain.exceptions import InvalidOrderState
from core.domain.services import PricingEngine


@pytest.fixture
def engine() -> PricingEngine:
    return PricingEngine()


def test_mixed_items_example(engine):
    """2 x 25.00 plus 1 x 50.00 at 10% off."""
    order = make_order([
        make_item("A", quantity=2, price="25.00"),
        make_item("B", quantity=1, price="50.00", discount=10),
    ])

    engine.recompute_totals(order)

    assert order.subtotal.amount == Decimal("95.00")
    assert order.tax.amount == Decimal("7.60")
    assert order.shipping.amount == Decimal("9.99")
    assert order.total.amount == Decimal("112.59")


def test_free_shipping_example(engine):
    order = make_order([make_item("A", quantity=5, price="25.00")])

    engine.recompute_totals(order)

    assert order.subtotal.amount == Decimal("125.00")
    assert order.tax.amount == Decimal("10.00")
    assert order.shipping.amount == Decimal("0.00")
    assert order.total.amount == Decimal("135.00")


def test_line_totals_are_rounded_before_summing(engine):
    """Two lines of 12.345 each give 12.35 + 12.35, not round(24.69)."""
    order = make_order([
        make_item("A", quantity=3, price="4.115"),
        make_item("B", quantity=3, price="4.115"),
    ])

    engine.recompute_totals(order)

    assert order.subtotal.amount == Decimal("24.70")


@pytest.mark.parametrize(
    "price,expected_shipping",
    [
        ("99.99", Decimal("9.99")),
        ("100.00", Decimal("0.00")),
        ("100.01", Decimal("0.00")),
    ],
)
def test_free_shipping_boundary(engine, price, expected_shipping):
    order = make_order([make_item("A", quantity=1, price=price)])

    engine.recompute_totals(order)

    assert order.shipping.amount == expected_shipping


@pytest.mark.parametrize(
    "items",
    [
        [("A", 1, "0.01", 0)],
        [("A", 7, "3.333", 15), ("B", 2, "19.995", 0)],
        [("A", 13, "1.07", 33), ("B", 1, "0.005", 50), ("C", 4, "24.999", 0)],
        [("A", 1, "250.00", 100)],
    ],
)
def test_total_is_exact_sum_of_components(engine, items):
    order = make_order([make_item(*item) for item in items])

    engine.recompute_totals(order)

    assert order.total == order.subtotal + order.tax + order.shipping
    for money in (order.subtotal, order.tax, order.shipping, order.total):
        assert money.amount == money.round2().amount


def test_recompute_is_idempotent(engine):
    order = make_order([
        make_item("A", quantity=3, price="4.115", discount=5),
        make_item("B", quantity=2, price="31.40"),
    ])

    engine.recompute_totals(order)
    first = (order.subtotal, order.tax, order.shipping, order.total)
    engine.recompute_totals(order)

    assert (order.subtotal, order.tax, order.shipping, order.total) == first


def test_recompute_leaves_items_and_status_alone(engine):
    items = [make_item("A", quantity=2, price="10.00")]
    order = make_order(list(items))
    order.status = OrderStatus.PENDING

    engine.recompute_totals(order)

    assert order.items == items
    assert order.status is OrderStatus.PENDING


def test_order_without_items_cannot_be_priced(engine):
    order = make_order([])

    with pytest.raises(InvalidOrderState):
        engine.recompute_totals(order)


def test_mixed_currencies_cannot_be_priced(engine):
    order = make_order([
        make_item("A", price="10.00", currency="USD"),
        make_item("B", price="10.00", currency="EUR"),
    ])

    with pytest.raises(InvalidOrderState, match="currencies"):
        engine.recompute_totals(order)


def test_custom_rates():
    engine = PricingEngine(
        tax_rate=Decimal("0.10"),
        flat_shipping=Decimal("5.00"),
        free_shipping_threshold=Decimal("50.00"),
    )
    order = make_order([make_item("A", quantity=1, price="40.00")])

    engine.recompute_totals(order)

    assert order.tax.amount == Decimal("4.00")
    assert order.shipping.amount == Decimal("5.00")
    assert order.total.amount == Decimal("49.00")
