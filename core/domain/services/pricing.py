"""
Order pricing engine.

Derives subtotal, tax, shipping and total from an order's items, and
estimates delivery dates in business days.

Rounding policy:
    - each line total is rounded to the cent, then lines are summed exactly
    - tax is rounded once, on the subtotal
    - total = subtotal + tax + shipping, no further rounding

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Union

from ..entities.order import Order, OrderItem
from ..enums import BUSINESS_DAYS, ShippingMethod
from ..exceptions import InvalidOrderInput, InvalidOrderState
from ..value_objects import Money

DEFAULT_TAX_RATE = Decimal("0.08")
DEFAULT_FLAT_SHIPPING = Decimal("9.99")
DEFAULT_FREE_SHIPPING_THRESHOLD = Decimal("100.00")


class PricingEngine:
    """Stateless pricing rules for orders."""

    def __init__(
        self,
        tax_rate: Decimal = DEFAULT_TAX_RATE,
        flat_shipping: Decimal = DEFAULT_FLAT_SHIPPING,
        free_shipping_threshold: Decimal = DEFAULT_FREE_SHIPPING_THRESHOLD,
    ) -> None:
        self.tax_rate = Decimal(str(tax_rate))
        self.flat_shipping = Decimal(str(flat_shipping))
        self.free_shipping_threshold = Decimal(str(free_shipping_threshold))

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------

    def recompute_totals(self, order: Order) -> Order:
        """
        Recompute the four money fields of ``order`` in place.

        Items and status are never touched, so calling this twice on an
        unchanged item set yields identical results.

        Raises:
            InvalidOrderState: If the order has no items or an item is
                outside its domain bounds.
        """
        self._check_items(order.items)
        currency = order.currency

        subtotal = self.subtotal(order.items, currency)
        tax = self.tax(subtotal)
        shipping = self.shipping(subtotal)

        order.subtotal = subtotal
        order.tax = tax
        order.shipping = shipping
        order.total = subtotal + tax + shipping
        return order

    def subtotal(self, items: Iterable[OrderItem], currency: str = "USD") -> Money:
        total = Money.zero(currency)
        for item in items:
            total = total + item.line_total()
        return total

    def tax(self, subtotal: Money) -> Money:
        return (subtotal * self.tax_rate).round2()

    def shipping(self, subtotal: Money) -> Money:
        threshold = Money(self.free_shipping_threshold, subtotal.currency)
        if subtotal < threshold:
            return Money(self.flat_shipping, subtotal.currency).round2()
        return Money.zero(subtotal.currency)

    def _check_items(self, items) -> None:
        if not items:
            raise InvalidOrderState("Cannot price an order without items")

        currencies = set()
        for item in items:
            if item.quantity <= 0:
                raise InvalidOrderState(f"Item {item.product_id} has non-positive quantity")
            if item.unit_price.is_negative():
                raise InvalidOrderState(f"Item {item.product_id} has a negative unit price")
            if not 0 <= item.discount_percent <= 100:
                raise InvalidOrderState(f"Item {item.product_id} has discount outside [0, 100]")
            currencies.add(item.unit_price.currency)

        if len(currencies) > 1:
            raise InvalidOrderState(f"Order mixes currencies: {sorted(currencies)}")

    # ------------------------------------------------------------------
    # Delivery estimation
    # ------------------------------------------------------------------

    def estimate_delivery(
        self,
        method: Union[str, ShippingMethod],
        reference_date: date,
    ) -> date:
        """
        Estimate the delivery date for a shipping method.

        The offset is counted in business days starting the day after
        ``reference_date``; Saturdays and Sundays are skipped. Holidays are
        not considered.

        Raises:
            InvalidOrderInput: If the shipping method is unknown.
        """
        try:
            shipping_method = ShippingMethod.parse(method)
        except ValueError:
            raise InvalidOrderInput(f"Unknown shipping method: {method!r}") from None

        if isinstance(reference_date, datetime):
            reference_date = reference_date.date()

        return add_business_days(reference_date, BUSINESS_DAYS[shipping_method])


def add_business_days(start: date, days: int) -> date:
    """Move ``days`` business days (Mon-Fri) forward from ``start``."""
    current = start
    remaining = days
    while remaining > 0:
        current += timedelta(days=1)
        if current.weekday() < 5:
            remaining -= 1
    return current
