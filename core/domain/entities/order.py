"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from ..enums import OrderStatus
from ..events.base import DomainEvent
from ..exceptions import InvalidOrderInput
from ..value_objects import Address, Money


# Storage precision for unit prices
UNIT_PRICE_DECIMAL_PLACES = 6


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderItem:
    """
    Individual line item within an order.

    Immutable once constructed; bounds are checked on construction.
    """
    product_id: str
    quantity: int
    unit_price: Money
    discount_percent: int = 0

    def __post_init__(self):
        if not isinstance(self.product_id, str) or not self.product_id.strip():
            raise InvalidOrderInput("Item product_id must be a non-empty string")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity <= 0:
            raise InvalidOrderInput(
                f"Item {self.product_id}: quantity must be a positive integer, got {self.quantity}"
            )
        if not isinstance(self.unit_price, Money) or self.unit_price.is_negative():
            raise InvalidOrderInput(
                f"Item {self.product_id}: unit price must be non-negative, got {self.unit_price}"
            )
        if -self.unit_price.amount.normalize().as_tuple().exponent > UNIT_PRICE_DECIMAL_PLACES:
            raise InvalidOrderInput(
                f"Item {self.product_id}: unit price allows at most {UNIT_PRICE_DECIMAL_PLACES} "
                f"decimal places, got {self.unit_price.amount}"
            )
        if (
            isinstance(self.discount_percent, bool)
            or not isinstance(self.discount_percent, int)
            or not 0 <= self.discount_percent <= 100
        ):
            raise InvalidOrderInput(
                f"Item {self.product_id}: discount must be between 0 and 100, got {self.discount_percent}"
            )

    def line_total(self) -> Money:
        """unit_price x quantity x (1 - discount/100), rounded to the cent."""
        factor = (Decimal(100) - Decimal(self.discount_percent)) / Decimal(100)
        return (self.unit_price * self.quantity * factor).round2()


@dataclass
class Order:
    """
    Order aggregate root.

    subtotal, tax, shipping and total are only written together by the
    pricing engine. ``version`` is the optimistic concurrency token; it is
    0 until the order is first persisted.
    """
    user_id: str
    shipping_address: Address
    items: List[OrderItem] = field(default_factory=list)
    id: Optional[str] = None
    status: OrderStatus = OrderStatus.DRAFT

    subtotal: Money = field(default_factory=Money.zero)
    tax: Money = field(default_factory=Money.zero)
    shipping: Money = field(default_factory=Money.zero)
    total: Money = field(default_factory=Money.zero)

    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    version: int = 0

    # Event collection
    _domain_events: List[DomainEvent] = field(default_factory=list, init=False, repr=False, compare=False)

    @property
    def currency(self) -> str:
        if self.items:
            return self.items[0].unit_price.currency
        return self.total.currency

    def touch(self, now: Optional[datetime] = None) -> None:
        self.updated_at = now or utc_now()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def record_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)

    def pull_events(self) -> List[DomainEvent]:
        """Return recorded events and clear the buffer."""
        events = list(self._domain_events)
        self._domain_events.clear()
        return events

    def clear_events(self) -> None:
        self._domain_events.clear()
