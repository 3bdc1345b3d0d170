"""
Order Domain Events.

Events that occur during the order lifecycle.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .base import DomainEvent


@dataclass
class _OrderEvent(DomainEvent):
    order_id: str = ""

    def __post_init__(self):
        """Set aggregate_id to order_id."""
        if not self.aggregate_id and self.order_id:
            self.aggregate_id = self.order_id
        super().__post_init__()


@dataclass
class OrderCreatedEvent(_OrderEvent):
    """
    Order was created and persisted in DRAFT.

    Carries the priced total so consumers need not reload the order.
    """

    item_count: int = 0
    total: Decimal = Decimal("0.00")
    currency: str = "USD"


@dataclass
class OrderStatusChangedEvent(_OrderEvent):
    """
    Order status changed.

    Tracks transitions (DRAFT -> PENDING -> CONFIRMED, etc.).
    """

    previous_status: str = ""
    new_status: str = ""
    reason: Optional[str] = None


@dataclass
class OrderItemAddedEvent(_OrderEvent):
    """An item was added to a DRAFT order."""

    product_id: str = ""
    quantity: int = 0
    new_total: Decimal = Decimal("0.00")


@dataclass
class OrderItemRemovedEvent(_OrderEvent):
    """An item was removed from a DRAFT order."""

    product_id: str = ""
    new_total: Decimal = Decimal("0.00")
