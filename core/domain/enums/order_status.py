"""
Order Status Enum.

Lifecycle states of an order. DRAFT is the only initial state;
DELIVERED and CANCELLED are terminal.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Order lifecycle status values."""

    DRAFT = "DRAFT"
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)
