"""Domain layer - pure domain models and interfaces."""

from .entities import Order, OrderItem
from .enums import OrderStatus, ShippingMethod
from .exceptions import (
    ConcurrentModification,
    InvalidOrderInput,
    InvalidOrderState,
    InvalidTransition,
    OrderError,
    OrderNotFound,
)
from .repositories import OrderRepository
from .services import ALLOWED_TRANSITIONS, OrderStateMachine, PricingEngine
from .value_objects import Address, Money

__all__ = [
    "ALLOWED_TRANSITIONS",
    "Address",
    "ConcurrentModification",
    "InvalidOrderInput",
    "InvalidOrderState",
    "InvalidTransition",
    "Money",
    "Order",
    "OrderError",
    "OrderItem",
    "OrderNotFound",
    "OrderRepository",
    "OrderStateMachine",
    "OrderStatus",
    "PricingEngine",
    "ShippingMethod",
]
