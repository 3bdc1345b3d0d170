"""Domain enums."""

from .order_status import OrderStatus
from .shipping_method import BUSINESS_DAYS, ShippingMethod

__all__ = ["BUSINESS_DAYS", "OrderStatus", "ShippingMethod"]
