"""
Shipping Method Enum.

Delivery speed tags accepted by delivery estimation, mapped to the
number of business days each one takes.
"""
from enum import Enum


class ShippingMethod(str, Enum):
    """Shipping method tags."""

    STANDARD = "standard"
    EXPRESS = "express"
    OVERNIGHT = "overnight"

    @classmethod
    def parse(cls, value: "str | ShippingMethod") -> "ShippingMethod":
        """Resolve a tag case-insensitively. Raises ValueError if unknown."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


BUSINESS_DAYS = {
    ShippingMethod.STANDARD: 5,
    ShippingMethod.EXPRESS: 2,
    ShippingMethod.OVERNIGHT: 1,
}
