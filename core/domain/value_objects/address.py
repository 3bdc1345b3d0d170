"""Address value object."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Address:
    """
    Shipping address captured on an order.

    Plain value: structural equality and no behaviour. Field validation
    belongs to the caller.
    """
    street: str
    city: str
    state: str
    postal_code: str
    country: str
