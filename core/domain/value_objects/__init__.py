"""Domain value objects."""

from .value_objects import CENT, Money
from .address import Address

__all__ = [
    "Address",
    "CENT",
    "Money",
]
