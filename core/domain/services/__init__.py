"""Domain services."""

from .pricing import PricingEngine, add_business_days
from .state_machine import ALLOWED_TRANSITIONS, OrderStateMachine

__all__ = [
    "ALLOWED_TRANSITIONS",
    "OrderStateMachine",
    "PricingEngine",
    "add_business_days",
]
