"""
Domain exceptions for order management.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from typing import Optional


class OrderError(Exception):
    """Base class for all order domain errors."""
    pass


class InvalidOrderInput(OrderError):
    """Malformed creation or edit request (empty items, bad bounds)."""
    pass


class InvalidOrderState(OrderError):
    """Operation attempted in a status that forbids it."""
    pass


class InvalidTransition(InvalidOrderState):
    """Requested status change is not in the transition table."""

    def __init__(self, current, requested) -> None:
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot transition order from {_label(current)} to {_label(requested)}"
        )


class OrderNotFound(OrderError):
    """Referenced order id does not exist."""

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class ConcurrentModification(OrderError):
    """Optimistic version check failed while saving an order."""

    def __init__(
        self,
        order_id: str,
        expected_version: Optional[int],
        actual_version: Optional[int],
    ) -> None:
        self.order_id = order_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Concurrency conflict on order {order_id}: "
            f"expected version {expected_version}, but current is {actual_version}"
        )


def _label(status) -> str:
    return getattr(status, "value", str(status))
