"""
Order status state machine.

The lifecycle is an explicit table of allowed (current, target) pairs:

    DRAFT -> PENDING -> CONFIRMED -> SHIPPED -> DELIVERED
    DRAFT / PENDING / CONFIRMED -> CANCELLED

Every pair missing from the table is rejected, including same-state
transitions. DELIVERED and CANCELLED have no outgoing edges.
"""
from datetime import datetime
from typing import FrozenSet, Optional, Tuple

from ..entities.order import Order, utc_now
from ..enums import OrderStatus
from ..events.order_events import OrderStatusChangedEvent
from ..exceptions import InvalidTransition


ALLOWED_TRANSITIONS: FrozenSet[Tuple[OrderStatus, OrderStatus]] = frozenset({
    (OrderStatus.DRAFT, OrderStatus.PENDING),
    (OrderStatus.DRAFT, OrderStatus.CANCELLED),
    (OrderStatus.PENDING, OrderStatus.CONFIRMED),
    (OrderStatus.PENDING, OrderStatus.CANCELLED),
    (OrderStatus.CONFIRMED, OrderStatus.SHIPPED),
    (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
    (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
})


class OrderStateMachine:
    """Validates and applies order status transitions."""

    def __init__(self, transitions: FrozenSet[Tuple[OrderStatus, OrderStatus]] = ALLOWED_TRANSITIONS) -> None:
        self._transitions = transitions

    def can_transition(self, current: OrderStatus, target: OrderStatus) -> bool:
        return (OrderStatus(current), OrderStatus(target)) in self._transitions

    def allowed_targets(self, current: OrderStatus) -> FrozenSet[OrderStatus]:
        current = OrderStatus(current)
        return frozenset(target for source, target in self._transitions if source == current)

    def apply_transition(
        self,
        order: Order,
        target: OrderStatus,
        now: Optional[datetime] = None,
        reason: Optional[str] = None,
    ) -> Order:
        """
        Move ``order`` to ``target`` in place.

        Only status and updated_at change, and an OrderStatusChangedEvent
        is recorded on the order.

        Raises:
            InvalidTransition: If (order.status, target) is not an allowed
                edge. The order is left unmodified.
        """
        target = OrderStatus(target)
        current = order.status
        if not self.can_transition(current, target):
            raise InvalidTransition(current, target)

        order.status = target
        order.touch(now or utc_now())
        order.record_event(
            OrderStatusChangedEvent(
                order_id=order.id or "",
                user_id=order.user_id,
                previous_status=current.value,
                new_status=target.value,
                reason=reason,
            )
        )
        return order

    def cancel(self, order: Order, now: Optional[datetime] = None, reason: Optional[str] = None) -> Order:
        """Cancel ``order``; fails once it is SHIPPED, DELIVERED or CANCELLED."""
        return self.apply_transition(order, OrderStatus.CANCELLED, now=now, reason=reason)
