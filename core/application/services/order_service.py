"""Application service for Order operations."""

import asyncio
from datetime import date, datetime
from typing import Callable, List, Optional, Union

from core.application.dtos.order_dto import CreateOrderRequest, OrderItemRequest
from core.application.retry import RetryPolicy
from core.application.validation import is_valid_email, is_valid_phone
from core.domain.entities.order import Order, OrderItem, utc_now
from core.domain.enums import OrderStatus, ShippingMethod
from core.domain.event_bus import EventBus
from core.domain.events.order_events import (
    OrderCreatedEvent,
    OrderItemAddedEvent,
    OrderItemRemovedEvent,
)
from core.domain.exceptions import (
    ConcurrentModification,
    InvalidOrderInput,
    InvalidOrderState,
    OrderNotFound,
)
from core.domain.repositories.order_repository import OrderRepository
from core.domain.services.pricing import PricingEngine
from core.domain.services.state_machine import OrderStateMachine
from core.domain.value_objects import Money
from core.infrastructure.logging import get_logger

# A change applied to a freshly loaded order inside the retry loop
OrderChange = Callable[[Order, datetime], None]


class OrderApplicationService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Validate requests and build domain entities
    - Sequence fetch -> transform -> persist around the pricing engine
      and the state machine
    - Retry fetch-modify-save on optimistic concurrency conflicts
    - Publish recorded domain events after a successful save
    """

    def __init__(
        self,
        repository: OrderRepository,
        pricing_engine: Optional[PricingEngine] = None,
        state_machine: Optional[OrderStateMachine] = None,
        event_bus: Optional[EventBus] = None,
        retry_policy: Optional[RetryPolicy] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize order application service.

        Args:
            repository: OrderRepository used for all reads and writes
            pricing_engine: Pricing rules (defaults to standard rates)
            state_machine: Status transition rules
            event_bus: Optional bus receiving domain events after saves
            retry_policy: Bound on attempts after ConcurrentModification
            clock: Source of timestamps
        """
        self._repository = repository
        self._pricing = pricing_engine or PricingEngine()
        self._state_machine = state_machine or OrderStateMachine()
        self._event_bus = event_bus
        self._retry_policy = retry_policy or RetryPolicy()
        self._clock = clock
        self._logger = get_logger("core.application.order_service")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create_order(self, request: CreateOrderRequest) -> Order:
        """Create a new DRAFT order.

        Args:
            request: CreateOrderRequest DTO

        Returns:
            The persisted order, with its identifier assigned

        Raises:
            InvalidOrderInput: If the request is malformed
        """
        items = self._validate_create_request(request)

        now = self._clock()
        order = Order(
            user_id=request.user_id,
            shipping_address=request.shipping_address.to_domain(),
            items=items,
            status=OrderStatus.DRAFT,
            created_at=now,
            updated_at=now,
        )
        self._pricing.recompute_totals(order)

        saved = await self._repository.save(order)
        saved.record_event(
            OrderCreatedEvent(
                order_id=saved.id,
                user_id=saved.user_id,
                item_count=len(saved.items),
                total=saved.total.amount,
                currency=saved.total.currency,
            )
        )
        await self._publish(saved)

        self._logger.info(
            f"Order created: {saved.id} (user: {saved.user_id}, "
            f"items: {len(saved.items)}, total: {saved.total})"
        )
        return saved

    async def update_order_status(
        self, order_id: str, target_status: Union[OrderStatus, str]
    ) -> Order:
        """Apply a status transition to a stored order.

        Raises:
            OrderNotFound: If no order has ``order_id``
            InvalidTransition: If the transition is not allowed
            ConcurrentModification: If every attempt lost a version race
        """
        target = self._parse_status(target_status)

        def change(order: Order, now: datetime) -> None:
            self._state_machine.apply_transition(order, target, now=now)

        return await self._modify(order_id, change, f"status -> {target.value}")

    async def cancel_order(self, order_id: str) -> Order:
        """Cancel an order that has not shipped yet."""
        return await self.update_order_status(order_id, OrderStatus.CANCELLED)

    async def add_item(self, order_id: str, item_request: OrderItemRequest) -> Order:
        """Add a line to a DRAFT order and re-price it."""

        def change(order: Order, now: datetime) -> None:
            self._require_draft(order, "add items to")
            item = self._build_item(item_request)
            if item.unit_price.currency != order.currency:
                raise InvalidOrderInput(
                    f"Item currency {item.unit_price.currency} does not match order currency {order.currency}"
                )
            order.items.append(item)
            self._pricing.recompute_totals(order)
            order.touch(now)
            order.record_event(
                OrderItemAddedEvent(
                    order_id=order.id,
                    user_id=order.user_id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    new_total=order.total.amount,
                )
            )

        return await self._modify(order_id, change, f"add item {item_request.product_id}")

    async def remove_item(self, order_id: str, product_id: str) -> Order:
        """Remove every line for ``product_id`` from a DRAFT order and re-price it."""

        def change(order: Order, now: datetime) -> None:
            self._require_draft(order, "remove items from")
            remaining = [item for item in order.items if item.product_id != product_id]
            if len(remaining) == len(order.items):
                raise InvalidOrderInput(f"Product {product_id} is not in order {order.id}")
            if not remaining:
                raise InvalidOrderState(
                    f"Cannot remove the last item of order {order.id}; cancel the order instead"
                )
            order.items = remaining
            self._pricing.recompute_totals(order)
            order.touch(now)
            order.record_event(
                OrderItemRemovedEvent(
                    order_id=order.id,
                    user_id=order.user_id,
                    product_id=product_id,
                    new_total=order.total.amount,
                )
            )

        return await self._modify(order_id, change, f"remove item {product_id}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_order(self, order_id: str) -> Order:
        """Get order by ID.

        Raises:
            OrderNotFound: If no order has ``order_id``
        """
        order = await self._repository.find_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    async def list_orders(self, limit: int = 100) -> List[Order]:
        return await self._repository.find_all(limit=limit)

    async def list_user_orders(self, user_id: str) -> List[Order]:
        return await self._repository.find_by_user(user_id)

    async def list_orders_by_status(self, status: Union[OrderStatus, str]) -> List[Order]:
        return await self._repository.find_by_status(self._parse_status(status))

    def estimate_delivery(
        self, method: Union[ShippingMethod, str], reference_date: date
    ) -> date:
        """Estimated delivery date counted in business days from ``reference_date``."""
        return self._pricing.estimate_delivery(method, reference_date)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _modify(self, order_id: str, change: OrderChange, operation: str) -> Order:
        """Run fetch -> change -> save with an optimistic version check.

        A ConcurrentModification restarts the sequence from a fresh read,
        up to the retry policy's attempt limit. Any other error propagates
        immediately.
        """
        policy = self._retry_policy
        last_error: Optional[ConcurrentModification] = None

        for attempt in range(1, policy.max_attempts + 1):
            order = await self.get_order(order_id)
            expected_version = order.version
            change(order, self._clock())

            try:
                saved = await self._repository.save(order, expected_version=expected_version)
            except ConcurrentModification as exc:
                last_error = exc
                self._logger.warning(
                    f"Version conflict on order {order_id} ({operation}), "
                    f"attempt {attempt}/{policy.max_attempts}: {exc}"
                )
                if attempt < policy.max_attempts and policy.backoff_seconds > 0:
                    await asyncio.sleep(policy.backoff_seconds)
                continue

            await self._publish(saved)
            self._logger.info(
                f"Order {order_id} updated ({operation}); "
                f"status: {saved.status.value}, version: {saved.version}"
            )
            return saved

        self._logger.error(
            f"Giving up on order {order_id} ({operation}) after {policy.max_attempts} attempts"
        )
        raise last_error

    async def _publish(self, order: Order) -> None:
        events = order.pull_events()
        if self._event_bus is not None and events:
            await self._event_bus.publish_all(events)

    def _validate_create_request(self, request: CreateOrderRequest) -> List[OrderItem]:
        if not request.user_id or not request.user_id.strip():
            raise InvalidOrderInput("user_id is required")
        if not request.items:
            raise InvalidOrderInput("Order must contain at least one item")
        if request.contact_email is not None and not is_valid_email(request.contact_email):
            raise InvalidOrderInput(f"Invalid contact email: {request.contact_email!r}")
        if request.contact_phone is not None and not is_valid_phone(request.contact_phone):
            raise InvalidOrderInput(f"Invalid contact phone: {request.contact_phone!r}")

        items = [self._build_item(item_request) for item_request in request.items]

        currencies = {item.unit_price.currency for item in items}
        if len(currencies) > 1:
            raise InvalidOrderInput(f"Order items mix currencies: {sorted(currencies)}")
        return items

    @staticmethod
    def _build_item(item_request: OrderItemRequest) -> OrderItem:
        try:
            unit_price = Money(amount=item_request.unit_price, currency=item_request.currency)
        except ValueError as exc:
            raise InvalidOrderInput(f"Item {item_request.product_id}: {exc}") from exc

        # OrderItem checks quantity, price and discount bounds
        return OrderItem(
            product_id=item_request.product_id,
            quantity=item_request.quantity,
            unit_price=unit_price,
            discount_percent=item_request.discount_percent,
        )

    @staticmethod
    def _require_draft(order: Order, action: str) -> None:
        if order.status is not OrderStatus.DRAFT:
            raise InvalidOrderState(
                f"Cannot {action} order {order.id} in status {order.status.value}; only DRAFT orders are editable"
            )

    @staticmethod
    def _parse_status(status: Union[OrderStatus, str]) -> OrderStatus:
        try:
            return OrderStatus(status.upper() if isinstance(status, str) else status)
        except ValueError:
            raise InvalidOrderInput(f"Unknown order status: {status!r}") from None
