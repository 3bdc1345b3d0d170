"""Tests for OrderApplicationService against the in-memory repository."""

from datetime import date
from decimal import Decimal

import pytest

from factories import make_create_request
from core.application.dtos import OrderItemRequest
from core.domain.enums import OrderStatus
from core.domain.events import (
    OrderCreatedEvent,
    OrderItemAddedEvent,
    OrderItemRemovedEvent,
    OrderStatusChangedEvent,
)
from core.domain.exceptions import (
    InvalidOrderInput,
    InvalidOrderState,
    InvalidTransition,
    OrderNotFound,
)


# =============================================================================
# CREATE
# =============================================================================

@pytest.mark.asyncio
async def test_create_order_prices_and_persists(order_service, repository):
    order = await order_service.create_order(make_create_request())

    assert order.id is not None
    assert order.version == 1
    assert order.status is OrderStatus.DRAFT
    assert order.subtotal.amount == Decimal("95.00")
    assert order.tax.amount == Decimal("7.60")
    assert order.shipping.amount == Decimal("9.99")
    assert order.total.amount == Decimal("112.59")

    stored = await repository.find_by_id(order.id)
    assert stored == order


@pytest.mark.asyncio
async def test_create_order_publishes_created_event(order_service, event_bus):
    order = await order_service.create_order(make_create_request())

    events = event_bus.published_events
    assert len(events) == 1
    assert isinstance(events[0], OrderCreatedEvent)
    assert events[0].order_id == order.id
    assert events[0].aggregate_id == order.id
    assert events[0].item_count == 2
    assert events[0].total == Decimal("112.59")
    assert order.pull_events() == []


@pytest.mark.asyncio
async def test_create_order_without_items_rejected(order_service, repository):
    with pytest.raises(InvalidOrderInput, match="at least one item"):
        await order_service.create_order(make_create_request(items=[]))

    assert await repository.find_all() == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "item",
    [
        {"product_id": "A", "quantity": 0, "unit_price": Decimal("1.00")},
        {"product_id": "A", "quantity": 1, "unit_price": Decimal("-1.00")},
        {"product_id": "A", "quantity": 1, "unit_price": Decimal("1.00"), "discount_percent": 101},
        {"product_id": "A", "quantity": 1, "unit_price": Decimal("1.00"), "currency": "DOLLARS"},
        {"product_id": "A", "quantity": 1, "unit_price": Decimal("1.2345678")},
    ],
)
async def test_create_order_item_bounds(order_service, item):
    with pytest.raises(InvalidOrderInput):
        await order_service.create_order(make_create_request(items=[item]))


@pytest.mark.asyncio
async def test_create_order_mixed_currencies_rejected(order_service):
    request = make_create_request(items=[
        {"product_id": "A", "quantity": 1, "unit_price": Decimal("1.00"), "currency": "USD"},
        {"product_id": "B", "quantity": 1, "unit_price": Decimal("1.00"), "currency": "EUR"},
    ])

    with pytest.raises(InvalidOrderInput, match="currencies"):
        await order_service.create_order(request)


@pytest.mark.asyncio
async def test_create_order_blank_user_rejected(order_service):
    with pytest.raises(InvalidOrderInput, match="user_id"):
        await order_service.create_order(make_create_request(user_id="  "))


@pytest.mark.asyncio
async def test_create_order_checks_contact_details(order_service):
    with pytest.raises(InvalidOrderInput, match="email"):
        await order_service.create_order(make_create_request(contact_email="not-an-email"))

    with pytest.raises(InvalidOrderInput, match="phone"):
        await order_service.create_order(make_create_request(contact_phone="12345"))

    order = await order_service.create_order(
        make_create_request(contact_email="buyer@example.com", contact_phone="(555) 123-4567")
    )
    assert order.id is not None


# =============================================================================
# QUERIES
# =============================================================================

@pytest.mark.asyncio
async def test_get_unknown_order(order_service):
    with pytest.raises(OrderNotFound) as exc_info:
        await order_service.get_order("missing")

    assert exc_info.value.order_id == "missing"


@pytest.mark.asyncio
async def test_list_by_user_and_status(order_service):
    first = await order_service.create_order(make_create_request(user_id="alice"))
    await order_service.create_order(make_create_request(user_id="alice"))
    await order_service.create_order(make_create_request(user_id="bob"))
    await order_service.update_order_status(first.id, OrderStatus.PENDING)

    alice_orders = await order_service.list_user_orders("alice")
    pending = await order_service.list_orders_by_status("pending")
    drafts = await order_service.list_orders_by_status(OrderStatus.DRAFT)

    assert len(alice_orders) == 2
    assert {order.user_id for order in alice_orders} == {"alice"}
    assert [order.id for order in pending] == [first.id]
    assert len(drafts) == 2
    assert len(await order_service.list_orders(limit=2)) == 2


@pytest.mark.asyncio
async def test_list_by_unknown_status_rejected(order_service):
    with pytest.raises(InvalidOrderInput, match="status"):
        await order_service.list_orders_by_status("LOST")


def test_estimate_delivery_delegates(order_service):
    assert order_service.estimate_delivery("standard", date(2025, 1, 10)) == date(2025, 1, 17)


# =============================================================================
# STATUS TRANSITIONS
# =============================================================================

@pytest.mark.asyncio
async def test_status_lifecycle(order_service, event_bus):
    order = await order_service.create_order(make_create_request())

    for target in ("PENDING", "CONFIRMED", "SHIPPED", "DELIVERED"):
        order = await order_service.update_order_status(order.id, target)

    assert order.status is OrderStatus.DELIVERED
    assert order.version == 5
    changes = [e for e in event_bus.published_events if isinstance(e, OrderStatusChangedEvent)]
    assert [e.new_status for e in changes] == ["PENDING", "CONFIRMED", "SHIPPED", "DELIVERED"]


@pytest.mark.asyncio
async def test_invalid_transition_leaves_stored_order_unchanged(order_service):
    order = await order_service.create_order(make_create_request())

    with pytest.raises(InvalidTransition):
        await order_service.update_order_status(order.id, OrderStatus.SHIPPED)

    stored = await order_service.get_order(order.id)
    assert stored.status is OrderStatus.DRAFT
    assert stored.version == 1


@pytest.mark.asyncio
async def test_update_status_of_unknown_order(order_service):
    with pytest.raises(OrderNotFound):
        await order_service.update_order_status("missing", OrderStatus.PENDING)


@pytest.mark.asyncio
async def test_cancel_pending_order(order_service):
    order = await order_service.create_order(make_create_request())
    await order_service.update_order_status(order.id, OrderStatus.PENDING)

    cancelled = await order_service.cancel_order(order.id)

    assert cancelled.status is OrderStatus.CANCELLED


@pytest.mark.asyncio
async def test_cancel_shipped_order_fails(order_service):
    order = await order_service.create_order(make_create_request())
    for target in (OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.SHIPPED):
        await order_service.update_order_status(order.id, target)

    with pytest.raises(InvalidTransition):
        await order_service.cancel_order(order.id)

    assert (await order_service.get_order(order.id)).status is OrderStatus.SHIPPED


# =============================================================================
# ITEM EDITS
# =============================================================================

@pytest.mark.asyncio
async def test_add_item_reprices(order_service, event_bus):
    order = await order_service.create_order(make_create_request())

    updated = await order_service.add_item(
        order.id,
        OrderItemRequest(product_id="SKU-003", quantity=1, unit_price=Decimal("5.00")),
    )

    assert len(updated.items) == 3
    assert updated.subtotal.amount == Decimal("100.00")
    assert updated.shipping.amount == Decimal("0.00")
    assert updated.total.amount == Decimal("108.00")
    assert updated.version == 2
    assert isinstance(event_bus.published_events[-1], OrderItemAddedEvent)


@pytest.mark.asyncio
async def test_add_item_in_other_currency_rejected(order_service):
    order = await order_service.create_order(make_create_request())

    with pytest.raises(InvalidOrderInput, match="currency"):
        await order_service.add_item(
            order.id,
            OrderItemRequest(product_id="X", quantity=1, unit_price=Decimal("5.00"), currency="EUR"),
        )


@pytest.mark.asyncio
async def test_remove_item_reprices(order_service, event_bus):
    order = await order_service.create_order(make_create_request())

    updated = await order_service.remove_item(order.id, "SKU-002")

    assert [item.product_id for item in updated.items] == ["SKU-001"]
    assert updated.subtotal.amount == Decimal("50.00")
    assert updated.tax.amount == Decimal("4.00")
    assert updated.total.amount == Decimal("63.99")
    assert isinstance(event_bus.published_events[-1], OrderItemRemovedEvent)


@pytest.mark.asyncio
async def test_remove_unknown_item_rejected(order_service):
    order = await order_service.create_order(make_create_request())

    with pytest.raises(InvalidOrderInput):
        await order_service.remove_item(order.id, "NOPE")


@pytest.mark.asyncio
async def test_remove_last_item_rejected(order_service):
    order = await order_service.create_order(make_create_request(items=[
        {"product_id": "ONLY", "quantity": 1, "unit_price": Decimal("10.00")},
    ]))

    with pytest.raises(InvalidOrderState):
        await order_service.remove_item(order.id, "ONLY")


@pytest.mark.asyncio
async def test_items_frozen_after_draft(order_service):
    order = await order_service.create_order(make_create_request())
    await order_service.update_order_status(order.id, OrderStatus.PENDING)

    with pytest.raises(InvalidOrderState, match="DRAFT"):
        await order_service.add_item(
            order.id, OrderItemRequest(product_id="X", quantity=1, unit_price=Decimal("1.00"))
        )
    with pytest.raises(InvalidOrderState, match="DRAFT"):
        await order_service.remove_item(order.id, "SKU-001")

    stored = await order_service.get_order(order.id)
    assert len(stored.items) == 2
    assert stored.version == 2
