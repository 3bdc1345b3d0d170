"""Tests for InMemoryEventBus."""

import pytest

from factories import make_create_request
from api.dependencies import build_order_service
from core.domain.enums import OrderStatus
from core.domain.events import OrderCreatedEvent, OrderStatusChangedEvent
from core.infrastructure.adapters.persistence import InMemoryOrderRepository
from core.infrastructure.event_bus import InMemoryEventBus


def _status_event(new_status: str = "PENDING") -> OrderStatusChangedEvent:
    return OrderStatusChangedEvent(
        order_id="order-1",
        user_id="user-1",
        previous_status="DRAFT",
        new_status=new_status,
    )


@pytest.mark.asyncio
async def test_event_bus_subscribe_and_publish():
    """Sync and async subscribers both receive events."""
    bus = InMemoryEventBus()

    sync_received = []
    async_received = []

    def sync_handler(event):
        sync_received.append(event)

    async def async_handler(event):
        async_received.append(event)

    bus.subscribe(sync_handler)
    bus.subscribe(async_handler)

    event = _status_event()
    await bus.publish(event)

    assert sync_received == [event]
    assert async_received == [event]
    assert bus.published_events == [event]


@pytest.mark.asyncio
async def test_publish_all_keeps_order():
    bus = InMemoryEventBus()
    events = [_status_event("PENDING"), _status_event("CONFIRMED")]

    await bus.publish_all(events)

    assert [e.new_status for e in bus.published_events] == ["PENDING", "CONFIRMED"]


@pytest.mark.asyncio
async def test_failing_subscriber_does_not_block_others():
    bus = InMemoryEventBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(broken)
    bus.subscribe(received.append)

    await bus.publish(_status_event())

    assert len(received) == 1


@pytest.mark.asyncio
async def test_unsubscribe_and_clear():
    bus = InMemoryEventBus()
    received = []
    bus.subscribe(received.append)
    bus.unsubscribe(received.append)

    await bus.publish(_status_event())
    assert received == []

    bus.clear()
    assert bus.published_events == []


def test_event_metadata():
    event = OrderCreatedEvent(order_id="order-1", user_id="user-1", item_count=2)

    assert event.aggregate_id == "order-1"
    assert event.event_id
    assert event.occurred_at.tzinfo is not None

    assert event.event_type == "OrderCreatedEvent"
    assert event.aggregate_type == "Order"

    data = event.to_dict()
    assert data["aggregate_id"] == "order-1"
    assert data["data"]["total"] == "0.00"
    assert data["data"]["item_count"] == 2


@pytest.mark.asyncio
async def test_history_keeps_only_most_recent_events():
    bus = InMemoryEventBus(history_size=3)
    received = []
    bus.subscribe(received.append)

    statuses = ["PENDING", "CONFIRMED", "SHIPPED", "DELIVERED", "CANCELLED"]
    await bus.publish_all([_status_event(status) for status in statuses])

    assert [e.new_status for e in bus.published_events] == ["SHIPPED", "DELIVERED", "CANCELLED"]
    # Subscribers still see every event
    assert len(received) == 5


@pytest.mark.asyncio
async def test_history_bounded_under_sustained_service_traffic():
    bus = InMemoryEventBus(history_size=50)
    service = build_order_service(InMemoryOrderRepository(), event_bus=bus)

    for _ in range(100):
        order = await service.create_order(make_create_request())
        await service.update_order_status(order.id, OrderStatus.PENDING)

    assert len(bus.published_events) == 50


def test_history_size_cannot_be_negative():
    with pytest.raises(ValueError):
        InMemoryEventBus(history_size=-1)
