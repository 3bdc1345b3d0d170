"""
Event Bus Implementation (Infrastructure Layer).

Keeps a bounded history of published events and notifies subscribers.
"""
import inspect
import logging
from collections import deque
from typing import Callable, Deque, List, Optional

from core.domain.event_bus import EventBus
from core.domain.events.base import DomainEvent


logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 1000


class InMemoryEventBus(EventBus):
    """
    In-Memory Event Bus Implementation.

    Features:
    - Keeps the most recent ``history_size`` published events, oldest dropped first
    - Notifies registered subscribers (sync or async callables)

    Can be replaced with a message broker adapter without touching the
    application service.
    """

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE):
        """Initialize event bus with subscribers and a bounded history."""
        if history_size < 0:
            raise ValueError(f"history_size must be >= 0, got {history_size}")
        self._subscribers: List[Callable[[DomainEvent], None]] = []
        self._published: Deque[DomainEvent] = deque(maxlen=history_size)

    @property
    def history_size(self) -> int:
        return self._published.maxlen

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a single domain event.

        Args:
            event: Domain event to publish
        """
        logger.info(f"Publishing event: {event.event_type} (aggregate: {event.aggregate_id})")
        self._published.append(event)
        await self._notify_subscribers(event)

    async def publish_all(self, events: List[DomainEvent]) -> None:
        """
        Publish multiple domain events in order.

        Args:
            events: List of domain events to publish
        """
        if not events:
            return

        logger.debug(f"Publishing {len(events)} events")
        for event in events:
            await self.publish(event)

    def subscribe(self, handler: Callable[[DomainEvent], None]) -> None:
        """
        Subscribe to all domain events.

        Args:
            handler: Callback function that receives events
        """
        if handler not in self._subscribers:
            self._subscribers.append(handler)
        logger.info(f"Registered event subscriber: {getattr(handler, '__name__', handler)}")

    def unsubscribe(self, handler: Callable[[DomainEvent], None]) -> None:
        """
        Unsubscribe from domain events.

        Args:
            handler: Callback function to remove
        """
        if handler in self._subscribers:
            self._subscribers.remove(handler)
        logger.info(f"Unregistered event subscriber: {getattr(handler, '__name__', handler)}")

    @property
    def published_events(self) -> List[DomainEvent]:
        return list(self._published)

    def clear(self) -> None:
        """Forget published events (for demo/testing)."""
        self._published.clear()

    async def _notify_subscribers(self, event: DomainEvent) -> None:
        """Notify all subscribers about an event."""
        if not self._subscribers:
            return

        logger.debug(f"Notifying {len(self._subscribers)} subscribers about {event.event_type}")

        for subscriber in list(self._subscribers):
            try:
                if inspect.iscoroutinefunction(subscriber):
                    await subscriber(event)
                else:
                    subscriber(event)
            except Exception as e:
                logger.error(
                    f"Subscriber {getattr(subscriber, '__name__', subscriber)} failed: {e}",
                    exc_info=True,
                )


# Global event bus instance
_event_bus_instance: Optional[InMemoryEventBus] = None


def get_event_bus(history_size: int = DEFAULT_HISTORY_SIZE) -> InMemoryEventBus:
    """
    Get or create global event bus instance.

    Args:
        history_size: History bound used when the instance is first created

    Returns:
        Global event bus instance
    """
    global _event_bus_instance

    if _event_bus_instance is None:
        _event_bus_instance = InMemoryEventBus(history_size=history_size)

    return _event_bus_instance


def reset_event_bus() -> None:
    global _event_bus_instance
    _event_bus_instance = None
