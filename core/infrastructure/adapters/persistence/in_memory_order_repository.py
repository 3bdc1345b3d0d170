"""
In-Memory Order Repository Implementation.

Dictionary-backed storage for tests, demos and the default API wiring.
"""
import asyncio
import copy
import logging
from typing import Dict, List, Optional
import uuid

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.exceptions import ConcurrentModification, OrderNotFound
from core.domain.repositories.order_repository import OrderRepository


logger = logging.getLogger(__name__)


class InMemoryOrderRepository(OrderRepository):
    """
    In-memory implementation of OrderRepository.

    Stores private copies of orders, so callers never share mutable state
    with the store or with each other. The version compare-and-set in
    save() runs under a lock.
    """

    def __init__(self):
        """Initialize empty storage."""
        self._storage: Dict[str, Order] = {}
        self._lock = asyncio.Lock()
        logger.info("InMemoryOrderRepository initialized")

    async def save(self, order: Order, expected_version: Optional[int] = None) -> Order:
        """
        Save order to in-memory storage.

        Args:
            order: Order entity to save. Its id (on insert) and version are
                updated in place.
            expected_version: Version the caller read, checked against the
                stored version

        Returns:
            The same order instance

        Raises:
            ConcurrentModification: If expected_version is stale
            OrderNotFound: If expected_version is given for an unknown id
        """
        async with self._lock:
            if order.id is None:
                order.id = str(uuid.uuid4())
                order.version = 1
            elif order.id not in self._storage:
                if expected_version is not None:
                    raise OrderNotFound(order.id)
                order.version = 1
            else:
                current_version = self._storage[order.id].version
                if expected_version is not None and expected_version != current_version:
                    logger.warning(
                        f"Rejected stale write for order {order.id}: "
                        f"expected version {expected_version}, stored {current_version}"
                    )
                    raise ConcurrentModification(order.id, expected_version, current_version)
                order.version = current_version + 1

            self._storage[order.id] = self._copy(order)

        logger.info(
            f"Order saved: {order.id} (status: {order.status.value}, version: {order.version})"
        )
        return order

    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """
        Get order by ID from in-memory storage.

        Args:
            order_id: Order ID to lookup

        Returns:
            A private copy of the order if found, None otherwise
        """
        order = self._storage.get(order_id)

        if order is None:
            logger.info(f"Order not found: {order_id}")
            return None

        return self._copy(order)

    async def find_by_user(self, user_id: str) -> List[Order]:
        return [self._copy(order) for order in self._storage.values() if order.user_id == user_id]

    async def find_by_status(self, status: OrderStatus) -> List[Order]:
        return [self._copy(order) for order in self._storage.values() if order.status == status]

    async def find_all(self, limit: int = 100) -> List[Order]:
        """
        Get all orders with pagination.

        Args:
            limit: Maximum number of orders to return

        Returns:
            List of orders (up to limit)
        """
        orders = [self._copy(order) for order in list(self._storage.values())[:limit]]
        logger.debug(f"Found {len(orders)} order(s) (limit: {limit})")
        return orders

    async def exists(self, order_id: str) -> bool:
        """
        Check if order exists in storage.

        Args:
            order_id: Order ID to check

        Returns:
            True if exists, False otherwise
        """
        return order_id in self._storage

    @staticmethod
    def _copy(order: Order) -> Order:
        clone = copy.deepcopy(order)
        clone.clear_events()
        return clone
