"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.order import Order
from ..enums import OrderStatus


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence.

    Implementations use optimistic concurrency: every stored order has a
    version that increases by one on each successful save.
    """

    @abstractmethod
    async def save(self, order: Order, expected_version: Optional[int] = None) -> Order:
        """Persist order aggregate.

        An order without an id is inserted: it gets a new id and version 1.
        Otherwise the stored order is replaced and its version incremented.

        Args:
            order: Order aggregate to persist
            expected_version: Version the caller read. When given and the
                stored version differs, nothing is written.

        Returns:
            The saved order, with id and version updated

        Raises:
            ConcurrentModification: If expected_version is stale
            OrderNotFound: If expected_version is given for an id that
                is not stored
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """Retrieve order by unique identifier.

        Args:
            order_id: Order identifier

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: str) -> List[Order]:
        """List orders placed by a user, oldest first."""
        pass

    @abstractmethod
    async def find_by_status(self, status: OrderStatus) -> List[Order]:
        """List orders currently in ``status``, oldest first."""
        pass

    @abstractmethod
    async def find_all(self, limit: int = 100) -> List[Order]:
        """List orders with pagination.

        Args:
            limit: Maximum number of orders to return

        Returns:
            List of Order aggregates
        """
        pass

    @abstractmethod
    async def exists(self, order_id: str) -> bool:
        """Check if order exists.

        Args:
            order_id: Order identifier

        Returns:
            True if order exists, False otherwise
        """
        pass
