"""SQLAlchemy implementation of OrderRepository."""

import logging
from typing import List, Optional
import uuid

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.exceptions import ConcurrentModification, OrderNotFound
from core.domain.repositories.order_repository import OrderRepository

from ..mappers import OrderMapper
from ..models.order_model import OrderItemModel, OrderModel


logger = logging.getLogger(__name__)


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy.

    Every call runs in its own session and transaction. Updates are
    conditional on the stored version (``UPDATE ... WHERE version = :expected``),
    so a write based on a stale read touches no rows and is reported as a
    ConcurrentModification.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory

    async def save(self, order: Order, expected_version: Optional[int] = None) -> Order:
        """Persist order aggregate.

        Args:
            order: Order domain aggregate; id (on insert) and version are
                updated in place after the transaction commits
            expected_version: Version the caller read

        Returns:
            The same order instance
        """
        async with self._session_factory() as session:
            async with session.begin():
                if order.id is None:
                    order_id = str(uuid.uuid4())
                    new_version = await self._insert(session, order, order_id)
                else:
                    order_id = order.id
                    new_version = await self._update(session, order, expected_version)

        order.id = order_id
        order.version = new_version
        logger.info(f"Order saved: {order_id} (status: {order.status.value}, version: {new_version})")
        return order

    async def _insert(self, session: AsyncSession, order: Order, order_id: str) -> int:
        session.add(OrderMapper.to_persistence(order, order_id, version=1))
        await session.flush()  # Propagate to DB, commit happens on block exit
        return 1

    async def _update(
        self, session: AsyncSession, order: Order, expected_version: Optional[int]
    ) -> int:
        current_version = await session.scalar(
            select(OrderModel.version).where(OrderModel.id == order.id)
        )

        if current_version is None:
            if expected_version is not None:
                raise OrderNotFound(order.id)
            return await self._insert(session, order, order.id)

        check_version = current_version if expected_version is None else expected_version
        result = await session.execute(
            update(OrderModel)
            .where(OrderModel.id == order.id, OrderModel.version == check_version)
            .values(version=check_version + 1, **OrderMapper.to_columns(order))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            logger.warning(
                f"Rejected stale write for order {order.id}: "
                f"expected version {expected_version}, stored {current_version}"
            )
            raise ConcurrentModification(order.id, expected_version, current_version)

        # Clear and rebuild items
        await session.execute(delete(OrderItemModel).where(OrderItemModel.order_id == order.id))
        session.add_all(OrderMapper.items_to_persistence(order, order.id))
        await session.flush()
        return check_version + 1

    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """Retrieve order by unique identifier.

        Args:
            order_id: Order identifier

        Returns:
            Order if found, None otherwise
        """
        async with self._session_factory() as session:
            result = await session.execute(
                select(OrderModel)
                .options(selectinload(OrderModel.items))
                .where(OrderModel.id == order_id)
            )
            model = result.scalar_one_or_none()

            if not model:
                logger.info(f"Order not found: {order_id}")
                return None

            return OrderMapper.to_domain(model)

    async def find_by_user(self, user_id: str) -> List[Order]:
        return await self._find_where(OrderModel.user_id == user_id)

    async def find_by_status(self, status: OrderStatus) -> List[Order]:
        return await self._find_where(OrderModel.status == OrderStatus(status).value)

    async def find_all(self, limit: int = 100) -> List[Order]:
        """List orders with pagination.

        Args:
            limit: Maximum number of orders to return

        Returns:
            List of Order aggregates
        """
        return await self._find_where(None, limit=limit)

    async def exists(self, order_id: str) -> bool:
        """Check if order exists.

        Args:
            order_id: Order identifier

        Returns:
            True if order exists, False otherwise
        """
        async with self._session_factory() as session:
            found = await session.scalar(select(OrderModel.id).where(OrderModel.id == order_id))
            return found is not None

    async def _find_where(self, condition, limit: Optional[int] = None) -> List[Order]:
        statement = (
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .order_by(OrderModel.created_at, OrderModel.id)
        )
        if condition is not None:
            statement = statement.where(condition)
        if limit is not None:
            statement = statement.limit(limit)

        async with self._session_factory() as session:
            result = await session.execute(statement)
            return [OrderMapper.to_domain(model) for model in result.scalars().all()]
