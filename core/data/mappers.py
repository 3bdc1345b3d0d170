"""Static mappers for domain entities ↔ database models."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

from core.domain.entities.order import Order, OrderItem
from core.domain.enums import OrderStatus
from core.domain.value_objects import Address, Money

from .models.order_model import OrderItemModel, OrderModel


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class OrderItemMapper:
    """Static mapper for OrderItem ↔ OrderItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderItemModel) -> OrderItem:
        """Convert ORM model to domain entity.

        Args:
            model: OrderItemModel instance

        Returns:
            OrderItem domain entity
        """
        return OrderItem(
            product_id=model.product_id,
            quantity=model.quantity,
            unit_price=Money(
                amount=Decimal(str(model.unit_price)),
                currency=model.currency,
            ),
            discount_percent=model.discount_percent,
        )

    @staticmethod
    def to_persistence(entity: OrderItem, order_id: str, position: int) -> OrderItemModel:
        """Convert domain entity to ORM model.

        Args:
            entity: OrderItem domain entity
            order_id: Owning order id
            position: Index of the line within the order

        Returns:
            OrderItemModel instance
        """
        return OrderItemModel(
            order_id=order_id,
            position=position,
            product_id=entity.product_id,
            quantity=entity.quantity,
            unit_price=entity.unit_price.amount,
            currency=entity.unit_price.currency,
            discount_percent=entity.discount_percent,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested items."""

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain aggregate (with nested items).

        Args:
            model: OrderModel instance with items loaded

        Returns:
            Order domain aggregate
        """
        currency = model.currency
        return Order(
            id=model.id,
            user_id=model.user_id,
            shipping_address=Address(
                street=model.street,
                city=model.city,
                state=model.state,
                postal_code=model.postal_code,
                country=model.country,
            ),
            items=[OrderItemMapper.to_domain(item_model) for item_model in model.items],
            status=OrderStatus(model.status),
            subtotal=Money(Decimal(str(model.subtotal)), currency),
            tax=Money(Decimal(str(model.tax)), currency),
            shipping=Money(Decimal(str(model.shipping)), currency),
            total=Money(Decimal(str(model.total)), currency),
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
            version=model.version,
        )

    @staticmethod
    def to_columns(entity: Order) -> Dict[str, Any]:
        """Column values of the orders row, excluding id and version."""
        address = entity.shipping_address
        return {
            "user_id": entity.user_id,
            "status": entity.status.value,
            "street": address.street,
            "city": address.city,
            "state": address.state,
            "postal_code": address.postal_code,
            "country": address.country,
            "currency": entity.total.currency,
            "subtotal": entity.subtotal.amount,
            "tax": entity.tax.amount,
            "shipping": entity.shipping.amount,
            "total": entity.total.amount,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    @staticmethod
    def to_persistence(entity: Order, order_id: str, version: int) -> OrderModel:
        """Convert domain aggregate to a new ORM model (with nested items).

        Args:
            entity: Order domain aggregate
            order_id: Identifier to store the order under
            version: Version to store

        Returns:
            OrderModel instance
        """
        order_model = OrderModel(id=order_id, version=version, **OrderMapper.to_columns(entity))
        order_model.items = OrderMapper.items_to_persistence(entity, order_id)
        return order_model

    @staticmethod
    def items_to_persistence(entity: Order, order_id: str) -> List[OrderItemModel]:
        return [
            OrderItemMapper.to_persistence(item, order_id, position)
            for position, item in enumerate(entity.items)
        ]
