"""Application DTOs."""

from .order_dto import (
    AddressDTO,
    CreateOrderRequest,
    DeliveryEstimateDTO,
    OrderDTO,
    OrderItemDTO,
    OrderItemRequest,
    OrderListDTO,
    UpdateOrderStatusRequest,
)

__all__ = [
    "AddressDTO",
    "CreateOrderRequest",
    "DeliveryEstimateDTO",
    "OrderDTO",
    "OrderItemDTO",
    "OrderItemRequest",
    "OrderListDTO",
    "UpdateOrderStatusRequest",
]
