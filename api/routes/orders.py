"""
Orders management endpoints.

Thin HTTP layer over OrderApplicationService. Domain errors are mapped
to HTTP status codes by the handler registered in api.main.
"""
from datetime import date
from typing import Optional
import logging

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_order_service
from core.application.dtos import (
    CreateOrderRequest,
    DeliveryEstimateDTO,
    OrderDTO,
    OrderItemRequest,
    OrderListDTO,
    UpdateOrderStatusRequest,
)
from core.application.services.order_service import OrderApplicationService
from core.domain.enums import OrderStatus


logger = logging.getLogger(__name__)
router = APIRouter()


# =============================================================================
# CREATE / LIST
# =============================================================================

@router.post(
    "",
    response_model=OrderDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
    description="Create a DRAFT order and price it",
)
async def create_order(
    request: CreateOrderRequest,
    service: OrderApplicationService = Depends(get_order_service),
):
    order = await service.create_order(request)
    return OrderDTO.from_domain(order)


@router.get(
    "",
    response_model=OrderListDTO,
    summary="List orders",
    description="List orders, optionally filtered by user or status",
)
async def list_orders(
    user_id: Optional[str] = Query(default=None, description="Only orders of this user"),
    order_status: Optional[OrderStatus] = Query(default=None, alias="status", description="Only orders in this status"),
    limit: int = Query(default=100, ge=1, le=1000, description="Maximum number of orders to return"),
    service: OrderApplicationService = Depends(get_order_service),
):
    if user_id is not None:
        orders = await service.list_user_orders(user_id)
        if order_status is not None:
            orders = [order for order in orders if order.status == order_status]
    elif order_status is not None:
        orders = await service.list_orders_by_status(order_status)
    else:
        orders = await service.list_orders(limit=limit)

    return OrderListDTO.from_domain(orders[:limit])


# =============================================================================
# DELIVERY ESTIMATE
# =============================================================================

@router.get(
    "/delivery-estimate",
    response_model=DeliveryEstimateDTO,
    summary="Estimate delivery date",
    description="Business-day delivery estimate for a shipping method",
)
async def estimate_delivery(
    method: str = Query(default="standard", description="standard, express or overnight"),
    reference_date: date = Query(..., description="Date to count business days from"),
    service: OrderApplicationService = Depends(get_order_service),
):
    estimated = service.estimate_delivery(method, reference_date)
    return DeliveryEstimateDTO(
        method=method.lower(),
        reference_date=reference_date,
        estimated_delivery=estimated,
    )


# =============================================================================
# SINGLE ORDER
# =============================================================================

@router.get(
    "/{order_id}",
    response_model=OrderDTO,
    summary="Get order by ID",
)
async def get_order(
    order_id: str,
    service: OrderApplicationService = Depends(get_order_service),
):
    order = await service.get_order(order_id)
    return OrderDTO.from_domain(order)


@router.patch(
    "/{order_id}/status",
    response_model=OrderDTO,
    summary="Change order status",
    description="Apply a lifecycle transition; disallowed transitions return 409",
)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    service: OrderApplicationService = Depends(get_order_service),
):
    order = await service.update_order_status(order_id, request.status)
    return OrderDTO.from_domain(order)


@router.post(
    "/{order_id}/cancel",
    response_model=OrderDTO,
    summary="Cancel order",
)
async def cancel_order(
    order_id: str,
    service: OrderApplicationService = Depends(get_order_service),
):
    order = await service.cancel_order(order_id)
    return OrderDTO.from_domain(order)


@router.post(
    "/{order_id}/items",
    response_model=OrderDTO,
    summary="Add item to a DRAFT order",
)
async def add_item(
    order_id: str,
    request: OrderItemRequest,
    service: OrderApplicationService = Depends(get_order_service),
):
    order = await service.add_item(order_id, request)
    return OrderDTO.from_domain(order)


@router.delete(
    "/{order_id}/items/{product_id}",
    response_model=OrderDTO,
    summary="Remove item from a DRAFT order",
)
async def remove_item(
    order_id: str,
    product_id: str,
    service: OrderApplicationService = Depends(get_order_service),
):
    order = await service.remove_item(order_id, product_id)
    return OrderDTO.from_domain(order)
