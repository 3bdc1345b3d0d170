"""Application DTOs for Order operations."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from core.domain.entities.order import Order, OrderItem
from core.domain.enums import OrderStatus
from core.domain.value_objects import Address


class AddressDTO(BaseModel):
    """DTO for a shipping address."""

    street: str = Field(..., description="Street line")
    city: str = Field(..., description="City")
    state: str = Field(..., description="State or region")
    postal_code: str = Field(..., description="Postal code")
    country: str = Field(..., description="Country code")

    model_config = {"frozen": True}

    def to_domain(self) -> Address:
        return Address(
            street=self.street,
            city=self.city,
            state=self.state,
            postal_code=self.postal_code,
            country=self.country,
        )

    @classmethod
    def from_domain(cls, address: Address) -> "AddressDTO":
        return cls(
            street=address.street,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
        )


class OrderItemRequest(BaseModel):
    """Request DTO for one order line. Bounds are enforced by the service."""

    product_id: str = Field(..., description="Product identifier")
    quantity: int = Field(..., description="Quantity ordered")
    unit_price: Decimal = Field(..., description="Unit price amount")
    discount_percent: int = Field(default=0, description="Discount percentage (0-100)")
    currency: str = Field(default="USD", description="Currency code")

    model_config = {"frozen": True}


class CreateOrderRequest(BaseModel):
    """Request DTO for creating an order."""

    user_id: str = Field(..., description="User placing the order")
    items: List[OrderItemRequest] = Field(default_factory=list, description="Order items")
    shipping_address: AddressDTO = Field(..., description="Shipping address")
    contact_email: Optional[str] = Field(None, description="Optional contact email")
    contact_phone: Optional[str] = Field(None, description="Optional contact phone")

    model_config = {"frozen": True}


class UpdateOrderStatusRequest(BaseModel):
    """Request DTO for a status transition."""

    status: OrderStatus = Field(..., description="Target order status")

    model_config = {"frozen": True}


class OrderItemDTO(BaseModel):
    """DTO for order item."""

    product_id: str = Field(..., description="Product identifier")
    quantity: int = Field(..., gt=0, description="Quantity ordered")
    unit_price: Decimal = Field(..., ge=0, description="Unit price amount")
    discount_percent: int = Field(..., ge=0, le=100, description="Discount percentage")
    line_total: Decimal = Field(..., ge=0, description="Rounded line total")
    currency: str = Field(default="USD", description="Currency code")

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, item: OrderItem) -> "OrderItemDTO":
        return cls(
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price=item.unit_price.amount,
            discount_percent=item.discount_percent,
            line_total=item.line_total().amount,
            currency=item.unit_price.currency,
        )


class OrderDTO(BaseModel):
    """Response DTO for order details."""

    id: str = Field(..., description="Order identifier")
    user_id: str = Field(..., description="User who placed the order")
    status: OrderStatus = Field(..., description="Order status")
    items: List[OrderItemDTO] = Field(default_factory=list, description="Order items")
    shipping_address: AddressDTO = Field(..., description="Shipping address")
    subtotal: Decimal = Field(..., description="Sum of rounded line totals")
    tax: Decimal = Field(..., description="Tax on the subtotal")
    shipping: Decimal = Field(..., description="Shipping cost")
    total: Decimal = Field(..., description="subtotal + tax + shipping")
    currency: str = Field(default="USD", description="Currency code")
    version: int = Field(..., ge=0, description="Optimistic concurrency version")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last modification timestamp")

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, order: Order) -> "OrderDTO":
        return cls(
            id=order.id,
            user_id=order.user_id,
            status=order.status,
            items=[OrderItemDTO.from_domain(item) for item in order.items],
            shipping_address=AddressDTO.from_domain(order.shipping_address),
            subtotal=order.subtotal.amount,
            tax=order.tax.amount,
            shipping=order.shipping.amount,
            total=order.total.amount,
            currency=order.total.currency,
            version=order.version,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderListDTO(BaseModel):
    """DTO for listing orders."""

    orders: List[OrderDTO] = Field(default_factory=list, description="List of orders")
    total: int = Field(..., ge=0, description="Total count")

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, orders: List[Order]) -> "OrderListDTO":
        return cls(orders=[OrderDTO.from_domain(order) for order in orders], total=len(orders))


class DeliveryEstimateDTO(BaseModel):
    """Response DTO for a delivery date estimate."""

    method: str = Field(..., description="Shipping method")
    reference_date: date = Field(..., description="Date the estimate counts from")
    estimated_delivery: date = Field(..., description="Estimated delivery date")

    model_config = {"frozen": True}
