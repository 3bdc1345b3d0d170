"""Application layer - services, DTOs, validation."""

from .dtos import (
    AddressDTO,
    CreateOrderRequest,
    DeliveryEstimateDTO,
    OrderDTO,
    OrderItemDTO,
    OrderItemRequest,
    OrderListDTO,
    UpdateOrderStatusRequest,
)
from .retry import RetryPolicy
from .services import OrderApplicationService
from .validation import (
    PasswordValidationResult,
    is_valid_email,
    is_valid_phone,
    validate_password,
)

__all__ = [
    # DTOs
    "AddressDTO",
    "CreateOrderRequest",
    "DeliveryEstimateDTO",
    "OrderDTO",
    "OrderItemDTO",
    "OrderItemRequest",
    "OrderListDTO",
    "UpdateOrderStatusRequest",
    # Services
    "OrderApplicationService",
    "RetryPolicy",
    # Validation
    "PasswordValidationResult",
    "is_valid_email",
    "is_valid_phone",
    "validate_password",
]
