"""Schema exports."""

from bakery.schemas.auth import LoginRequest, TokenResponse
from bakery.schemas.closing_period import ClosingPeriodCreate, ClosingPeriodCreatedResponse, ClosingPeriodResponse
from bakery.schemas.order import (
    OrderCreate,
    OrderCreatedResponse,
    OrderItemPayload,
    OrderItemResponse,
    OrderResponse,
    OrderUpdate,
)
from bakery.schemas.product import ProductCreate, ProductOrderingStatusResponse, ProductResponse

__all__ = [
    "LoginRequest",
    "TokenResponse",
    "ClosingPeriodCreate",
    "ClosingPeriodCreatedResponse",
    "ClosingPeriodResponse",
    "OrderCreate",
    "OrderCreatedResponse",
    "OrderItemPayload",
    "OrderItemResponse",
    "OrderResponse",
    "OrderUpdate",
    "ProductCreate",
    "ProductOrderingStatusResponse",
    "ProductResponse",
]
