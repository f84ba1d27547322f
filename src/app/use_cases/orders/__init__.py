"""
Order Use Cases

Validation preview, atomic create/replace and reads of farm orders.
"""

from .create_order_use_case import CreateOrderUseCase
from .dtos import OrderItemResponse, OrderListResponse, OrderResponse, ValidationPreviewResponse
from .get_order_use_case import GetOrderUseCase
from .list_orders_use_case import ListOrdersUseCase
from .update_order_use_case import UpdateOrderUseCase
from .validate_order_use_case import ValidateOrderUseCase

__all__ = [
    "CreateOrderUseCase",
    "UpdateOrderUseCase",
    "ValidateOrderUseCase",
    "GetOrderUseCase",
    "ListOrdersUseCase",
    "OrderResponse",
    "OrderItemResponse",
    "OrderListResponse",
    "ValidationPreviewResponse",
]
