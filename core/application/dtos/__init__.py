"""Application DTOs."""

from .order_dto import (
    CreateOrderItemRequest,
    CreateOrderRequest,
    OrderDTO,
    OrderItemDTO,
    OrderWithItemsDTO,
    UpdateOrderStatusRequest,
)

__all__ = [
    "CreateOrderItemRequest",
    "CreateOrderRequest",
    "OrderDTO",
    "OrderItemDTO",
    "OrderWithItemsDTO",
    "UpdateOrderStatusRequest",
]
