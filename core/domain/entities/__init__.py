"""Domain entities."""
from .order import Order, OrderItem, OrderLineView, OrderStatusPatch, OrderWithItems

__all__ = [
    "Order",
    "OrderItem",
    "OrderLineView",
    "OrderStatusPatch",
    "OrderWithItems",
]
