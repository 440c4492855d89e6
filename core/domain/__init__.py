"""Domain layer - pure domain models and interfaces."""

from .entities import Order, OrderItem, OrderStatusPatch, OrderWithItems
from .enums import OrderStatus, UserRole
from .repositories import OrderRepository, ProductCatalog, ProductPrice
from .value_objects import CallerIdentity, Money, OrderNumber

__all__ = [
    "CallerIdentity",
    "Money",
    "Order",
    "OrderItem",
    "OrderNumber",
    "OrderRepository",
    "OrderStatus",
    "OrderStatusPatch",
    "OrderWithItems",
    "ProductCatalog",
    "ProductPrice",
    "UserRole",
]
