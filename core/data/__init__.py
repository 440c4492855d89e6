"""Data layer - infrastructure persistence and mapping."""

from .mappers import OrderItemMapper, OrderLineMapper, OrderMapper
from .models import (
    Base,
    CategoryModel,
    OrderItemModel,
    OrderModel,
    ProductModel,
    StoreModel,
)
from .repositories import SqlAlchemyOrderRepository, SqlAlchemyProductCatalog
from .uow import UnitOfWork, create_uow

__all__ = [
    "Base",
    "CategoryModel",
    "create_uow",
    "OrderItemMapper",
    "OrderItemModel",
    "OrderLineMapper",
    "OrderMapper",
    "OrderModel",
    "ProductModel",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyProductCatalog",
    "StoreModel",
    "UnitOfWork",
]
