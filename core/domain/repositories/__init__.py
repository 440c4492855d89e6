"""Repository interfaces."""
from .catalog_repository import ProductCatalog, ProductPrice
from .order_repository import OrderRepository

__all__ = ["OrderRepository", "ProductCatalog", "ProductPrice"]
