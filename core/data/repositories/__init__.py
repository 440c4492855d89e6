"""SQLAlchemy repositories."""
from .catalog_repository_impl import SqlAlchemyProductCatalog
from .order_repository_impl import SqlAlchemyOrderRepository

__all__ = ["SqlAlchemyOrderRepository", "SqlAlchemyProductCatalog"]
