"""Unit of Work pattern for atomic transactions."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .repositories.catalog_repository_impl import SqlAlchemyProductCatalog
from .repositories.order_repository_impl import SqlAlchemyOrderRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Atomic commit/rollback of all repository operations
    3. Lazy initialization of repositories

    Usage:
        async with create_uow(session_factory) as uow:
            price = await uow.catalog.get_price(product_id, for_update=True)
            order_id = await uow.orders.add(order)
            await uow.commit()
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

        # Lazy-loaded repositories
        self._order_repository: Optional[SqlAlchemyOrderRepository] = None
        self._catalog: Optional[SqlAlchemyProductCatalog] = None

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback on exception, always close the session."""
        try:
            if exc_type is not None:
                logger.warning(f"Rolling back transaction: {exc_type.__name__}: {exc_val}")
                await self._session.rollback()
        finally:
            await self._session.close()

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._session

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Lazy-load order repository.

        Returns:
            SqlAlchemyOrderRepository instance
        """
        if self._order_repository is None:
            self._order_repository = SqlAlchemyOrderRepository(self.session)
        return self._order_repository

    @property
    def catalog(self) -> SqlAlchemyProductCatalog:
        """Lazy-load catalog repository."""
        if self._catalog is None:
            self._catalog = SqlAlchemyProductCatalog(self.session)
        return self._catalog

    async def commit(self) -> None:
        """Commit all pending changes."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Rollback all pending changes."""
        await self.session.rollback()


def create_uow(session_factory: async_sessionmaker) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory)
