"""SQLAlchemy implementation of the ProductCatalog collaborator."""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.clock import utc_now
from core.domain.repositories.catalog_repository import ProductCatalog, ProductPrice

from ..mappers import to_money
from ..models.catalog_model import ProductModel, StoreModel


class SqlAlchemyProductCatalog(ProductCatalog):
    """Reads prices and decrements stock inside the caller's transaction."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_price(self, product_id: int, for_update: bool = False) -> Optional[ProductPrice]:
        query = select(ProductModel.id, ProductModel.price, ProductModel.stock_quantity).where(
            ProductModel.id == product_id
        )
        if for_update:
            # Row lock held until commit/rollback; serializes concurrent orders on this product
            query = query.with_for_update()

        row = (await self._session.execute(query)).one_or_none()
        if row is None:
            return None

        return ProductPrice(
            product_id=row.id,
            unit_price=to_money(row.price),
            stock_quantity=row.stock_quantity,
        )

    async def decrement_stock(self, product_id: int, quantity: int) -> None:
        # Both SET expressions read the pre-update stock value
        await self._session.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(
                stock_quantity=ProductModel.stock_quantity - quantity,
                in_stock=(ProductModel.stock_quantity - quantity) > 0,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )

    async def store_exists(self, store_id: int) -> bool:
        result = await self._session.execute(
            select(StoreModel.id).where(StoreModel.id == store_id)
        )
        return result.scalar_one_or_none() is not None
