"""SQLAlchemy implementation of OrderRepository."""

import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.domain.entities.order import Order, OrderStatusPatch, OrderWithItems
from core.domain.repositories.order_repository import OrderRepository
from core.domain.value_objects import OrderNumber

from ..mappers import OrderLineMapper, OrderMapper
from ..models.catalog_model import CategoryModel, ProductModel
from ..models.order_model import OrderItemModel, OrderModel

logger = logging.getLogger(__name__)

# Optional patch fields in the order they are written; status is always set.
_PATCH_FIELDS = (
    "notes",
    "status_changed_to_pending",
    "status_changed_to_completed",
    "updated_at",
)


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    async def add(self, order: Order) -> int:
        """Insert order and items; flushes so the id is known, does not commit."""
        order_model = OrderMapper.to_persistence(order)
        self._session.add(order_model)
        await self._session.flush()  # Propagate to DB without committing

        logger.debug(f"Inserted order row {order_model.id} ({order_model.order_number})")
        return order_model.id

    async def find_by_id(self, order_id: int, for_update: bool = False) -> Optional[Order]:
        query = (
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.id == order_id)
        )
        if for_update:
            query = query.with_for_update()

        result = await self._session.execute(query)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return OrderMapper.to_domain(model, items=list(model.items))

    async def find_with_items(self, order_id: int) -> Optional[OrderWithItems]:
        result = await self._session.execute(
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()

        if not model:
            return None

        rows = (
            await self._session.execute(
                select(OrderItemModel, ProductModel, CategoryModel)
                .join(ProductModel, OrderItemModel.product_id == ProductModel.id)
                .outerjoin(CategoryModel, ProductModel.category_id == CategoryModel.id)
                .where(OrderItemModel.order_id == order_id)
                .order_by(OrderItemModel.created_at.asc(), OrderItemModel.id.asc())
            )
        ).all()

        lines = [OrderLineMapper.to_view(item, product, category) for item, product, category in rows]
        order = OrderMapper.to_domain(model, items=[item for item, _, _ in rows])

        return OrderWithItems(order=order, items=lines)

    async def find_all(self, store_id: Optional[int] = None) -> List[Order]:
        query = select(OrderModel)
        if store_id is not None:
            query = query.where(OrderModel.store_id == store_id)
        query = query.order_by(OrderModel.created_at.desc(), OrderModel.id.desc())

        result = await self._session.execute(query)
        models = result.scalars().all()

        return [OrderMapper.to_domain(model) for model in models]

    async def apply_patch(self, order_id: int, patch: OrderStatusPatch) -> bool:
        """Single parameterized UPDATE built from the patch's non-empty fields."""
        values = {"status": patch.status.value}
        for name in _PATCH_FIELDS:
            value = getattr(patch, name)
            if value is not None:
                values[name] = value

        result = await self._session.execute(
            update(OrderModel).where(OrderModel.id == order_id).values(**values)
        )
        return result.rowcount > 0

    async def order_number_exists(self, order_number: OrderNumber) -> bool:
        result = await self._session.execute(
            select(OrderModel.id).where(OrderModel.order_number == order_number.value)
        )
        return result.scalar_one_or_none() is not None
