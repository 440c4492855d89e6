"""Static mappers for domain entities ↔ database models."""

from decimal import Decimal
from typing import List, Optional

from core.domain.entities.order import Order, OrderItem, OrderLineView
from core.domain.enums.order_status import OrderStatus
from core.domain.value_objects import Money, OrderNumber

from .models.catalog_model import CategoryModel, ProductModel
from .models.order_model import OrderItemModel, OrderModel


def to_money(value) -> Money:
    # Numeric columns come back as Decimal; str() keeps drivers that hand back floats exact to the cent
    return Money(amount=value if isinstance(value, Decimal) else Decimal(str(value)))


class OrderItemMapper:
    """Static mapper for OrderItem ↔ OrderItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderItemModel) -> OrderItem:
        """Convert ORM model to domain entity.

        Args:
            model: OrderItemModel instance

        Returns:
            OrderItem domain entity
        """
        return OrderItem(
            id=model.id,
            order_id=model.order_id,
            product_id=model.product_id,
            quantity=model.quantity,
            unit_price=to_money(model.unit_price),
            total_price=to_money(model.total_price),
            created_at=model.created_at,
        )

    @staticmethod
    def to_persistence(entity: OrderItem) -> OrderItemModel:
        """Convert domain entity to ORM model.

        Args:
            entity: OrderItem domain entity

        Returns:
            OrderItemModel instance (order_id filled in by the relationship)
        """
        return OrderItemModel(
            product_id=entity.product_id,
            quantity=entity.quantity,
            unit_price=entity.unit_price.amount,
            total_price=entity.total_price.amount,
        )


class OrderLineMapper:
    """Joined row (item, product, category) → OrderLineView."""

    @staticmethod
    def to_view(item: OrderItemModel, product: ProductModel, category: Optional[CategoryModel]) -> OrderLineView:
        return OrderLineView(
            item=OrderItemMapper.to_domain(item),
            product_name=product.name,
            product_sku=product.sku,
            product_image_url=product.image_url,
            category_name=category.name if category else "",
            product_bin_location=product.bin_location or "",
            product_unit_type=product.unit_type or 0,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested items."""

    @staticmethod
    def to_domain(model: OrderModel, items: Optional[List[OrderItemModel]] = None) -> Order:
        """Convert ORM model to domain aggregate.

        Args:
            model: OrderModel instance
            items: Item rows to attach (pass the loaded relationship when wanted)

        Returns:
            Order domain aggregate
        """
        return Order(
            id=model.id,
            order_number=OrderNumber(value=model.order_number),
            user_id=model.user_id,
            store_id=model.store_id,
            status=OrderMapper._status(model.status),
            total_amount=to_money(model.total_amount),
            notes=model.notes,
            items=[OrderItemMapper.to_domain(item) for item in (items or [])],
            created_at=model.created_at,
            updated_at=model.updated_at,
            status_changed_to_pending=model.status_changed_to_pending,
            status_changed_to_completed=model.status_changed_to_completed,
        )

    @staticmethod
    def _status(raw: str) -> OrderStatus:
        status = OrderStatus.parse(raw)
        if status is None:
            raise ValueError(f"Unexpected status value '{raw}'")
        return status

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert domain aggregate to ORM model (with nested items).

        Args:
            entity: Order domain aggregate

        Returns:
            OrderModel instance
        """
        order_model = OrderModel(
            order_number=entity.order_number.value,
            user_id=entity.user_id,
            store_id=entity.store_id,
            status=entity.status.value,
            total_amount=entity.total_amount.amount,
            notes=entity.notes,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            status_changed_to_pending=entity.status_changed_to_pending,
            status_changed_to_completed=entity.status_changed_to_completed,
        )

        order_model.items = [OrderItemMapper.to_persistence(item) for item in entity.items]

        return order_model
