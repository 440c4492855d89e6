"""SQLAlchemy ORM models for Order aggregate."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from core.domain.clock import utc_now

from .base import Base


class OrderModel(Base):
    """SQLAlchemy ORM model for orders table."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_number = Column(String(50), unique=True, nullable=False)
    user_id = Column(Integer, nullable=False, index=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="Pending", index=True)
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)
    status_changed_to_pending = Column(DateTime, nullable=True)
    status_changed_to_completed = Column(DateTime, nullable=True)

    # Relationship to items
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderItemModel.id",
    )

    __table_args__ = (
        Index("ix_orders_store_created", "store_id", "created_at"),
    )

    def __repr__(self):
        return f"<OrderModel(id={self.id}, order_number={self.order_number}, status={self.status})>"


class OrderItemModel(Base):
    """SQLAlchemy ORM model for order_items table."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    # Relationship back to order
    order = relationship("OrderModel", back_populates="items")

    def __repr__(self):
        return f"<OrderItemModel(id={self.id}, product_id={self.product_id}, quantity={self.quantity})>"
