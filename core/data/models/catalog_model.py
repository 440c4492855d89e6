"""
Catalog tables read by order placement.

Their CRUD lives in the catalog service; they are declared here so
orders can reference them, lock product rows and join display fields.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from core.domain.clock import utc_now

from .base import Base


class StoreModel(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)

    products = relationship("ProductModel", back_populates="category")


class ProductModel(Base):
    """Product row; price and stock are the only fields orders touch."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    sku = Column(String(100), nullable=False, unique=True)
    price = Column(Numeric(10, 2), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    image_url = Column(String(500), nullable=True)
    bin_location = Column(String(50), nullable=False, default="")
    unit_type = Column(Integer, nullable=False, default=0)
    in_stock = Column(Boolean, nullable=False, default=True)
    stock_quantity = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    category = relationship("CategoryModel", back_populates="products")

    def __repr__(self):
        return f"<ProductModel(id={self.id}, sku={self.sku}, stock={self.stock_quantity})>"
