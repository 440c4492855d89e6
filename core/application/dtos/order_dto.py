"""Application DTOs for Order operations."""

from datetime import datetime
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from core.domain.entities.order import Order, OrderLineView, OrderWithItems

IdEncoder = Callable[[int], str]


# =============================================================================
# REQUESTS
# =============================================================================

class CreateOrderItemRequest(BaseModel):
    """One requested line. Quantity is checked by the domain, not here."""

    product_id: str = Field(..., description="Hashed product id")
    quantity: int = Field(..., description="Units ordered, from 1 to 2147483647")


class CreateOrderRequest(BaseModel):
    """Request DTO for creating an order."""

    store_id: str = Field(..., description="Hashed store id")
    items: List[CreateOrderItemRequest] = Field(default_factory=list, description="Requested lines")
    notes: Optional[str] = Field(None, description="Free-text notes")


class UpdateOrderStatusRequest(BaseModel):
    """Request DTO for a status change."""

    status: str = Field(..., description="Target status (Pending, Shipped, Delivered...)")
    notes: Optional[str] = Field(None, description="Replaces the order notes when given")


# =============================================================================
# RESPONSES
# =============================================================================

class OrderDTO(BaseModel):
    """Response DTO for an order header. Money is float only here."""

    id: str
    order_number: str
    user_id: str
    store_id: str
    status: str
    total_amount: float
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    status_changed_to_pending: Optional[datetime] = None
    status_changed_to_completed: Optional[datetime] = None

    @classmethod
    def from_domain(cls, order: Order, encode: IdEncoder) -> "OrderDTO":
        return cls(**_order_fields(order, encode))


class OrderItemDTO(BaseModel):
    """Response DTO for a line item joined with product display fields."""

    id: Optional[str] = None
    order_id: Optional[str] = None
    product_id: str
    quantity: int
    unit_price: float
    total_price: float
    created_at: Optional[datetime] = None
    product_name: str
    product_sku: str
    product_image_url: Optional[str] = None
    category_name: str
    product_bin_location: str
    product_unit_type: int

    @classmethod
    def from_view(cls, line: OrderLineView, encode: IdEncoder) -> "OrderItemDTO":
        item = line.item
        return cls(
            id=encode(item.id) if item.id is not None else None,
            order_id=encode(item.order_id) if item.order_id is not None else None,
            product_id=encode(item.product_id),
            quantity=item.quantity,
            unit_price=item.unit_price.to_float(),
            total_price=item.total_price.to_float(),
            created_at=item.created_at,
            product_name=line.product_name,
            product_sku=line.product_sku,
            product_image_url=line.product_image_url,
            category_name=line.category_name,
            product_bin_location=line.product_bin_location,
            product_unit_type=line.product_unit_type,
        )


class OrderWithItemsDTO(OrderDTO):
    """Order header fields plus its items, at the same level."""

    items: List[OrderItemDTO] = Field(default_factory=list)

    @classmethod
    def from_read_model(cls, order_with_items: OrderWithItems, encode: IdEncoder) -> "OrderWithItemsDTO":
        return cls(
            **_order_fields(order_with_items.order, encode),
            items=[OrderItemDTO.from_view(line, encode) for line in order_with_items.items],
        )


def _order_fields(order: Order, encode: IdEncoder) -> dict:
    return {
        "id": encode(order.id),
        "order_number": order.order_number.value,
        "user_id": encode(order.user_id),
        "store_id": encode(order.store_id),
        "status": order.status.value,
        "total_amount": order.total_amount.to_float(),
        "notes": order.notes,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "status_changed_to_pending": order.status_changed_to_pending,
        "status_changed_to_completed": order.status_changed_to_completed,
    }
