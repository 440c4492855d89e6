"""
Order commands.

Inputs to the order service, already decoded to internal ids.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from core.domain.enums.order_status import OrderStatus


@dataclass(frozen=True)
class OrderLineRequest:
    """One requested line: which product and how many. Price is never client-supplied."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class PlaceOrderCommand:
    """Command to place an order for a store."""

    store_id: int
    lines: List[OrderLineRequest] = field(default_factory=list)
    notes: Optional[str] = None


@dataclass(frozen=True)
class UpdateOrderStatusCommand:
    """Command to move an order to another status."""

    order_id: int
    status: OrderStatus
    notes: Optional[str] = None
