"""
Order Domain Events.

Events that occur during the order lifecycle.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .base import DomainEvent


@dataclass
class OrderPlacedEvent(DomainEvent):
    """
    Order and its line items were created.

    Trigger: successful create_order commit
    """

    order_id: int = 0
    order_number: str = ""
    store_id: int = 0
    total_amount: Decimal = Decimal("0.00")
    item_count: int = 0

    def __post_init__(self):
        """Set aggregate_id to order_id."""
        if not self.aggregate_id and self.order_id:
            self.aggregate_id = str(self.order_id)
        super().__post_init__()


@dataclass
class OrderStatusChangedEvent(DomainEvent):
    """
    Order status changed.

    Tracks status transitions (Pending -> Shipped -> Delivered).
    Not recorded for the idempotent Delivered no-op.
    """

    order_id: int = 0
    previous_status: str = ""
    new_status: str = ""
    changed_by_role: Optional[str] = None

    def __post_init__(self):
        """Set aggregate_id to order_id."""
        if not self.aggregate_id and self.order_id:
            self.aggregate_id = str(self.order_id)
        super().__post_init__()
