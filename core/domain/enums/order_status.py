"""
Order Status Enum.

Lifecycle states of a store order.
"""
from enum import Enum
from typing import Optional


class OrderStatus(str, Enum):
    """Order status values."""

    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"

    @classmethod
    def parse(cls, raw: str) -> Optional["OrderStatus"]:
        """Case-insensitive lookup; returns None for unknown values."""
        if raw is None:
            return None
        wanted = raw.strip().lower()
        for status in cls:
            if status.value.lower() == wanted:
                return status
        return None

    def __str__(self) -> str:
        return self.value
