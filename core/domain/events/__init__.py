"""Domain events."""
from .base import DomainEvent
from .order_events import OrderPlacedEvent, OrderStatusChangedEvent

__all__ = [
    "DomainEvent",
    "OrderPlacedEvent",
    "OrderStatusChangedEvent",
]
