"""Outbound port for order lifecycle events."""
from abc import ABC, abstractmethod
from typing import Sequence

from .events.base import DomainEvent


class EventBus(ABC):
    """Delivers OrderPlaced / OrderStatusChanged events after commit.

    Implementations must not raise back into the caller: the order is
    already persisted by the time events are handed over.
    """

    @abstractmethod
    async def publish_all(self, events: Sequence[DomainEvent]) -> None:
        """Deliver events in the order the aggregate recorded them."""

    async def publish(self, event: DomainEvent) -> None:
        await self.publish_all([event])
