"""
In-process delivery of order lifecycle events.

Subscribers are plain callables (sync or async). The default bus feeds
an audit logger; tests subscribe a list to capture what was published.
"""
import inspect
import logging
from typing import Callable, List, Optional, Sequence

from core.domain.event_bus import EventBus
from core.domain.events.base import DomainEvent


logger = logging.getLogger(__name__)

Subscriber = Callable[[DomainEvent], None]


def _name(subscriber: Subscriber) -> str:
    return getattr(subscriber, "__qualname__", repr(subscriber))


class InMemoryEventBus(EventBus):
    """Fans each event out to subscribers in registration order.

    A subscriber that raises is logged and skipped, so a broken audit
    hook never turns a committed order into a failed request.
    """

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, handler: Subscriber) -> None:
        if handler not in self._subscribers:
            self._subscribers.append(handler)
            logger.debug(f"Subscribed {_name(handler)}")

    def unsubscribe(self, handler: Subscriber) -> None:
        if handler in self._subscribers:
            self._subscribers.remove(handler)
            logger.debug(f"Unsubscribed {_name(handler)}")

    async def publish_all(self, events: Sequence[DomainEvent]) -> None:
        for event in events:
            logger.info(f"Publishing {event.event_type} for order {event.aggregate_id}")
            for subscriber in list(self._subscribers):
                await self._deliver(subscriber, event)

    @staticmethod
    async def _deliver(subscriber: Subscriber, event: DomainEvent) -> None:
        try:
            if inspect.iscoroutinefunction(subscriber):
                await subscriber(event)
            else:
                subscriber(event)
        except Exception as e:
            logger.error(f"Subscriber {_name(subscriber)} failed on {event.event_type}: {e}", exc_info=True)


def log_order_event(event: DomainEvent) -> None:
    """Default subscriber: one audit line per order lifecycle event."""
    logging.getLogger("storefront.audit").info(f"{event.event_type} {event.to_dict()['data']}")


_event_bus: Optional[InMemoryEventBus] = None


def get_event_bus() -> InMemoryEventBus:
    """Process-wide bus with the audit subscriber attached."""
    global _event_bus
    if _event_bus is None:
        _event_bus = InMemoryEventBus()
        _event_bus.subscribe(log_order_event)
    return _event_bus
