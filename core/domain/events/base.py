"""
Base Domain Event.

All order lifecycle events inherit from this base class.
"""
from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional
import uuid

from ..clock import utc_now


@dataclass
class DomainEvent:
    """
    Base class for all domain events.

    Events are immutable records of things that have happened to an
    aggregate. They are collected on the aggregate and published after
    the surrounding transaction commits.
    """

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    event_type: str = field(init=False, default="")

    # Aggregate information
    aggregate_id: str = field(default="")
    aggregate_type: str = field(init=False, default="")

    # Who caused it
    user_id: Optional[int] = None

    occurred_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        """Set event type and aggregate type from class name."""
        self.event_type = self.__class__.__name__
        self.aggregate_type = self._get_aggregate_type()

    def _get_aggregate_type(self) -> str:
        """
        Extract aggregate type from event type.

        Example: OrderPlacedEvent -> Order
        """
        event_name = self.__class__.__name__

        if event_name.endswith('Event'):
            event_name = event_name[:-5]

        for i, char in enumerate(event_name):
            if i > 0 and char.isupper():
                return event_name[:i]

        return event_name

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to dictionary for logging and subscribers.

        Returns:
            Dictionary representation of event
        """
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "aggregate_type": self.aggregate_type,
            "user_id": self.user_id,
            "occurred_at": self.occurred_at.isoformat(),
            "data": self._get_event_data(),
        }

    def _get_event_data(self) -> Dict[str, Any]:
        base_fields = {f.name for f in fields(DomainEvent)}
        data = {}

        for f in fields(self):
            if f.name in base_fields:
                continue
            value = getattr(self, f.name)
            if isinstance(value, Decimal):
                # Keep exact money representation
                data[f.name] = str(value)
            elif isinstance(value, Enum):
                data[f.name] = value.value
            elif isinstance(value, datetime):
                data[f.name] = value.isoformat()
            else:
                data[f.name] = value

        return data
