"""Order number value object."""
import re
import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..clock import utc_now

_PATTERN = re.compile(r"^ORD-\d{8}-\d{6}$")


@dataclass(frozen=True)
class OrderNumber:
    """
    Human-readable order identifier.

    Format: ORD-YYYYMMDD-NNNNNN (creation date + 6 random digits)
    Examples:
    - ORD-20250113-004217
    - ORD-20251018-918273

    Distinct from the internal numeric order id.
    """
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("Order number cannot be empty")

        if not _PATTERN.match(self.value):
            raise ValueError(
                f"Invalid order number format (expected ORD-YYYYMMDD-NNNNNN): {self.value}"
            )

    @classmethod
    def generate(cls, now: Optional[datetime] = None) -> "OrderNumber":
        """Generate a new order number for the given (or current) date."""
        now = now or utc_now()
        suffix = secrets.randbelow(1_000_000)
        return cls(value=f"ORD-{now:%Y%m%d}-{suffix:06d}")

    def __str__(self) -> str:
        return self.value
