"""Time source for the domain (naive UTC, matching the DATETIME columns)."""
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
