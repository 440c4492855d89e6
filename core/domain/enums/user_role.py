"""User roles known to the ordering core."""
from enum import Enum


class UserRole(str, Enum):
    """Caller role carried in the identity token."""

    STORE = "store"
    ADMIN = "admin"
