"""Domain enums."""
from .order_status import OrderStatus
from .user_role import UserRole

__all__ = ["OrderStatus", "UserRole"]
