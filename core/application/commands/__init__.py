"""Application commands."""
from .order_commands import OrderLineRequest, PlaceOrderCommand, UpdateOrderStatusCommand

__all__ = ["OrderLineRequest", "PlaceOrderCommand", "UpdateOrderStatusCommand"]
