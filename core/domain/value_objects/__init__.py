"""Domain value objects."""

from .value_objects import Money, money_sum
from .order_number import OrderNumber
from .identity import CallerIdentity

__all__ = [
    "CallerIdentity",
    "Money",
    "money_sum",
    "OrderNumber",
]
