"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.order import Order, OrderStatusPatch, OrderWithItems
from ..value_objects import OrderNumber


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def add(self, order: Order) -> int:
        """Insert a new order with its items.

        Args:
            order: Freshly placed Order aggregate

        Returns:
            Database id assigned to the order
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: int, for_update: bool = False) -> Optional[Order]:
        """Retrieve order (with items) by internal id.

        Args:
            order_id: Numeric order id
            for_update: Lock the order row until the transaction ends

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_with_items(self, order_id: int) -> Optional[OrderWithItems]:
        """Retrieve order joined with product display fields.

        Args:
            order_id: Numeric order id

        Returns:
            OrderWithItems if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, store_id: Optional[int] = None) -> List[Order]:
        """List orders newest first.

        Args:
            store_id: Restrict to one store when given

        Returns:
            List of Order aggregates (without items)
        """
        pass

    @abstractmethod
    async def apply_patch(self, order_id: int, patch: OrderStatusPatch) -> bool:
        """Write a status patch.

        Returns:
            True if a row was updated
        """
        pass

    @abstractmethod
    async def order_number_exists(self, order_number: OrderNumber) -> bool:
        """Check whether an order number is already taken."""
        pass
