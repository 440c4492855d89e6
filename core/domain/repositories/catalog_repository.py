"""Catalog collaborator used by order placement."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..value_objects import Money


@dataclass(frozen=True)
class ProductPrice:
    """Current price and stock of a product, read inside the order transaction."""
    product_id: int
    unit_price: Money
    stock_quantity: int


class ProductCatalog(ABC):
    """Price lookup, stock decrement and store lookup."""

    @abstractmethod
    async def get_price(self, product_id: int, for_update: bool = False) -> Optional[ProductPrice]:
        """Current unit price and stock.

        Args:
            product_id: Numeric product id
            for_update: Lock the product row until the transaction ends

        Returns:
            ProductPrice if the product exists, None otherwise
        """
        pass

    @abstractmethod
    async def decrement_stock(self, product_id: int, quantity: int) -> None:
        """Subtract `quantity` from stock and recompute the in-stock flag."""
        pass

    @abstractmethod
    async def store_exists(self, store_id: int) -> bool:
        pass
