"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from ..enums.order_status import OrderStatus
from ..events.base import DomainEvent
from ..exceptions import InvalidQuantity, ValidationError
from ..value_objects import Money, OrderNumber, money_sum

# Bounds of the INTEGER quantity column and the NUMERIC(10, 2) amount columns
MAX_QUANTITY = 2_147_483_647
MAX_AMOUNT = Decimal("99999999.99")


@dataclass(frozen=True)
class OrderItem:
    """
    Line item captured at order time.

    unit_price is a snapshot of the catalog price, not a live reference.
    Items never change after creation.
    """
    product_id: int
    quantity: int
    unit_price: Money
    total_price: Money
    id: Optional[int] = None
    order_id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def priced(cls, product_id: int, quantity: int, unit_price: Money) -> "OrderItem":
        """Build a line from a resolved catalog price."""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or not 0 < quantity <= MAX_QUANTITY:
            raise InvalidQuantity(product_id, quantity)
        total_price = unit_price * quantity
        if total_price.amount > MAX_AMOUNT:
            raise ValidationError(f"Line total for product {product_id} exceeds {MAX_AMOUNT}")
        return cls(
            product_id=product_id,
            quantity=quantity,
            unit_price=unit_price,
            total_price=total_price,
        )


@dataclass
class OrderStatusPatch:
    """
    Optional-field update for an order row.

    Only the fields set here are written; everything else on the row is
    left untouched.
    """
    status: OrderStatus
    notes: Optional[str] = None
    status_changed_to_pending: Optional[datetime] = None
    status_changed_to_completed: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Order:
    """
    Order aggregate root.

    An order belongs to exactly one store and one user (its creator).
    total_amount is fixed at placement time as the sum of the line
    totals; later catalog price changes never touch it.
    """
    order_number: OrderNumber
    user_id: int
    store_id: int
    status: OrderStatus = OrderStatus.PENDING
    total_amount: Money = field(default_factory=Money.zero)
    notes: Optional[str] = None
    items: List[OrderItem] = field(default_factory=list)

    # Persistence identity and audit timestamps
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    status_changed_to_pending: Optional[datetime] = None
    status_changed_to_completed: Optional[datetime] = None

    _domain_events: List[DomainEvent] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def place(
        cls,
        order_number: OrderNumber,
        user_id: int,
        store_id: int,
        items: List[OrderItem],
        now: datetime,
        notes: Optional[str] = None,
    ) -> "Order":
        """
        Factory for a brand new order.

        Args:
            order_number: Generated human-readable number
            user_id: Creator
            store_id: Owning store
            items: Priced line items (at least one)
            now: Creation time, also stamped as status_changed_to_pending
            notes: Optional free text

        Returns:
            Pending order whose total equals the sum of its line totals
        """
        if not items:
            raise ValidationError("An order must contain at least one item")

        total_amount = money_sum(item.total_price for item in items)
        if total_amount.amount > MAX_AMOUNT:
            raise ValidationError(f"Order total exceeds {MAX_AMOUNT}")

        return cls(
            order_number=order_number,
            user_id=user_id,
            store_id=store_id,
            status=OrderStatus.PENDING,
            total_amount=total_amount,
            notes=notes,
            items=list(items),
            created_at=now,
            updated_at=now,
            status_changed_to_pending=now,
        )

    def mark_placed(self, order_id: int) -> None:
        """Record the database id and the placement event."""
        from ..events.order_events import OrderPlacedEvent

        self.id = order_id
        self._record_event(
            OrderPlacedEvent(
                order_id=order_id,
                order_number=self.order_number.value,
                store_id=self.store_id,
                total_amount=self.total_amount.amount,
                item_count=len(self.items),
                user_id=self.user_id,
            )
        )

    def apply_status(
        self,
        target: OrderStatus,
        now: datetime,
        notes: Optional[str] = None,
        changed_by: Optional[int] = None,
        changed_by_role: Optional[str] = None,
    ) -> OrderStatusPatch:
        """
        Move to `target` and describe the change as a patch.

        The caller is expected to have validated the transition already
        (see policies.order_status_policy).
        """
        previous = self.status
        patch = OrderStatusPatch(status=target, updated_at=now)

        self.status = target
        self.updated_at = now

        if target == OrderStatus.PENDING:
            self.status_changed_to_pending = now
            patch.status_changed_to_pending = now
        elif target == OrderStatus.DELIVERED:
            self.status_changed_to_completed = now
            patch.status_changed_to_completed = now

        if notes is not None:
            self.notes = notes
            patch.notes = notes

        self._record_status_change(previous, target, changed_by, changed_by_role)
        return patch

    # =========================================================================
    # EVENT COLLECTION
    # =========================================================================

    def get_domain_events(self) -> List[DomainEvent]:
        """
        Get all domain events collected by this aggregate.

        Returns:
            List of domain events (will be published to Event Bus)
        """
        return list(self._domain_events)

    def clear_domain_events(self) -> None:
        """Clear all collected domain events (after publishing)."""
        self._domain_events.clear()

    def _record_status_change(
        self,
        previous: OrderStatus,
        new: OrderStatus,
        changed_by: Optional[int],
        changed_by_role: Optional[str],
    ) -> None:
        from ..events.order_events import OrderStatusChangedEvent

        self._record_event(
            OrderStatusChangedEvent(
                order_id=self.id or 0,
                previous_status=previous.value,
                new_status=new.value,
                changed_by_role=changed_by_role,
                user_id=changed_by,
            )
        )

    def _record_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)


@dataclass(frozen=True)
class OrderLineView:
    """Line item joined with the product fields shown on manifests."""
    item: OrderItem
    product_name: str
    product_sku: str
    product_image_url: Optional[str]
    category_name: str
    product_bin_location: str
    product_unit_type: int


@dataclass(frozen=True)
class OrderWithItems:
    """Read model: an order plus its display-ready line items."""
    order: Order
    items: List[OrderLineView]
