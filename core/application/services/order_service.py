"""Application service for Order operations."""

import logging
from typing import Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.commands.order_commands import PlaceOrderCommand, UpdateOrderStatusCommand
from core.data.uow import UnitOfWork, create_uow
from core.domain.clock import utc_now
from core.domain.entities.order import Order, OrderItem, OrderWithItems
from core.domain.event_bus import EventBus
from core.domain.exceptions import (
    AccessDenied,
    OrderNotFound,
    PersistenceFailure,
    ProductNotFound,
    StoreNotFound,
)
from core.domain.policies import (
    TransitionOutcome,
    decide_transition,
    ensure_store_scope,
    resolve_list_scope,
)
from core.domain.repositories import ProductPrice
from core.domain.value_objects import CallerIdentity, OrderNumber
from core.settings import OrderSettings

logger = logging.getLogger(__name__)


class OrderApplicationService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Apply access rules before touching storage
    - Price, persist and decrement stock in one transaction via UoW
    - Validate status transitions against the role-gated table
    - Publish aggregate events once the transaction has committed
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        event_bus: EventBus,
        settings: OrderSettings,
    ) -> None:
        """Initialize order application service.

        Args:
            session_factory: SQLAlchemy async session factory
            event_bus: Receives events after commit
            settings: Order placement tuning
        """
        self._session_factory = session_factory
        self._event_bus = event_bus
        self._max_number_attempts = settings.order_number_max_attempts

    # =========================================================================
    # COMMANDS
    # =========================================================================

    async def create_order(self, identity: CallerIdentity, command: PlaceOrderCommand) -> OrderWithItems:
        """Place an order priced from the live catalog.

        Args:
            identity: Authenticated caller
            command: Store, requested lines and optional notes

        Returns:
            The created order joined with product display fields

        Raises:
            AccessDenied: store user ordering for another store
            StoreNotFound: store_id does not exist
            ProductNotFound: any line references an unknown product
            InvalidQuantity: any line has quantity outside 1..2147483647
            PersistenceFailure: storage error, nothing was written
        """
        self._check_access(ensure_store_scope, identity, command.store_id, "create")

        try:
            async with create_uow(self._session_factory) as uow:
                if not await uow.catalog.store_exists(command.store_id):
                    raise StoreNotFound(command.store_id)

                # 1. Price every line from the catalog. Rows are locked in ascending
                # id order and stay locked until commit.
                prices: Dict[int, ProductPrice] = {}
                for product_id in sorted({line.product_id for line in command.lines}):
                    price = await uow.catalog.get_price(product_id, for_update=True)
                    if price is None:
                        raise ProductNotFound(product_id)
                    prices[product_id] = price

                items: List[OrderItem] = [
                    OrderItem.priced(line.product_id, line.quantity, prices[line.product_id].unit_price)
                    for line in command.lines
                ]

                # 2. Build the aggregate
                now = utc_now()
                order = Order.place(
                    order_number=await self._unused_order_number(uow),
                    user_id=identity.user_id,
                    store_id=command.store_id,
                    items=items,
                    now=now,
                    notes=command.notes,
                )

                # 3. Insert order + items
                order_id = await uow.orders.add(order)
                order.mark_placed(order_id)

                # 4. Decrement stock in the same transaction
                for item in sorted(order.items, key=lambda item: item.product_id):
                    await uow.catalog.decrement_stock(item.product_id, item.quantity)

                created = await uow.orders.find_with_items(order_id)

                # 5. Atomic commit
                await uow.commit()
        except SQLAlchemyError as e:
            logger.error(f"Order creation for store {command.store_id} rolled back: {e}")
            raise PersistenceFailure("Failed to create order") from e

        logger.info(
            f"Created order {order.order_number} (store {order.store_id}, "
            f"{len(order.items)} items, total {order.total_amount.amount})"
        )
        await self._publish(order)
        return created

    async def update_status(
        self,
        identity: CallerIdentity,
        command: UpdateOrderStatusCommand,
    ) -> OrderWithItems:
        """Move an order through the role-gated state machine.

        Returns:
            The order (after the change, or unchanged for the Delivered no-op)

        Raises:
            OrderNotFound: unknown order id
            AccessDenied: store user acting on another store's order
            InvalidTransition: transition not allowed for this role/state
            PersistenceFailure: storage error, nothing was written
        """
        try:
            async with create_uow(self._session_factory) as uow:
                order = await uow.orders.find_by_id(command.order_id, for_update=True)
                if order is None:
                    raise OrderNotFound(command.order_id)

                previous = order.status
                outcome = self._check_access(
                    decide_transition, identity, order.store_id, order.status, command.status
                )

                if outcome == TransitionOutcome.NO_OP:
                    logger.info(f"Order {order.order_number} already {previous.value}; nothing to do")
                    current = await uow.orders.find_with_items(order.id)
                    return current

                patch = order.apply_status(
                    command.status,
                    now=utc_now(),
                    notes=command.notes,
                    changed_by=identity.user_id,
                    changed_by_role=identity.role.value,
                )
                if not await uow.orders.apply_patch(order.id, patch):
                    raise OrderNotFound(command.order_id)

                updated = await uow.orders.find_with_items(order.id)
                await uow.commit()
        except SQLAlchemyError as e:
            logger.error(f"Status update for order {command.order_id} rolled back: {e}")
            raise PersistenceFailure("Failed to update order status") from e

        logger.info(
            f"Order {order.order_number}: {previous.value} → {command.status.value} "
            f"(by {identity.role.value} {identity.user_id})"
        )
        await self._publish(order)
        return updated

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def list_orders(self, identity: CallerIdentity) -> List[Order]:
        """All orders for admins, own-store orders otherwise; newest first."""
        store_id = self._check_access(resolve_list_scope, identity)
        return await self._find_all(store_id)

    async def list_store_orders(self, identity: CallerIdentity, store_id: int) -> List[Order]:
        self._check_access(ensure_store_scope, identity, store_id)
        return await self._find_all(store_id)

    async def get_order(self, identity: CallerIdentity, order_id: int) -> OrderWithItems:
        """Single order with display-ready items.

        Raises:
            OrderNotFound: unknown order id
            AccessDenied: store user reading another store's order
        """
        try:
            async with create_uow(self._session_factory) as uow:
                found = await uow.orders.find_with_items(order_id)
        except SQLAlchemyError as e:
            logger.error(f"Loading order {order_id} failed: {e}")
            raise PersistenceFailure("Failed to load order") from e

        if found is None:
            raise OrderNotFound(order_id)

        self._check_access(ensure_store_scope, identity, found.order.store_id)
        return found

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _find_all(self, store_id) -> List[Order]:
        try:
            async with create_uow(self._session_factory) as uow:
                return await uow.orders.find_all(store_id=store_id)
        except SQLAlchemyError as e:
            logger.error(f"Listing orders (store={store_id}) failed: {e}")
            raise PersistenceFailure("Failed to list orders") from e

    async def _unused_order_number(self, uow: UnitOfWork) -> OrderNumber:
        for attempt in range(1, self._max_number_attempts + 1):
            candidate = OrderNumber.generate()
            if not await uow.orders.order_number_exists(candidate):
                return candidate
            logger.warning(f"Order number {candidate} taken (attempt {attempt})")

        raise PersistenceFailure(
            f"Could not allocate a unique order number after {self._max_number_attempts} attempts"
        )

    @staticmethod
    def _check_access(rule, identity: CallerIdentity, *args):
        try:
            return rule(identity, *args)
        except AccessDenied as e:
            logger.warning(f"Access denied for user {identity.user_id} ({identity.role.value}): {e.message}")
            raise

    async def _publish(self, order: Order) -> None:
        events = order.get_domain_events()
        order.clear_domain_events()
        await self._event_bus.publish_all(events)
