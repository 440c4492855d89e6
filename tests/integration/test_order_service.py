"""Integration tests for OrderApplicationService against SQLite."""

from decimal import Decimal
from itertools import chain, repeat

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from core.application.commands import OrderLineRequest, PlaceOrderCommand, UpdateOrderStatusCommand
from core.data.models import OrderItemModel, OrderModel, ProductModel
from core.data.repositories import SqlAlchemyProductCatalog
from core.domain.enums import OrderStatus
from core.domain.events import OrderPlacedEvent, OrderStatusChangedEvent
from core.domain.exceptions import (
    AccessDenied,
    InvalidQuantity,
    InvalidTransition,
    OrderNotFound,
    PersistenceFailure,
    ProductNotFound,
    StoreNotFound,
    ValidationError,
)
from core.domain.value_objects import OrderNumber

# Seeded by the integration conftest
DOWNTOWN, UPTOWN = 1, 2
BLEACH, SPONGE, MOP = 1, 2, 3


def _command(store_id=DOWNTOWN, lines=((BLEACH, 2), (SPONGE, 1)), notes=None) -> PlaceOrderCommand:
    return PlaceOrderCommand(
        store_id=store_id,
        lines=[OrderLineRequest(product_id=p, quantity=q) for p, q in lines],
        notes=notes,
    )


async def _stock(session_factory, product_id):
    async with session_factory() as session:
        product = await session.get(ProductModel, product_id)
        return product.stock_quantity, product.in_stock


async def _row_counts(session_factory):
    async with session_factory() as session:
        orders = await session.scalar(select(func.count()).select_from(OrderModel))
        items = await session.scalar(select(func.count()).select_from(OrderItemModel))
        return orders, items


# =============================================================================
# CREATE ORDER
# =============================================================================

class TestCreateOrder:

    @pytest.mark.asyncio
    async def test_admin_order_priced_from_catalog(self, order_service, admin):
        created = await order_service.create_order(admin, _command())

        order = created.order
        assert order.total_amount.amount == Decimal("24.98")
        assert order.status == OrderStatus.PENDING
        assert order.user_id == admin.user_id
        assert order.status_changed_to_pending is not None
        assert order.order_number.value.startswith("ORD-")

        totals = {line.product_sku: line.item.total_price.amount for line in created.items}
        assert totals == {"BL-001": Decimal("19.98"), "SP-002": Decimal("5.00")}

    @pytest.mark.asyncio
    async def test_items_carry_product_display_fields(self, order_service, store_user):
        created = await order_service.create_order(store_user, _command(lines=((BLEACH, 1),)))

        (line,) = created.items
        assert line.product_name == "Bleach"
        assert line.category_name == "Cleaning"
        assert line.product_bin_location == "A-01"
        assert line.product_unit_type == 1
        assert line.item.unit_price.amount == Decimal("9.99")

    @pytest.mark.asyncio
    async def test_stock_decremented(self, order_service, test_session_factory, store_user):
        await order_service.create_order(store_user, _command())

        assert await _stock(test_session_factory, BLEACH) == (8, True)
        assert await _stock(test_session_factory, SPONGE) == (0, False)

    @pytest.mark.asyncio
    async def test_overselling_goes_negative(self, order_service, test_session_factory, admin):
        await order_service.create_order(admin, _command(lines=((MOP, 2),)))

        assert await _stock(test_session_factory, MOP) == (-2, False)

    @pytest.mark.asyncio
    async def test_price_is_a_snapshot(self, order_service, test_session_factory, admin):
        created = await order_service.create_order(admin, _command(lines=((BLEACH, 1),)))

        async with test_session_factory() as session:
            product = await session.get(ProductModel, BLEACH)
            product.price = Decimal("99.00")
            await session.commit()

        reloaded = await order_service.get_order(admin, created.order.id)
        assert reloaded.order.total_amount.amount == Decimal("9.99")
        assert reloaded.items[0].item.unit_price.amount == Decimal("9.99")

    @pytest.mark.asyncio
    async def test_store_user_cannot_order_for_other_store(self, order_service, test_session_factory, store_user):
        with pytest.raises(AccessDenied):
            await order_service.create_order(store_user, _command(store_id=UPTOWN))

        assert await _row_counts(test_session_factory) == (0, 0)

    @pytest.mark.asyncio
    async def test_unknown_store(self, order_service, admin):
        with pytest.raises(StoreNotFound):
            await order_service.create_order(admin, _command(store_id=99))

    @pytest.mark.asyncio
    async def test_unknown_product_writes_nothing(self, order_service, test_session_factory, admin):
        with pytest.raises(ProductNotFound):
            await order_service.create_order(admin, _command(lines=((BLEACH, 2), (999, 1))))

        assert await _row_counts(test_session_factory) == (0, 0)
        assert await _stock(test_session_factory, BLEACH) == (10, True)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("quantity", [0, -3, 2_147_483_648])
    async def test_invalid_quantity(self, order_service, test_session_factory, admin, quantity):
        with pytest.raises(InvalidQuantity):
            await order_service.create_order(admin, _command(lines=((BLEACH, 1), (SPONGE, quantity))))

        assert await _row_counts(test_session_factory) == (0, 0)

    @pytest.mark.asyncio
    async def test_empty_order(self, order_service, admin):
        with pytest.raises(ValidationError):
            await order_service.create_order(admin, _command(lines=()))

    @pytest.mark.asyncio
    async def test_storage_failure_rolls_back_everything(
        self, order_service, test_session_factory, admin, monkeypatch
    ):
        original = SqlAlchemyProductCatalog.decrement_stock
        calls = []

        async def fail_on_second_line(self, product_id, quantity):
            calls.append(product_id)
            if len(calls) == 2:
                raise OperationalError("UPDATE products", {}, Exception("disk I/O error"))
            await original(self, product_id, quantity)

        monkeypatch.setattr(SqlAlchemyProductCatalog, "decrement_stock", fail_on_second_line)

        with pytest.raises(PersistenceFailure) as exc_info:
            await order_service.create_order(admin, _command())

        assert exc_info.value.status_code == 500
        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert await _row_counts(test_session_factory) == (0, 0)
        assert await _stock(test_session_factory, BLEACH) == (10, True)

    @pytest.mark.asyncio
    async def test_products_locked_in_id_order(self, order_service, admin, monkeypatch):
        original_get_price = SqlAlchemyProductCatalog.get_price
        original_decrement = SqlAlchemyProductCatalog.decrement_stock
        locked, decremented = [], []

        async def record_lock(self, product_id, for_update=False):
            if for_update:
                locked.append(product_id)
            return await original_get_price(self, product_id, for_update=for_update)

        async def record_decrement(self, product_id, quantity):
            decremented.append(product_id)
            await original_decrement(self, product_id, quantity)

        monkeypatch.setattr(SqlAlchemyProductCatalog, "get_price", record_lock)
        monkeypatch.setattr(SqlAlchemyProductCatalog, "decrement_stock", record_decrement)

        created = await order_service.create_order(admin, _command(lines=((SPONGE, 1), (BLEACH, 1), (SPONGE, 1))))

        assert locked == [BLEACH, SPONGE]
        assert decremented == [BLEACH, SPONGE, SPONGE]
        assert [line.item.product_id for line in created.items] == [SPONGE, BLEACH, SPONGE]

    @pytest.mark.asyncio
    async def test_taken_order_number_is_redrawn(self, order_service, admin, monkeypatch):
        first = await order_service.create_order(admin, _command(lines=((BLEACH, 1),)))
        taken = first.order.order_number

        numbers = chain([taken], repeat(OrderNumber(value="ORD-20250113-777777")))
        monkeypatch.setattr(OrderNumber, "generate", classmethod(lambda cls, now=None: next(numbers)))

        second = await order_service.create_order(admin, _command(lines=((BLEACH, 1),)))
        assert second.order.order_number.value == "ORD-20250113-777777"

    @pytest.mark.asyncio
    async def test_order_number_attempts_exhausted(self, order_service, test_session_factory, admin, monkeypatch):
        first = await order_service.create_order(admin, _command(lines=((BLEACH, 1),)))
        taken = first.order.order_number
        monkeypatch.setattr(OrderNumber, "generate", classmethod(lambda cls, now=None: taken))

        with pytest.raises(PersistenceFailure):
            await order_service.create_order(admin, _command(lines=((BLEACH, 1),)))

        assert await _row_counts(test_session_factory) == (1, 1)

    @pytest.mark.asyncio
    async def test_placed_event_published_after_commit(self, order_service, admin, published_events):
        created = await order_service.create_order(admin, _command())

        (event,) = published_events
        assert isinstance(event, OrderPlacedEvent)
        assert event.order_id == created.order.id
        assert event.item_count == 2
        assert event.total_amount == Decimal("24.98")

    @pytest.mark.asyncio
    async def test_no_event_on_failure(self, order_service, admin, published_events):
        with pytest.raises(ProductNotFound):
            await order_service.create_order(admin, _command(lines=((999, 1),)))

        assert published_events == []


# =============================================================================
# UPDATE STATUS
# =============================================================================

class TestUpdateStatus:

    async def _place(self, service, identity, notes=None):
        created = await service.create_order(identity, _command(notes=notes))
        return created.order.id

    @pytest.mark.asyncio
    async def test_admin_ships_then_cannot_deliver(self, order_service, admin, published_events):
        order_id = await self._place(order_service, admin)

        shipped = await order_service.update_status(
            admin, UpdateOrderStatusCommand(order_id=order_id, status=OrderStatus.SHIPPED)
        )
        assert shipped.order.status == OrderStatus.SHIPPED
        assert shipped.order.status_changed_to_completed is None

        with pytest.raises(InvalidTransition, match="Only Pending orders can be updated by admin"):
            await order_service.update_status(
                admin, UpdateOrderStatusCommand(order_id=order_id, status=OrderStatus.DELIVERED)
            )

        changes = [e for e in published_events if isinstance(e, OrderStatusChangedEvent)]
        assert [(e.previous_status, e.new_status) for e in changes] == [("Pending", "Shipped")]

    @pytest.mark.asyncio
    async def test_rejected_transition_leaves_order_untouched(self, order_service, admin):
        order_id = await self._place(order_service, admin, notes="original")
        shipped = await order_service.update_status(
            admin, UpdateOrderStatusCommand(order_id=order_id, status=OrderStatus.SHIPPED)
        )

        with pytest.raises(InvalidTransition):
            await order_service.update_status(
                admin,
                UpdateOrderStatusCommand(order_id=order_id, status=OrderStatus.DELIVERED, notes="overwrite me"),
            )

        reloaded = await order_service.get_order(admin, order_id)
        assert reloaded.order.status == OrderStatus.SHIPPED
        assert reloaded.order.notes == "original"
        assert reloaded.order.status_changed_to_completed is None
        assert reloaded.order.updated_at == shipped.order.updated_at
        assert reloaded.order.status_changed_to_pending == shipped.order.status_changed_to_pending

    @pytest.mark.asyncio
    async def test_shipping_keeps_pending_timestamp(self, order_service, admin):
        created = await order_service.create_order(admin, _command())

        shipped = await order_service.update_status(
            admin, UpdateOrderStatusCommand(order_id=created.order.id, status=OrderStatus.SHIPPED)
        )

        assert shipped.order.status_changed_to_pending == created.order.status_changed_to_pending
        assert shipped.order.updated_at >= created.order.updated_at

    @pytest.mark.asyncio
    async def test_admin_delivers_pending_order(self, order_service, admin):
        order_id = await self._place(order_service, admin)

        delivered = await order_service.update_status(
            admin, UpdateOrderStatusCommand(order_id=order_id, status=OrderStatus.DELIVERED)
        )

        assert delivered.order.status == OrderStatus.DELIVERED
        assert delivered.order.status_changed_to_completed is not None
        assert len(delivered.items) == 2

    @pytest.mark.asyncio
    async def test_store_delivery_is_idempotent(self, order_service, admin, store_user, published_events):
        order_id = await self._place(order_service, store_user, notes="original")
        await order_service.update_status(
            admin, UpdateOrderStatusCommand(order_id=order_id, status=OrderStatus.SHIPPED)
        )

        first = await order_service.update_status(
            store_user, UpdateOrderStatusCommand(order_id=order_id, status=OrderStatus.DELIVERED)
        )
        published_before = len(published_events)

        second = await order_service.update_status(
            store_user,
            UpdateOrderStatusCommand(order_id=order_id, status=OrderStatus.DELIVERED, notes="ignored"),
        )

        assert second.order.status == OrderStatus.DELIVERED
        assert second.order.status_changed_to_completed == first.order.status_changed_to_completed
        assert second.order.notes == "original"
        assert len(published_events) == published_before

    @pytest.mark.asyncio
    async def test_store_user_cannot_ship(self, order_service, store_user):
        order_id = await self._place(order_service, store_user)

        with pytest.raises(InvalidTransition):
            await order_service.update_status(
                store_user, UpdateOrderStatusCommand(order_id=order_id, status=OrderStatus.SHIPPED)
            )

    @pytest.mark.asyncio
    async def test_store_user_cannot_touch_other_store(self, order_service, store_user, other_store_user):
        order_id = await self._place(order_service, store_user)

        with pytest.raises(AccessDenied):
            await order_service.update_status(
                other_store_user, UpdateOrderStatusCommand(order_id=order_id, status=OrderStatus.DELIVERED)
            )

        unchanged = await order_service.get_order(store_user, order_id)
        assert unchanged.order.status == OrderStatus.PENDING

    @pytest.mark.asyncio
    async def test_notes_overwritten_when_given(self, order_service, admin):
        order_id = await self._place(order_service, admin, notes="original")

        updated = await order_service.update_status(
            admin,
            UpdateOrderStatusCommand(order_id=order_id, status=OrderStatus.SHIPPED, notes="tracking 1Z999"),
        )

        assert updated.order.notes == "tracking 1Z999"

    @pytest.mark.asyncio
    async def test_unknown_order(self, order_service, admin):
        with pytest.raises(OrderNotFound):
            await order_service.update_status(
                admin, UpdateOrderStatusCommand(order_id=404, status=OrderStatus.SHIPPED)
            )


# =============================================================================
# QUERIES
# =============================================================================

class TestQueries:

    @pytest.mark.asyncio
    async def test_admin_sees_all_newest_first(self, order_service, admin, store_user, other_store_user):
        first = await order_service.create_order(store_user, _command())
        second = await order_service.create_order(other_store_user, _command(store_id=UPTOWN))

        orders = await order_service.list_orders(admin)

        assert [o.id for o in orders] == [second.order.id, first.order.id]

    @pytest.mark.asyncio
    async def test_store_user_sees_own_store_only(self, order_service, store_user, other_store_user):
        mine = await order_service.create_order(store_user, _command())
        await order_service.create_order(other_store_user, _command(store_id=UPTOWN))

        orders = await order_service.list_orders(store_user)

        assert [o.id for o in orders] == [mine.order.id]

    @pytest.mark.asyncio
    async def test_list_store_orders_gate(self, order_service, admin, store_user):
        await order_service.create_order(admin, _command(store_id=UPTOWN))

        assert len(await order_service.list_store_orders(admin, UPTOWN)) == 1
        assert await order_service.list_store_orders(store_user, DOWNTOWN) == []
        with pytest.raises(AccessDenied):
            await order_service.list_store_orders(store_user, UPTOWN)

    @pytest.mark.asyncio
    async def test_get_order_ownership(self, order_service, store_user, other_store_user):
        created = await order_service.create_order(store_user, _command())

        found = await order_service.get_order(store_user, created.order.id)
        assert found.order.order_number == created.order.order_number

        with pytest.raises(AccessDenied):
            await order_service.get_order(other_store_user, created.order.id)

    @pytest.mark.asyncio
    async def test_get_unknown_order(self, order_service, admin):
        with pytest.raises(OrderNotFound):
            await order_service.get_order(admin, 12345)
