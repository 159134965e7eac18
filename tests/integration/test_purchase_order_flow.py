"""Integration tests for the purchase order lifecycle against SQLite."""

from datetime import UTC, datetime, timedelta

import pytest

from stockflow.application.services import get_purchase_order_service, get_stock_service
from stockflow.core.entities import OrderStatus, PurchaseOrderFilters
from stockflow.core.exceptions import (
    CapacityExceededError,
    InvalidArgumentError,
    InvalidStateError,
    PurchaseOrderNotFoundError,
    SupplierNotFoundError,
)
from stockflow.infrastructure.storage.sqlite import get_stock_store, get_warehouse_store


async def _create(seed, quantity: int = 10, **kwargs):
    service = await get_purchase_order_service()
    return await service.create_order(
        product_id=seed.product.id,
        supplier_id=seed.supplier.id,
        warehouse_id=seed.main.id,
        quantity_ordered=quantity,
        **kwargs,
    )


class TestCreate:
    async def test_defaults(self, seed):
        order = await _create(seed, quantity=12)

        assert order.status is OrderStatus.PENDING
        assert order.actual_arrival_date is None
        assert order.expected_arrival_date - order.order_date == timedelta(days=3)

    async def test_explicit_dates_and_lead_time(self, seed):
        ordered = datetime(2024, 5, 1, tzinfo=UTC)

        with_lead = await _create(seed, order_date=ordered, lead_time_days=10)
        explicit = await _create(
            seed, order_date=ordered, expected_arrival_date=ordered + timedelta(days=1)
        )

        assert with_lead.expected_arrival_date == ordered + timedelta(days=10)
        assert explicit.expected_arrival_date == ordered + timedelta(days=1)

    async def test_unknown_supplier(self, seed):
        service = await get_purchase_order_service()
        with pytest.raises(SupplierNotFoundError):
            await service.create_order(seed.product.id, "missing", seed.main.id, 5)

    async def test_pending_orders_reserve_capacity(self, seed):
        await _create(seed, quantity=60)

        with pytest.raises(CapacityExceededError) as exc_info:
            await _create(seed, quantity=50)

        assert exc_info.value.details["available"] == 40


class TestUpdate:
    async def test_changes_fields(self, seed):
        service = await get_purchase_order_service()
        order = await _create(seed, quantity=10)

        updated = await service.update_order(order.id, quantity_ordered=25, notes="rush")

        assert updated.quantity_ordered == 25
        assert updated.notes == "rush"
        assert (await service.get_order(order.id)).quantity_ordered == 25

    async def test_increase_must_fit(self, seed):
        service = await get_purchase_order_service()
        order = await _create(seed, quantity=90)

        with pytest.raises(CapacityExceededError):
            await service.update_order(order.id, quantity_ordered=101)
        assert (await service.get_order(order.id)).quantity_ordered == 90

    async def test_requires_a_field(self, seed):
        service = await get_purchase_order_service()
        order = await _create(seed)
        with pytest.raises(InvalidArgumentError):
            await service.update_order(order.id)


class TestReceiveAndCancel:
    async def test_receive_books_stock(self, seed):
        service = await get_purchase_order_service()
        order = await _create(seed, quantity=30)

        result = await service.receive_order(order.id)

        assert result.order.status is OrderStatus.RECEIVED
        assert result.order.actual_arrival_date is not None
        assert result.record.quantity == 30
        assert result.warehouse.current_occupancy == 30
        stored = await service.get_order(order.id)
        assert stored.status is OrderStatus.RECEIVED

    @pytest.mark.parametrize("terminal", ["receive", "cancel"])
    async def test_receive_from_terminal_has_no_side_effects(self, seed, terminal: str):
        service = await get_purchase_order_service()
        order = await _create(seed, quantity=30)
        if terminal == "receive":
            await service.receive_order(order.id)
        else:
            await service.cancel_order(order.id)
        record_before = await (await get_stock_store()).get_record(
            seed.product.id, seed.main.id
        )
        warehouse_before = await (await get_warehouse_store()).get_warehouse(seed.main.id)

        with pytest.raises(InvalidStateError):
            await service.receive_order(order.id)

        record_after = await (await get_stock_store()).get_record(seed.product.id, seed.main.id)
        warehouse_after = await (await get_warehouse_store()).get_warehouse(seed.main.id)
        assert record_after == record_before
        assert warehouse_after.current_occupancy == warehouse_before.current_occupancy

    async def test_cancel_twice(self, seed):
        service = await get_purchase_order_service()
        order = await _create(seed)
        cancelled = await service.cancel_order(order.id)

        assert cancelled.status is OrderStatus.CANCELLED
        with pytest.raises(InvalidStateError):
            await service.cancel_order(order.id)

    async def test_receive_fails_when_direct_adds_filled_space(self, seed):
        orders = await get_purchase_order_service()
        stock = await get_stock_service()
        order = await _create(seed, quantity=60)
        await stock.add_stock(seed.product.id, seed.main.id, 50)

        with pytest.raises(CapacityExceededError):
            await orders.receive_order(order.id)

        assert (await orders.get_order(order.id)).status is OrderStatus.PENDING
        record = await (await get_stock_store()).get_record(seed.product.id, seed.main.id)
        assert record.quantity == 50

    async def test_unknown_order(self, seed):
        service = await get_purchase_order_service()
        with pytest.raises(PurchaseOrderNotFoundError):
            await service.receive_order("missing")


class TestQueries:
    async def test_listing_and_stats(self, seed):
        service = await get_purchase_order_service()
        first = await _create(seed, quantity=5)
        await _create(seed, quantity=6)
        await _create(
            seed,
            quantity=7,
            order_date=datetime.now(UTC) - timedelta(days=10),
        )
        await service.cancel_order(first.id)

        page = await service.list_orders(
            PurchaseOrderFilters(status=OrderStatus.PENDING), page=1, limit=1
        )
        stats = await service.get_stats()
        overdue = await service.list_overdue()

        assert page.total == 2
        assert page.total_pages == 2
        assert page.has_next_page and not page.has_previous_page
        assert (stats.total, stats.pending, stats.cancelled) == (3, 2, 1)
        assert [o.quantity_ordered for o in overdue] == [7]
        assert len(await service.list_pending()) == 2

    async def test_page_bounds(self, seed):
        service = await get_purchase_order_service()
        with pytest.raises(InvalidArgumentError):
            await service.list_orders(limit=101)
        with pytest.raises(InvalidArgumentError):
            await service.list_orders(page=0)
