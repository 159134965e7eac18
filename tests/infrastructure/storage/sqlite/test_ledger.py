"""Tests for the SQLite ledger transaction boundary."""

from datetime import UTC, datetime, timedelta

import pytest

from stockflow.core.entities import OrderStatus, PurchaseOrder
from stockflow.core.exceptions import (
    CapacityExceededError,
    InsufficientStockError,
    InvalidStateError,
    StockRecordNotFoundError,
)
from stockflow.infrastructure.storage.sqlite import (
    get_ledger,
    get_stock_store,
    get_warehouse_store,
)


class TestCounters:
    async def test_increment_creates_then_accumulates(self, seed):
        ledger = await get_ledger()
        async with ledger.atomic() as tx:
            first = await tx.increment_stock(seed.product.id, seed.main.id, 4)
        async with ledger.atomic() as tx:
            second = await tx.increment_stock(seed.product.id, seed.main.id, 6)

        assert first.id == second.id
        assert second.quantity == 10

    async def test_occupancy_never_exceeds_capacity(self, seed):
        ledger = await get_ledger()
        with pytest.raises(CapacityExceededError) as exc_info:
            async with ledger.atomic() as tx:
                await tx.increment_occupancy(seed.overflow.id, 51)

        assert exc_info.value.details["available"] == 50
        warehouse = await (await get_warehouse_store()).get_warehouse(seed.overflow.id)
        assert warehouse.current_occupancy == 0

    async def test_quantity_never_negative(self, seed):
        ledger = await get_ledger()
        async with ledger.atomic() as tx:
            await tx.increment_stock(seed.product.id, seed.main.id, 3)

        with pytest.raises(InsufficientStockError):
            async with ledger.atomic() as tx:
                await tx.decrement_stock(seed.product.id, seed.main.id, 4)
        with pytest.raises(StockRecordNotFoundError):
            async with ledger.atomic() as tx:
                await tx.decrement_stock(seed.product.id, seed.overflow.id, 1)

    async def test_failure_rolls_back_earlier_writes(self, seed):
        ledger = await get_ledger()
        with pytest.raises(CapacityExceededError):
            async with ledger.atomic() as tx:
                await tx.increment_stock(seed.product.id, seed.main.id, 10)
                await tx.increment_occupancy(seed.main.id, 101)

        stock = await get_stock_store()
        assert await stock.get_record(seed.product.id, seed.main.id) is None


class TestPurchaseOrders:
    async def test_conditional_status_update(self, seed):
        now = datetime.now(UTC)
        ledger = await get_ledger()
        async with ledger.atomic() as tx:
            order = await tx.insert_purchase_order(
                PurchaseOrder(
                    product_id=seed.product.id,
                    supplier_id=seed.supplier.id,
                    warehouse_id=seed.main.id,
                    quantity_ordered=5,
                    order_date=now,
                    expected_arrival_date=now + timedelta(days=3),
                )
            )
            assert await tx.pending_quantity(seed.main.id) == 5

        async with ledger.atomic() as tx:
            order.transition_to(OrderStatus.CANCELLED)
            await tx.update_purchase_order(order)

        with pytest.raises(InvalidStateError) as exc_info:
            async with ledger.atomic() as tx:
                order.notes = "late edit"
                await tx.update_purchase_order(order)
        assert exc_info.value.details["current"] == "CANCELLED"
