"""Unit tests for WarehouseCapacityService."""

from unittest.mock import AsyncMock

import pytest

from stockflow.core.entities import Warehouse
from stockflow.core.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    WarehouseNotFoundError,
)
from stockflow.core.services import WarehouseCapacityService


@pytest.fixture
def warehouse_store():
    store = AsyncMock()
    store.get_warehouse.return_value = Warehouse(
        id="w-1", name="Main", location="Algiers", capacity=100, current_occupancy=60
    )
    return store


@pytest.fixture
def order_store():
    store = AsyncMock()
    store.pending_quantity.return_value = 25
    return store


class TestReservableCapacity:
    async def test_pending_orders_reserve_space(self, warehouse_store, order_store):
        service = WarehouseCapacityService(warehouse_store, order_store)
        assert await service.reservable_capacity("w-1") == 15

    async def test_reservation_can_be_disabled(self, warehouse_store, order_store):
        service = WarehouseCapacityService(
            warehouse_store, order_store, reserve_pending_capacity=False
        )
        assert await service.reservable_capacity("w-1") == 40
        order_store.pending_quantity.assert_not_awaited()

    async def test_never_negative(self, warehouse_store, order_store):
        order_store.pending_quantity.return_value = 500
        service = WarehouseCapacityService(warehouse_store, order_store)
        assert await service.reservable_capacity("w-1") == 0


class TestChecks:
    async def test_can_accommodate(self, warehouse_store, order_store):
        service = WarehouseCapacityService(warehouse_store, order_store)
        assert await service.can_accommodate("w-1", 40)
        assert not await service.can_accommodate("w-1", 41)

    async def test_can_accommodate_rejects_non_positive(self, warehouse_store, order_store):
        service = WarehouseCapacityService(warehouse_store, order_store)
        with pytest.raises(InvalidArgumentError):
            await service.can_accommodate("w-1", 0)

    async def test_unknown_warehouse(self, warehouse_store, order_store):
        warehouse_store.get_warehouse.return_value = None
        service = WarehouseCapacityService(warehouse_store, order_store)
        assert not await service.exists("nope")
        with pytest.raises(WarehouseNotFoundError):
            await service.check_capacity("nope")

    async def test_deactivate_occupied_warehouse(self, warehouse_store, order_store):
        warehouse_store.deactivate_warehouse.return_value = False
        service = WarehouseCapacityService(warehouse_store, order_store)
        with pytest.raises(InvalidStateError) as exc_info:
            await service.deactivate_warehouse("w-1")
        assert exc_info.value.details["current"] == "OCCUPIED (60 units)"
