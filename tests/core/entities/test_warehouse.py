"""Tests for warehouse entities and capacity bands."""

import pytest
from pydantic import ValidationError

from stockflow.core.entities import CapacityBand, CapacityStatus, Warehouse


def _warehouse(capacity: int = 100, occupancy: int = 0) -> Warehouse:
    return Warehouse(
        id="w-1", name="Main", location="Algiers", capacity=capacity, current_occupancy=occupancy
    )


class TestWarehouse:
    def test_available_capacity(self):
        warehouse = _warehouse(capacity=100, occupancy=30)
        assert warehouse.available_capacity == 70
        assert warehouse.capacity_utilization == 30.0

    def test_can_accommodate_boundary(self):
        warehouse = _warehouse(capacity=100, occupancy=95)
        assert warehouse.can_accommodate(5)
        assert not warehouse.can_accommodate(6)

    def test_occupancy_above_capacity_rejected(self):
        with pytest.raises(ValidationError):
            _warehouse(capacity=10, occupancy=11)

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValidationError):
            _warehouse(capacity=0)


class TestCapacityBand:
    @pytest.mark.parametrize(
        ("utilization", "band"),
        [
            (0, CapacityBand.LOW),
            (49.99, CapacityBand.LOW),
            (50, CapacityBand.MEDIUM),
            (79.9, CapacityBand.MEDIUM),
            (80, CapacityBand.HIGH),
            (99.9, CapacityBand.HIGH),
            (100, CapacityBand.FULL),
        ],
    )
    def test_for_utilization(self, utilization: float, band: CapacityBand):
        assert CapacityBand.for_utilization(utilization) is band

    def test_status_from_warehouse(self):
        status = CapacityStatus.from_warehouse(_warehouse(capacity=3, occupancy=1))
        assert status.warehouse_id == "w-1"
        assert status.available_capacity == 2
        assert status.capacity_utilization == 33.33
        assert status.status is CapacityBand.LOW
