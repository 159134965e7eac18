"""Warehouse domain entities and capacity accounting."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from stockflow.core.entities.timestamps import utcnow


class CapacityBand(str, Enum):
    """Coarse utilization band of a warehouse."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    FULL = "full"

    @classmethod
    def for_utilization(cls, utilization: float) -> "CapacityBand":
        """Band for a utilization percentage."""
        if utilization >= 100:
            return cls.FULL
        if utilization >= 80:
            return cls.HIGH
        if utilization >= 50:
            return cls.MEDIUM
        return cls.LOW


class Warehouse(BaseModel):
    """Physical location with a fixed unit capacity."""

    id: str | None = None
    name: str
    location: str
    capacity: int = Field(..., gt=0)
    current_occupancy: int = Field(default=0, ge=0)
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def _occupancy_within_capacity(self) -> "Warehouse":
        if self.current_occupancy > self.capacity:
            raise ValueError(
                f"current_occupancy {self.current_occupancy} exceeds capacity {self.capacity}"
            )
        return self

    @property
    def available_capacity(self) -> int:
        return self.capacity - self.current_occupancy

    @property
    def capacity_utilization(self) -> float:
        """Occupancy as a percentage of capacity."""
        return self.current_occupancy / self.capacity * 100

    def can_accommodate(self, quantity: int) -> bool:
        return self.available_capacity >= quantity


class CapacityStatus(BaseModel):
    """Point-in-time capacity report for one warehouse."""

    warehouse_id: str
    capacity: int
    current_occupancy: int
    available_capacity: int
    capacity_utilization: float
    status: CapacityBand

    @classmethod
    def from_warehouse(cls, warehouse: Warehouse) -> "CapacityStatus":
        utilization = warehouse.capacity_utilization
        return cls(
            warehouse_id=warehouse.id or "",
            capacity=warehouse.capacity,
            current_occupancy=warehouse.current_occupancy,
            available_capacity=warehouse.available_capacity,
            capacity_utilization=round(utilization, 2),
            status=CapacityBand.for_utilization(utilization),
        )
