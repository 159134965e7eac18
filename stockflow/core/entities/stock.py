"""Stock ledger entities."""

from datetime import datetime

from pydantic import BaseModel, Field

from stockflow.core.entities.catalog import Product, Supplier
from stockflow.core.entities.timestamps import utcnow
from stockflow.core.entities.warehouse import Warehouse


class StockRecord(BaseModel):
    """On-hand quantity of one product in one warehouse."""

    id: str | None = None
    product_id: str  # FK → products.id
    warehouse_id: str  # FK → warehouses.id
    quantity: int = Field(default=0, ge=0)
    last_restocked: datetime = Field(default_factory=utcnow)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class StockLevel(BaseModel):
    """Stock record joined with its product and warehouse names."""

    record: StockRecord
    product_name: str
    warehouse_name: str
    reorder_threshold: int

    @property
    def below_threshold(self) -> bool:
        return self.record.quantity < self.reorder_threshold


class ProductStock(BaseModel):
    """Stock of one product across every warehouse holding it."""

    product_id: str
    levels: list[StockLevel] = Field(default_factory=list)

    @property
    def total_quantity(self) -> int:
        return sum(level.record.quantity for level in self.levels)


class ReorderCandidate(BaseModel):
    """Under-threshold stock record with everything needed to reorder it."""

    record: StockRecord
    product: Product
    warehouse: Warehouse
    supplier: Supplier
