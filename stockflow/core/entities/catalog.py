"""Catalog entities: suppliers and products."""

from datetime import datetime

from pydantic import BaseModel, Field

from stockflow.core.entities.timestamps import utcnow


class Supplier(BaseModel):
    """Vendor that purchase orders are placed with."""

    id: str | None = None
    name: str
    contact_info: str = ""
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Product(BaseModel):
    """Stocked product with its reorder policy."""

    id: str | None = None
    name: str
    description: str | None = None
    reorder_threshold: int = Field(default=0, ge=0)
    default_supplier_id: str  # FK → suppliers.id
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
