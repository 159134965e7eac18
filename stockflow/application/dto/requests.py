"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between the API and the core services.
"""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class AddStockRequest(BaseModel):
    """Request to put stock into a warehouse."""

    product_id: str = Field(..., min_length=1, description="Product ID")
    warehouse_id: str = Field(..., min_length=1, description="Warehouse ID")
    quantity: int = Field(..., ge=1, description="Units to add")


class RemoveStockRequest(BaseModel):
    """Request to take stock out of a warehouse."""

    product_id: str = Field(..., min_length=1, description="Product ID")
    warehouse_id: str = Field(..., min_length=1, description="Warehouse ID")
    quantity: int = Field(..., ge=1, description="Units to remove")


class TransferStockRequest(BaseModel):
    """Request to move stock between two warehouses."""

    product_id: str = Field(..., min_length=1, description="Product ID")
    from_warehouse_id: str = Field(..., min_length=1, description="Source warehouse ID")
    to_warehouse_id: str = Field(..., min_length=1, description="Destination warehouse ID")
    quantity: int = Field(..., ge=1, description="Units to transfer")


class CreatePurchaseOrderRequest(BaseModel):
    """Request to place a purchase order."""

    product_id: str = Field(..., min_length=1, description="Product ID")
    supplier_id: str = Field(..., min_length=1, description="Supplier ID")
    warehouse_id: str = Field(..., min_length=1, description="Destination warehouse ID")
    quantity_ordered: int = Field(..., ge=1, description="Units ordered")
    notes: str | None = Field(default=None, max_length=1000)
    order_date: datetime | None = Field(
        default=None, description="Order date (defaults to now)"
    )
    expected_arrival_date: datetime | None = Field(
        default=None,
        description="Expected arrival (defaults to order date plus lead time)",
    )
    lead_time_days: int | None = Field(
        default=None, ge=1, le=365, description="Days until expected arrival"
    )


class UpdatePurchaseOrderRequest(BaseModel):
    """Request to change a PENDING purchase order."""

    quantity_ordered: int | None = Field(default=None, ge=1)
    expected_arrival_date: datetime | None = None
    notes: str | None = Field(default=None, max_length=1000)

    @model_validator(mode="after")
    def _at_least_one_field(self) -> "UpdatePurchaseOrderRequest":
        if (
            self.quantity_ordered is None
            and self.expected_arrival_date is None
            and self.notes is None
        ):
            raise ValueError("At least one field must be provided for update")
        return self
