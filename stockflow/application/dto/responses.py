"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization. Every successful
response is wrapped in ``ApiResponse``; every failure is an
``ErrorResponse``.
"""

from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from stockflow.core.entities import (
    AuditEvent,
    CapacityStatus,
    OrderStats,
    Product,
    PurchaseOrder,
    ReorderReport,
    StockLevel,
    StockRecord,
    Warehouse,
)
from stockflow.core.services import (
    OrderPage,
    ReceiveResult,
    StockChangeResult,
    TransferResult,
)

T = TypeVar("T")

DATA_FETCHED = "Data fetched successfully"


class PaginationMeta(BaseModel):
    """Page position of a listing."""

    total: int
    page: int
    limit: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def from_page(cls, page: OrderPage) -> "PaginationMeta":
        return cls(
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
            has_next_page=page.has_next_page,
            has_previous_page=page.has_previous_page,
        )


class ApiResponse(BaseModel, Generic[T]):
    """Uniform success envelope."""

    success: bool = True
    message: str
    data: T | None = None
    pagination: PaginationMeta | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. WAREHOUSE_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    success: bool = False
    message: str = Field(..., description="Human-readable error description")
    error_code: str = Field(..., description="Machine-readable error code")
    errors: list[dict[str, Any]] | None = Field(
        default=None, description="Field-level validation errors"
    )
    details: dict[str, Any] | None = Field(default=None, description="Error context")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


# --- Stock ---


class StockRecordResponse(BaseModel):
    id: str
    product_id: str
    warehouse_id: str
    quantity: int
    last_restocked: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, record: StockRecord) -> "StockRecordResponse":
        return cls(
            id=record.id or "",
            product_id=record.product_id,
            warehouse_id=record.warehouse_id,
            quantity=record.quantity,
            last_restocked=record.last_restocked,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class WarehouseOccupancyResponse(BaseModel):
    """Warehouse counters after a ledger change."""

    id: str
    name: str
    capacity: int
    current_occupancy: int
    available_capacity: int

    @classmethod
    def from_entity(cls, warehouse: Warehouse) -> "WarehouseOccupancyResponse":
        return cls(
            id=warehouse.id or "",
            name=warehouse.name,
            capacity=warehouse.capacity,
            current_occupancy=warehouse.current_occupancy,
            available_capacity=warehouse.available_capacity,
        )


class StockChangeResponse(BaseModel):
    stock: StockRecordResponse
    warehouse: WarehouseOccupancyResponse
    quantity: int
    created: bool = False

    @classmethod
    def from_result(cls, result: StockChangeResult) -> "StockChangeResponse":
        return cls(
            stock=StockRecordResponse.from_entity(result.record),
            warehouse=WarehouseOccupancyResponse.from_entity(result.warehouse),
            quantity=result.quantity,
            created=result.created,
        )


class TransferResponse(BaseModel):
    source: StockRecordResponse
    destination: StockRecordResponse
    source_warehouse: WarehouseOccupancyResponse
    destination_warehouse: WarehouseOccupancyResponse
    quantity: int

    @classmethod
    def from_result(cls, result: TransferResult) -> "TransferResponse":
        return cls(
            source=StockRecordResponse.from_entity(result.source),
            destination=StockRecordResponse.from_entity(result.destination),
            source_warehouse=WarehouseOccupancyResponse.from_entity(
                result.source_warehouse
            ),
            destination_warehouse=WarehouseOccupancyResponse.from_entity(
                result.destination_warehouse
            ),
            quantity=result.quantity,
        )


class StockLevelResponse(BaseModel):
    """Stock record with product and warehouse names."""

    id: str
    product_id: str
    product_name: str
    warehouse_id: str
    warehouse_name: str
    quantity: int
    reorder_threshold: int
    below_threshold: bool
    last_restocked: datetime

    @classmethod
    def from_entity(cls, level: StockLevel) -> "StockLevelResponse":
        return cls(
            id=level.record.id or "",
            product_id=level.record.product_id,
            product_name=level.product_name,
            warehouse_id=level.record.warehouse_id,
            warehouse_name=level.warehouse_name,
            quantity=level.record.quantity,
            reorder_threshold=level.reorder_threshold,
            below_threshold=level.below_threshold,
            last_restocked=level.record.last_restocked,
        )


class ProductStockResponse(BaseModel):
    product_id: str
    total_quantity: int
    warehouses: list[StockLevelResponse]


class ReorderedItemResponse(BaseModel):
    order_id: str
    product_id: str
    product_name: str
    warehouse_id: str
    warehouse_name: str
    supplier_id: str
    supplier_name: str
    current_stock: int
    threshold: int
    quantity_ordered: int


class SkippedItemResponse(BaseModel):
    product_id: str
    product_name: str
    warehouse_id: str
    reason: str
    detail: str | None = None


class ReorderReportResponse(BaseModel):
    orders_created: int
    orders: list[ReorderedItemResponse]
    skipped: list[SkippedItemResponse]

    @classmethod
    def from_report(cls, report: ReorderReport) -> "ReorderReportResponse":
        return cls(
            orders_created=report.orders_created,
            orders=[ReorderedItemResponse(**item.model_dump()) for item in report.orders],
            skipped=[
                SkippedItemResponse(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    warehouse_id=item.warehouse_id,
                    reason=item.reason.value,
                    detail=item.detail,
                )
                for item in report.skipped
            ],
        )


# --- Warehouses / Products ---


class CapacityStatusResponse(BaseModel):
    warehouse_id: str
    capacity: int
    current_occupancy: int
    available_capacity: int
    capacity_utilization: float
    status: str

    @classmethod
    def from_entity(cls, status: CapacityStatus) -> "CapacityStatusResponse":
        return cls(**status.model_dump(exclude={"status"}), status=status.status.value)


class CanAccommodateResponse(BaseModel):
    warehouse_id: str
    quantity: int
    can_accommodate: bool


class WarehouseResponse(BaseModel):
    id: str
    name: str
    location: str
    capacity: int
    current_occupancy: int
    is_active: bool

    @classmethod
    def from_entity(cls, warehouse: Warehouse) -> "WarehouseResponse":
        return cls(
            id=warehouse.id or "",
            name=warehouse.name,
            location=warehouse.location,
            capacity=warehouse.capacity,
            current_occupancy=warehouse.current_occupancy,
            is_active=warehouse.is_active,
        )


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    reorder_threshold: int
    default_supplier_id: str
    is_active: bool

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id or "",
            name=product.name,
            description=product.description,
            reorder_threshold=product.reorder_threshold,
            default_supplier_id=product.default_supplier_id,
            is_active=product.is_active,
        )


# --- Purchase orders ---


class PurchaseOrderResponse(BaseModel):
    id: str
    product_id: str
    supplier_id: str
    warehouse_id: str
    quantity_ordered: int
    order_date: datetime
    expected_arrival_date: datetime
    actual_arrival_date: datetime | None = None
    status: str
    notes: str | None = None
    is_overdue: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, order: PurchaseOrder) -> "PurchaseOrderResponse":
        return cls(
            id=order.id or "",
            product_id=order.product_id,
            supplier_id=order.supplier_id,
            warehouse_id=order.warehouse_id,
            quantity_ordered=order.quantity_ordered,
            order_date=order.order_date,
            expected_arrival_date=order.expected_arrival_date,
            actual_arrival_date=order.actual_arrival_date,
            status=order.status.value,
            notes=order.notes,
            is_overdue=order.is_overdue(),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class ReceiveOrderResponse(BaseModel):
    order: PurchaseOrderResponse
    stock: StockRecordResponse
    warehouse: WarehouseOccupancyResponse

    @classmethod
    def from_result(cls, result: ReceiveResult) -> "ReceiveOrderResponse":
        return cls(
            order=PurchaseOrderResponse.from_entity(result.order),
            stock=StockRecordResponse.from_entity(result.record),
            warehouse=WarehouseOccupancyResponse.from_entity(result.warehouse),
        )


class OrderStatsResponse(BaseModel):
    total: int
    pending: int
    received: int
    cancelled: int

    @classmethod
    def from_entity(cls, stats: OrderStats) -> "OrderStatsResponse":
        return cls(**stats.model_dump())


# --- Audit / Health ---


class AuditEventResponse(BaseModel):
    id: int
    action: str
    resource: str
    resource_id: str | None = None
    actor: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime

    @classmethod
    def from_entity(cls, event: AuditEvent) -> "AuditEventResponse":
        return cls(
            id=event.id or 0,
            action=event.action.value,
            resource=event.resource,
            resource_id=event.resource_id,
            actor=event.actor,
            metadata=event.metadata,
            created_at=event.created_at,
        )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float


class DatabaseHealthResponse(BaseModel):
    status: str
    current_version: str | None = None
    pending_migrations: list[str] = Field(default_factory=list)
    checks: list[dict[str, Any]] = Field(default_factory=list)
