"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.
"""

from stockflow.application.dto.requests import (
    AddStockRequest,
    CreatePurchaseOrderRequest,
    RemoveStockRequest,
    TransferStockRequest,
    UpdatePurchaseOrderRequest,
)
from stockflow.application.dto.responses import (
    DATA_FETCHED,
    ApiResponse,
    AuditEventResponse,
    CanAccommodateResponse,
    CapacityStatusResponse,
    DatabaseHealthResponse,
    ErrorResponse,
    HealthResponse,
    OrderStatsResponse,
    PaginationMeta,
    ProductResponse,
    ProductStockResponse,
    PurchaseOrderResponse,
    ReceiveOrderResponse,
    ReorderReportResponse,
    StockChangeResponse,
    StockLevelResponse,
    StockRecordResponse,
    TransferResponse,
    WarehouseResponse,
)

__all__ = [
    # Requests
    "AddStockRequest",
    "RemoveStockRequest",
    "TransferStockRequest",
    "CreatePurchaseOrderRequest",
    "UpdatePurchaseOrderRequest",
    # Envelope
    "DATA_FETCHED",
    "ApiResponse",
    "ErrorResponse",
    "PaginationMeta",
    # Responses
    "StockRecordResponse",
    "StockChangeResponse",
    "TransferResponse",
    "StockLevelResponse",
    "ProductStockResponse",
    "ReorderReportResponse",
    "CapacityStatusResponse",
    "CanAccommodateResponse",
    "WarehouseResponse",
    "ProductResponse",
    "PurchaseOrderResponse",
    "ReceiveOrderResponse",
    "OrderStatsResponse",
    "AuditEventResponse",
    "HealthResponse",
    "DatabaseHealthResponse",
]
