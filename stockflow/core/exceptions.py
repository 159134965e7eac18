"""
Domain exceptions for the Stockflow service.

Every exception carries an ``ErrorKind`` tag. Callers branch on the kind;
only the HTTP layer translates kinds into status codes.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Category of a domain failure."""

    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    INVALID_STATE = "invalid_state"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    STORAGE = "storage"
    CONFIGURATION = "configuration"


class StockflowError(Exception):
    """Base exception for all Stockflow errors."""

    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentError(StockflowError):
    """Input has the wrong shape or value."""

    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Invalid value for '{field}': {message}",
            code="INVALID_ARGUMENT",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Lookup failures
class NotFoundError(StockflowError):
    """Referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, resource_id: str, message: str | None = None):
        super().__init__(
            message or f"{resource.replace('_', ' ').capitalize()} not found: {resource_id}",
            code=f"{resource.upper()}_NOT_FOUND",
            details={"resource": resource, "id": resource_id},
        )


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: str):
        super().__init__("product", product_id)


class SupplierNotFoundError(NotFoundError):
    def __init__(self, supplier_id: str):
        super().__init__("supplier", supplier_id)


class WarehouseNotFoundError(NotFoundError):
    def __init__(self, warehouse_id: str):
        super().__init__("warehouse", warehouse_id)


class PurchaseOrderNotFoundError(NotFoundError):
    def __init__(self, order_id: str):
        super().__init__("purchase_order", order_id)


class StockRecordNotFoundError(NotFoundError):
    """No stock record exists for a product in a warehouse."""

    def __init__(self, product_id: str, warehouse_id: str):
        super().__init__(
            "stock_record",
            f"{product_id}@{warehouse_id}",
            message=(
                f"No stock of product {product_id} in warehouse {warehouse_id}"
            ),
        )
        self.details.update({"product_id": product_id, "warehouse_id": warehouse_id})


# Ledger rule violations
class InsufficientStockError(StockflowError):
    """Requested removal exceeds the on-hand quantity."""

    kind = ErrorKind.INSUFFICIENT_STOCK

    def __init__(self, product_id: str, warehouse_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock. Available: {available}, Requested: {requested}",
            code="INSUFFICIENT_STOCK",
            details={
                "product_id": product_id,
                "warehouse_id": warehouse_id,
                "requested": requested,
                "available": available,
            },
        )


class CapacityExceededError(StockflowError):
    """Warehouse cannot take the requested quantity."""

    kind = ErrorKind.CAPACITY_EXCEEDED

    def __init__(self, warehouse_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient warehouse capacity. Requested: {requested}, Available: {available}",
            code="CAPACITY_EXCEEDED",
            details={
                "warehouse_id": warehouse_id,
                "requested": requested,
                "available": available,
            },
        )


class InvalidStateError(StockflowError):
    """Operation not permitted from the entity's current state."""

    kind = ErrorKind.INVALID_STATE

    def __init__(self, resource: str, resource_id: str, current: str, operation: str):
        super().__init__(
            f"Cannot {operation} {resource.replace('_', ' ')} {resource_id} "
            f"in state {current}",
            code="INVALID_STATE",
            details={
                "resource": resource,
                "id": resource_id,
                "current": current,
                "operation": operation,
            },
        )


class ConflictError(StockflowError):
    """Uniqueness violation."""

    kind = ErrorKind.CONFLICT

    def __init__(self, resource: str, field: str, value: Any):
        super().__init__(
            f"{resource.capitalize()} with {field} '{value}' already exists",
            code="CONFLICT",
            details={"resource": resource, "field": field, "value": str(value)[:100]},
        )


class AuthenticationError(StockflowError):
    """Missing or unknown bearer token."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, reason: str = "Missing or invalid bearer token"):
        super().__init__(reason, code="UNAUTHORIZED")


# Storage Exceptions
class StorageError(StockflowError):
    """Base exception for storage operations."""

    kind = ErrorKind.STORAGE


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(StockflowError):
    """Configuration error."""

    kind = ErrorKind.CONFIGURATION
