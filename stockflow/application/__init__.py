"""
Application layer - DTOs and service factories.

This layer connects the API to the core by:
1. Defining request/response DTOs for API contracts
2. Providing factory functions that wire stores into core services
"""

from stockflow.application.services import (
    get_audit_notifier,
    get_catalog_service,
    get_purchase_order_service,
    get_reorder_scanner,
    get_stock_service,
    get_warehouse_service,
    reset_services,
)

__all__ = [
    "get_audit_notifier",
    "get_catalog_service",
    "get_warehouse_service",
    "get_stock_service",
    "get_purchase_order_service",
    "get_reorder_scanner",
    "reset_services",
]
