"""API route modules."""

from stockflow.api.routes.audit import router as audit_router
from stockflow.api.routes.health import router as health_router
from stockflow.api.routes.purchase_orders import router as purchase_orders_router
from stockflow.api.routes.stock import router as stock_router
from stockflow.api.routes.products import router as products_router
from stockflow.api.routes.warehouses import router as warehouses_router

__all__ = [
    "health_router",
    "stock_router",
    "warehouses_router",
    "products_router",
    "purchase_orders_router",
    "audit_router",
]
