"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockflow.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from stockflow.api.middleware.error_handler import setup_exception_handlers
from stockflow.api.routes import (
    audit_router,
    health_router,
    products_router,
    purchase_orders_router,
    stock_router,
    warehouses_router,
)
from stockflow.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database and opens the connection pool on startup,
    closes the pool on shutdown.
    """
    settings = get_settings()
    configure_logging()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        environment=settings.environment,
        auth_enabled=settings.auth.enabled,
    )

    try:
        from stockflow.infrastructure.storage.sqlite import get_pool
        from stockflow.infrastructure.storage.sqlite.migrations import initialize_database

        results = await initialize_database()
        if any(not r.success for r in results):
            raise RuntimeError("database migrations failed")
        logger.info("database_initialized", applied=len(results))

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    if settings.auth.enabled and not settings.auth.api_tokens:
        logger.warning("no_api_tokens_configured")

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    from stockflow.infrastructure.storage.sqlite import close_pool

    await close_pool()

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-warehouse stock ledger, reorder scanning and purchase orders",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(stock_router)
    app.include_router(warehouses_router)
    app.include_router(products_router)
    app.include_router(purchase_orders_router)
    app.include_router(audit_router)

    @app.get("/health", include_in_schema=False)
    async def root_health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
