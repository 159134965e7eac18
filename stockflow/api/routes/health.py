"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from stockflow import __version__
from stockflow.application.dto.responses import DatabaseHealthResponse, HealthResponse
from stockflow.infrastructure.storage.sqlite.migrations import (
    get_migration_status,
    verify_schema_integrity,
)

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=DatabaseHealthResponse)
async def db_health() -> DatabaseHealthResponse:
    """
    Database health check.

    Reports the schema version, pending migrations and integrity checks.
    """
    migration_status = await get_migration_status()
    if not migration_status["exists"]:
        return DatabaseHealthResponse(
            status="unhealthy",
            pending_migrations=migration_status["pending_migrations"],
        )

    checks = await verify_schema_integrity()
    healthy = (
        all(check["status"] == "PASS" for check in checks)
        and not migration_status["pending_migrations"]
    )
    return DatabaseHealthResponse(
        status="healthy" if healthy else "unhealthy",
        current_version=migration_status["current_version"],
        pending_migrations=migration_status["pending_migrations"],
        checks=checks,
    )
