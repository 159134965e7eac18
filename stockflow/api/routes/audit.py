"""Audit trail endpoints."""

from fastapi import APIRouter, Depends, Query

from stockflow.api.dependencies import get_audit_sink
from stockflow.api.security import require_bearer_token
from stockflow.application.dto.responses import (
    DATA_FETCHED,
    ApiResponse,
    AuditEventResponse,
    ErrorResponse,
)
from stockflow.core.interfaces import IAuditSink

router = APIRouter(
    prefix="/api/audit-events",
    tags=["audit"],
    dependencies=[Depends(require_bearer_token)],
    responses={401: {"model": ErrorResponse}},
)


@router.get("", response_model=ApiResponse[list[AuditEventResponse]])
async def list_audit_events(
    limit: int = Query(default=50, ge=1, le=500),
    resource: str | None = None,
    resource_id: str | None = None,
    sink: IAuditSink = Depends(get_audit_sink),
) -> ApiResponse[list[AuditEventResponse]]:
    """Most recent audit events first."""
    events = await sink.list_events(limit=limit, resource=resource, resource_id=resource_id)
    return ApiResponse(
        message=DATA_FETCHED,
        data=[AuditEventResponse.from_entity(event) for event in events],
    )
