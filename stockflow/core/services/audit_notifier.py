"""Best-effort audit notifications."""

from typing import Any

from stockflow.config import get_logger, get_request_context
from stockflow.core.entities.audit import AuditAction, AuditEvent
from stockflow.core.interfaces.audit_sink import IAuditSink

logger = get_logger(__name__)


class AuditNotifier:
    """
    Sends audit events to a sink without ever failing the caller.

    The acting principal is taken from the request logging context, where
    the API security dependency binds it as ``actor``.
    """

    def __init__(self, sink: IAuditSink | None = None) -> None:
        self._sink = sink

    async def notify(
        self,
        action: AuditAction,
        resource: str,
        resource_id: str | None = None,
        **metadata: Any,
    ) -> AuditEvent | None:
        """Record an event; returns None if there is no sink or it failed."""
        if self._sink is None:
            return None

        event = AuditEvent(
            action=action,
            resource=resource,
            resource_id=resource_id,
            actor=get_request_context().get("actor"),
            metadata=metadata,
        )
        try:
            return await self._sink.record(event)
        except Exception as e:
            logger.warning(
                "audit_notification_failed",
                action=action.value,
                resource=resource,
                resource_id=resource_id,
                error=str(e),
                exc_info=True,
            )
            return None
