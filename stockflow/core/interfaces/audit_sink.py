"""Abstract interface for the audit trail."""

from abc import ABC, abstractmethod

from stockflow.core.entities.audit import AuditEvent


class IAuditSink(ABC):
    """Destination for audit events."""

    @abstractmethod
    async def record(self, event: AuditEvent) -> AuditEvent:
        """Persist an event."""
        pass

    @abstractmethod
    async def list_events(
        self,
        limit: int = 50,
        resource: str | None = None,
        resource_id: str | None = None,
    ) -> list[AuditEvent]:
        """Most recent events first."""
        pass
