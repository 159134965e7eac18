"""SQLite implementation of the audit sink."""

import json

import aiosqlite

from stockflow.config import get_logger
from stockflow.core.entities.audit import AuditAction, AuditEvent
from stockflow.core.entities.timestamps import format_timestamp, parse_timestamp, utcnow
from stockflow.core.interfaces.audit_sink import IAuditSink
from stockflow.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteAuditStore(IAuditSink):
    """Persists audit events to the audit_events table."""

    async def record(self, event: AuditEvent) -> AuditEvent:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO audit_events (
                    action, resource, resource_id, actor, metadata, created_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    event.action.value,
                    event.resource,
                    event.resource_id,
                    event.actor,
                    json.dumps(event.metadata, default=str),
                    format_timestamp(event.created_at),
                ),
            )
            event.id = cursor.lastrowid
        logger.debug("audit_event_recorded", event_id=event.id, action=event.action.value)
        return event

    async def list_events(
        self,
        limit: int = 50,
        resource: str | None = None,
        resource_id: str | None = None,
    ) -> list[AuditEvent]:
        conditions: list[str] = []
        params: list = []
        if resource is not None:
            conditions.append("resource = ?")
            params.append(resource)
        if resource_id is not None:
            conditions.append("resource_id = ?")
            params.append(resource_id)

        sql = "SELECT * FROM audit_events"
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        sql += " ORDER BY id DESC LIMIT ?"
        params.append(limit)

        async with get_connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
            return [self._row_to_event(row) for row in rows]

    @staticmethod
    def _row_to_event(row: aiosqlite.Row) -> AuditEvent:
        try:
            metadata = json.loads(row["metadata"] or "{}")
        except json.JSONDecodeError:
            metadata = {}
        return AuditEvent(
            id=row["id"],
            action=AuditAction(row["action"]),
            resource=row["resource"],
            resource_id=row["resource_id"],
            actor=row["actor"],
            metadata=metadata,
            created_at=parse_timestamp(row["created_at"]) or utcnow(),
        )
