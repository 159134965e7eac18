"""Unit tests for AuditNotifier."""

from unittest.mock import AsyncMock

import pytest

from stockflow.config import bind_request_context, clear_request_context
from stockflow.core.entities import AuditAction
from stockflow.core.services import AuditNotifier


@pytest.fixture(autouse=True)
def _clean_context():
    clear_request_context()
    yield
    clear_request_context()


class TestAuditNotifier:
    async def test_records_event_with_actor(self):
        sink = AsyncMock()
        sink.record.side_effect = lambda event: event
        bind_request_context(actor="token:abc123")

        event = await AuditNotifier(sink).notify(
            AuditAction.STOCK_ADDED, "stock", "s-1", quantity=5
        )

        assert event is not None
        assert event.actor == "token:abc123"
        assert event.resource_id == "s-1"
        assert event.metadata == {"quantity": 5}
        sink.record.assert_awaited_once()

    async def test_sink_failure_is_swallowed(self):
        sink = AsyncMock()
        sink.record.side_effect = RuntimeError("disk I/O error")

        result = await AuditNotifier(sink).notify(AuditAction.STOCK_REMOVED, "stock")

        assert result is None

    async def test_without_sink_is_noop(self):
        assert await AuditNotifier().notify(AuditAction.STOCK_ADDED, "stock") is None
