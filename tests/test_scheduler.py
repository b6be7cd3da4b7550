"""
Tests for the background realize sweep.
"""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from project_hub_api.app.schemas.event import EventCreate
from project_hub_api.app.services import scheduler
from tests.conftest import OWNER


class TestRealizeSweepLoop:
    @pytest.mark.asyncio
    async def test_first_run_happens_immediately(self, event_service, event_repo, project):
        event = await event_service.create_event(
            EventCreate(project_id=project.id, title="old", date=datetime(2001, 1, 1, tzinfo=timezone.utc)), OWNER
        )

        task = scheduler.start_sweep(event_service, interval_seconds=3600)
        await asyncio.sleep(0.05)
        await scheduler.stop_sweep(task)

        assert event_repo.events[event.id].status == "realized"
        assert task.cancelled()

    @pytest.mark.asyncio
    async def test_failure_is_logged_and_loop_continues(self, caplog):
        service = AsyncMock()
        service.mark_due_events_as_realized.side_effect = [RuntimeError("store down"), 0, 0, 0, 0, 0]

        task = scheduler.start_sweep(service, interval_seconds=0.01)
        await asyncio.sleep(0.1)
        await scheduler.stop_sweep(task)

        assert service.mark_due_events_as_realized.await_count >= 2
        assert "Scheduled realize sweep failed" in caplog.text

    @pytest.mark.asyncio
    async def test_run_once_returns_count(self):
        service = AsyncMock()
        service.mark_due_events_as_realized.return_value = 4

        assert await scheduler.run_sweep_once(service) == 4
