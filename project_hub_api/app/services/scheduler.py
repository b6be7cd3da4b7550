"""
Background sweep that realizes overdue events.

``run_sweep_loop`` runs ``EventService.mark_due_events_as_realized``
once immediately and then every ``interval_seconds`` until the task is
cancelled.  A failing sweep is logged and the loop keeps going; the
sweep itself is idempotent so a missed or repeated run is harmless.
"""

import asyncio
import logging
from typing import Optional

from .event_service import EventService

logger = logging.getLogger(__name__)


async def run_sweep_once(service: EventService) -> Optional[int]:
    """Run a single sweep, returning the count or ``None`` if it failed."""
    try:
        return await service.mark_due_events_as_realized()
    except Exception:
        logger.exception("Scheduled realize sweep failed")
        return None


async def run_sweep_loop(service: EventService, interval_seconds: float) -> None:
    logger.info("Realize sweep scheduled every %s seconds", interval_seconds)
    try:
        while True:
            await run_sweep_once(service)
            await asyncio.sleep(interval_seconds)
    except asyncio.CancelledError:
        logger.info("Realize sweep stopped")
        raise


def start_sweep(service: EventService, interval_seconds: float) -> "asyncio.Task[None]":
    """Schedule ``run_sweep_loop`` on the running event loop."""
    return asyncio.create_task(run_sweep_loop(service, interval_seconds), name="realize-sweep")


async def stop_sweep(task: "asyncio.Task[None]") -> None:
    task.cancel()
    await asyncio.gather(task, return_exceptions=True)
