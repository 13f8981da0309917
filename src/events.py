"""Session and catalog event feed.

The web routes and the catalog emit one SystemEvent per session transition
or data load. While the feed is running, events are queued and a single
worker hands them to the registered sinks in order, so a slow sink never
holds up a page. Before startup (and after shutdown) events go to the sinks
directly.

In production the only sink is the audit log (see ``src.audit``).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from src.schemas.events import SystemEvent

logger = logging.getLogger(__name__)

EventSink = Callable[[SystemEvent], Coroutine[Any, Any, None]]

_sinks: list[EventSink] = []
_queue: asyncio.Queue[SystemEvent | None] | None = None
_worker: asyncio.Task[None] | None = None


def add_sink(sink: EventSink) -> None:
    if sink not in _sinks:
        _sinks.append(sink)
        logger.info("Event sink registered: %s", sink.__name__)


def remove_sink(sink: EventSink) -> None:
    if sink in _sinks:
        _sinks.remove(sink)


async def emit(event: SystemEvent) -> None:
    """Queue the event, or deliver it now when the feed is not running."""
    logger.debug("Event emitted: %s (session=%s)", event.event_type.value, event.session_id)
    if _queue is None:
        await _deliver(event)
        return
    await _queue.put(event)


async def _deliver(event: SystemEvent) -> None:
    # Sinks run one after another; a failing sink is logged and skipped
    for sink in list(_sinks):
        try:
            await sink(event)
        except Exception:
            logger.exception("Event sink %s failed on %s", sink.__name__, event.event_type.value)


async def _run(queue: asyncio.Queue[SystemEvent | None]) -> None:
    while True:
        event = await queue.get()
        if event is None:
            return
        await _deliver(event)


async def start_event_system() -> None:
    """Start the queue worker. Called from the app lifespan."""
    global _queue, _worker
    if _worker is not None and not _worker.done():
        return
    _queue = asyncio.Queue()
    _worker = asyncio.create_task(_run(_queue))
    logger.info("Event feed started with %d sink(s)", len(_sinks))


async def stop_event_system() -> None:
    """Deliver everything already queued, then stop the worker."""
    global _queue, _worker
    if _queue is None or _worker is None:
        return
    # None is the stop marker; it sits behind every pending event
    await _queue.put(None)
    await _worker
    _queue = None
    _worker = None
    logger.info("Event feed stopped")
