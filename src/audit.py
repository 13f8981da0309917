"""Audit sink: one log line per SystemEvent.

Registered with the event feed at startup, it receives every session and
catalog event. Formatting problems are logged and dropped.
"""

from __future__ import annotations

import logging

from src.schemas.events import SystemEvent

logger = logging.getLogger(__name__)


async def audit_on_event(event: SystemEvent) -> None:
    """Log one line per event with its payload."""
    try:
        logger.info(
            "audit event=%s session=%s source=%s data=%s",
            event.event_type.value,
            event.session_id,
            event.source_module,
            event.model_dump(mode="json")["data"],
        )
    except Exception:
        logger.exception("Failed to audit event: %s", event.event_type.value)
