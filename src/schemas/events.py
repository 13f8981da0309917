"""SystemEvent schema — the event type that flows through the screener.

Session transitions, data loads and eligibility checks each emit a
SystemEvent. Subscribers (the audit logger) consume them asynchronously.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """All event types emitted by the system."""

    # Session lifecycle
    SESSION_STARTED = "session.started"
    SESSION_STEP_CHANGED = "session.step_changed"
    SESSION_VALIDATION_FAILED = "session.validation_failed"
    SESSION_SUBMITTED = "session.submitted"
    SESSION_RESTARTED = "session.restarted"

    # Benefits catalog
    DATA_LOADED = "data.loaded"
    DATA_LOAD_FAILED = "data.load_failed"

    # Eligibility
    ELIGIBILITY_CHECKED = "eligibility.checked"


class SystemEvent(BaseModel):
    """Immutable event record. Consumed by the audit logger."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    event_type: EventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Not every event belongs to a session (data loads don't)
    session_id: uuid.UUID | None = None

    data: dict[str, Any] = Field(default_factory=dict)

    source_module: str | None = Field(default=None, description="Module that emitted this event")

    model_config = {"frozen": True}
