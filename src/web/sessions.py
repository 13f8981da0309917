"""In-memory store of questionnaire sessions, keyed by the session cookie.

The store is bounded two ways: sessions idle for longer than the timeout
are dropped, and once ``max_sessions`` is reached the least recently used
session makes room for a new one.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field

from src.models.enums import CatalogStatus, ScreenerSection
from src.questionnaire.controller import QuestionnaireController
from src.schemas.benefits import BenefitRecord

logger = logging.getLogger(__name__)


@dataclass
class ScreenerSession:
    """One browser's questionnaire plus the matches from its last submission."""

    controller: QuestionnaireController
    matches: list[BenefitRecord] | None = None
    last_seen: float = field(default_factory=time.monotonic)

    @property
    def id(self) -> uuid.UUID:
        return self.controller.session_id

    def section(self, catalog_status: CatalogStatus) -> ScreenerSection:
        """Pick the one visible section: data problems win over session state."""
        if catalog_status == CatalogStatus.LOADING:
            return ScreenerSection.LOADING
        if catalog_status == CatalogStatus.ERROR:
            return ScreenerSection.ERROR
        if self.controller.is_submitted:
            return ScreenerSection.RESULTS
        return ScreenerSection.QUESTIONNAIRE

    def reset(self) -> None:
        self.controller.restart()
        self.matches = None


class SessionStore:
    """Sessions are never shared: each cookie maps to its own controller."""

    def __init__(
        self,
        max_sessions: int = 1000,
        idle_timeout: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_sessions < 1:
            msg = f"max_sessions must be at least 1, got {max_sessions}"
            raise ValueError(msg)
        self.max_sessions = max_sessions
        self.idle_timeout = idle_timeout
        self._clock = clock
        # Oldest activity first
        self._sessions: OrderedDict[uuid.UUID, ScreenerSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def get(self, raw_id: str | None) -> ScreenerSession | None:
        """Look up a live session and mark it as used. Expired ones are dropped."""
        if not raw_id:
            return None
        try:
            session_id = uuid.UUID(raw_id)
        except ValueError:
            logger.debug("Ignoring malformed session cookie: %s", raw_id)
            return None

        session = self._sessions.get(session_id)
        if session is None:
            return None

        now = self._clock()
        if self._is_expired(session, now):
            del self._sessions[session_id]
            logger.info("Session expired (session=%s)", session_id)
            return None

        session.last_seen = now
        self._sessions.move_to_end(session_id)
        return session

    def create(self) -> ScreenerSession:
        now = self._clock()
        self._sweep(now)
        while len(self._sessions) >= self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info("Session evicted, store full (session=%s)", evicted_id)

        session = ScreenerSession(controller=QuestionnaireController(), last_seen=now)
        self._sessions[session.id] = session
        logger.info("Session created (session=%s)", session.id)
        return session

    def _is_expired(self, session: ScreenerSession, now: float) -> bool:
        return now - session.last_seen > self.idle_timeout

    def _sweep(self, now: float) -> None:
        # Ordered by last activity, so stop at the first live session
        while self._sessions:
            session_id, session = next(iter(self._sessions.items()))
            if not self._is_expired(session, now):
                break
            del self._sessions[session_id]
            logger.info("Session expired (session=%s)", session_id)
