"""Builder sessions kept in memory by the API process."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from cvinsight.builder.models import new_id
from cvinsight.builder.panels import AboutPanel, SectionPanel, SkillsPanel, build_panels
from cvinsight.builder.store import ResumeStore

logger = logging.getLogger(__name__)

__all__ = ["BuilderSession", "SessionRegistry", "UnknownSessionError"]


class UnknownSessionError(KeyError):
    """Raised when a builder session id is not registered."""


@dataclass
class BuilderSession:
    """One resume being edited, with the panels that edit it.

    Attributes:
        lock: Held by request handlers for each read-modify-write on the
            store, so concurrent requests to one session never lose writes.
        last_used: Registry clock reading of the last lookup.
    """

    store: ResumeStore
    id: str = field(default_factory=new_id)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)
    last_used: float = 0.0

    def __post_init__(self) -> None:
        self.about = AboutPanel(self.store)
        self.sections: dict[str, SectionPanel] = build_panels(self.store)
        self.skills = SkillsPanel(self.store)


class SessionRegistry:
    """Thread-safe map of session id to :class:`BuilderSession`.

    Sessions idle for longer than *ttl* seconds are dropped on the next
    ``create`` or ``get``. Once *max_sessions* are open, creating another
    evicts the least recently used one. ``None`` disables either limit.
    """

    def __init__(
        self,
        *,
        ttl: float | None = None,
        max_sessions: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self.max_sessions = max_sessions
        self._clock = clock
        self._sessions: dict[str, BuilderSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, *, seeded: bool = True) -> BuilderSession:
        store = ResumeStore.seeded() if seeded else ResumeStore()
        session = BuilderSession(store=store)
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            if self.max_sessions is not None:
                while len(self._sessions) >= self.max_sessions:
                    oldest = min(self._sessions.values(), key=lambda s: s.last_used)
                    del self._sessions[oldest.id]
                    logger.info("Evicted builder session %s at the %d session limit", oldest.id, self.max_sessions)
            session.last_used = now
            self._sessions[session.id] = session
        logger.debug("Opened builder session %s", session.id)
        return session

    def get(self, session_id: str) -> BuilderSession:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            try:
                session = self._sessions[session_id]
            except KeyError:
                raise UnknownSessionError(session_id) from None
            session.last_used = now
            return session

    def discard(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.debug("Closed builder session %s", session_id)
        return removed is not None

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def _purge_expired(self, now: float) -> None:
        # Caller holds self._lock.
        if self.ttl is None:
            return
        expired = [sid for sid, s in self._sessions.items() if now - s.last_used > self.ttl]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Expired %d idle builder sessions", len(expired))
