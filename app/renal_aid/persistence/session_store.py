"""
Purpose: process-wide registry of active decision-aid sessions (in-memory).
Why: one place that knows which sessions are alive, so expired ones can be
swept and counted. Nothing is written to disk; a restart forgets everything.

What is inside:
InMemorySessionStore keyed by session id. Expiry is read from the stored
Session's expires_at, so extending a session in the controller extends it
here too.

The Streamlit app shares one instance between browser tabs through
st.cache_resource, hence the lock.

Testing:
In-memory: simple state tests with an injected clock.
"""

from __future__ import annotations
import logging
import threading
import time
from typing import Optional

from ..config import SESSION_DURATION_SECONDS
from ..interfaces import Clock
from ..models import Session

logger = logging.getLogger(__name__)


class InMemorySessionStore:
    def __init__(
        self,
        ttl_seconds: int = SESSION_DURATION_SECONDS,
        clock: Clock = time.time,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def _expired(self, session: Session, now: float) -> bool:
        return session.expires_at <= now

    def create(self, session: Session) -> Session:
        with self._lock:
            self._sessions[session.id] = session
            count = len(self._sessions)
        logger.info("Session created: %s (active: %d)", session.id, count)
        return session

    def get(self, session_id: str) -> Optional[Session]:
        """The live session, or None; an expired entry is dropped on sight."""
        now = self.clock()
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if self._expired(session, now):
                del self._sessions[session_id]
                logger.info("Session expired: %s", session_id)
                return None
            return session

    def touch(self, session_id: str) -> Optional[Session]:
        """Record activity and push expiry out by the store's TTL."""
        session = self.get(session_id)
        if session is None:
            return None
        now = self.clock()
        session.last_activity_at = now
        session.expires_at = now + self.ttl_seconds
        return session

    def delete(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info("Session deleted: %s", session_id)
        return removed

    def active_count(self) -> int:
        now = self.clock()
        with self._lock:
            return sum(1 for s in self._sessions.values() if not self._expired(s, now))

    def cleanup(self) -> int:
        """Remove every expired session and return how many were removed."""
        now = self.clock()
        with self._lock:
            expired = [sid for sid, s in self._sessions.items() if self._expired(s, now)]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info("Cleaned up %d expired sessions", len(expired))
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()
