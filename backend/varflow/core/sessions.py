"""
In-memory registry of engine sessions.

Sessions live only as long as the process. The registry is bounded by
SESSION_MAX_COUNT; the least recently used session is dropped first.
"""

import logging
import threading
from collections import OrderedDict
from uuid import uuid4

from varflow.core.config import settings
from varflow.engines.session import EngineSession

_log = logging.getLogger(__name__)


class SessionNotFoundError(LookupError):
    """Raised when a session id is unknown (never created, deleted or evicted)."""

    pass


class SessionRegistry:
    def __init__(self, max_sessions: int | None = None) -> None:
        self._sessions: OrderedDict[str, EngineSession] = OrderedDict()
        self._lock = threading.Lock()
        self._max = max_sessions if max_sessions is not None else settings.SESSION_MAX_COUNT

    def create(self) -> EngineSession:
        session = EngineSession(uuid4().hex)
        evicted: list[EngineSession] = []
        with self._lock:
            self._sessions[session.id] = session
            while len(self._sessions) > self._max:
                _, old = self._sessions.popitem(last=False)
                evicted.append(old)
        for old in evicted:
            _log.info("Session %s evicted (limit %d)", old.id, self._max)
            old.close()
        return session

    def get(self, session_id: str) -> EngineSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(f"Session {session_id!r} not found")
            self._sessions.move_to_end(session_id)
            return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFoundError(f"Session {session_id!r} not found")
        session.close()

    def clear(self) -> int:
        """Close and drop every session; returns how many were dropped."""
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.close()
        return len(sessions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


_registry: SessionRegistry | None = None
_registry_lock = threading.Lock()


def get_session_registry() -> SessionRegistry:
    """Return the singleton SessionRegistry (thread-safe double-checked locking)."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = SessionRegistry()
    return _registry
