"""Process-local storage for previewed imports awaiting confirmation."""

from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import Protocol

from fleetdata.config import get_settings
from fleetdata.domain.entities import ImportSession

logger = logging.getLogger(__name__)


class ImportSessionStore(Protocol):
    """Storage contract used by the preview and confirm use cases."""

    def put(self, session: ImportSession) -> None: ...

    def take(self, session_id: str) -> ImportSession | None: ...

    def schedule_eviction(self, session_id: str, ttl_seconds: float) -> None: ...


class InMemoryImportSessionStore:
    """Thread-safe store whose only read is an atomic remove.

    Confirm and the eviction timer both go through :meth:`take`, so whichever
    runs first owns the session and the other observes it as absent.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, ImportSession] = {}
        self._timers: dict[str, threading.Timer] = {}

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def put(self, session: ImportSession) -> None:
        with self._lock:
            self._sessions[session.session_id] = session

    def take(self, session_id: str) -> ImportSession | None:
        """Remove and return the session, cancelling its pending eviction."""

        with self._lock:
            session = self._sessions.pop(session_id, None)
            timer = self._timers.pop(session_id, None)
        if timer is not None:
            timer.cancel()
        return session

    def schedule_eviction(self, session_id: str, ttl_seconds: float) -> None:
        timer = threading.Timer(ttl_seconds, self._evict, args=(session_id,))
        timer.daemon = True
        with self._lock:
            previous = self._timers.pop(session_id, None)
            self._timers[session_id] = timer
        if previous is not None:
            previous.cancel()
        timer.start()

    def clear(self) -> None:
        with self._lock:
            timers = list(self._timers.values())
            self._sessions.clear()
            self._timers.clear()
        for timer in timers:
            timer.cancel()

    def _evict(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(session_id, None)
            self._timers.pop(session_id, None)
        if session is not None:
            logger.debug("Evicted expired import session %s", session_id)


@lru_cache(maxsize=1)
def get_import_session_store() -> InMemoryImportSessionStore:
    """Return the store shared by every request of this process."""

    return InMemoryImportSessionStore()


def session_ttl_seconds() -> float:
    return get_settings().import_session_ttl_minutes * 60


__all__ = [
    "ImportSessionStore",
    "InMemoryImportSessionStore",
    "get_import_session_store",
    "session_ttl_seconds",
]
