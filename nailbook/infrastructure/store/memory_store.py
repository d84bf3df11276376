from __future__ import annotations

import threading
import uuid
from collections import OrderedDict

from nailbook.application.ports.session_store import SessionStorePort
from nailbook.application.use_cases.booking_session import BookingSession


class MemorySessionStore(SessionStorePort):
    def __init__(self, max_sessions: int = 1000) -> None:
        self._sessions: OrderedDict[str, BookingSession] = OrderedDict()
        self._lock = threading.Lock()
        self._max_sessions = max_sessions

    def put(self, session: BookingSession) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._sessions[session_id] = session
            while len(self._sessions) > self._max_sessions:
                self._sessions.popitem(last=False)
        return session_id

    def get(self, session_id: str) -> BookingSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)
