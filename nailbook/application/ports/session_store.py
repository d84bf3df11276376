from abc import ABC, abstractmethod

from nailbook.application.use_cases.booking_session import BookingSession


class SessionStorePort(ABC):
    @abstractmethod
    def put(self, session: BookingSession) -> str:
        """Store a new session and return its id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> BookingSession | None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> None:
        raise NotImplementedError
