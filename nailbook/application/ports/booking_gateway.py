from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from nailbook.domain.entities.appointment import Appointment
from nailbook.domain.entities.leave import Leave


@dataclass(frozen=True)
class InitialData:
    appointments: list[Appointment] = field(default_factory=list)
    leaves: list[Leave] = field(default_factory=list)


class BookingGatewayPort(ABC):
    """Remote appointment store. Fetches fail soft; writes report success as a bool."""

    @abstractmethod
    def is_configured(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def fetch_appointments(self) -> list[Appointment]:
        """Returns an empty list on any transport error."""
        raise NotImplementedError

    @abstractmethod
    def fetch_leaves(self) -> list[Leave]:
        """Returns an empty list on any transport error."""
        raise NotImplementedError

    @abstractmethod
    def fetch_initial_data(self) -> InitialData:
        """Appointments and leaves in one round-trip; empty on any transport error."""
        raise NotImplementedError

    @abstractmethod
    def create_appointment(self, appointment: Appointment) -> bool:
        """Called exactly once per confirm. Returns True if stored."""
        raise NotImplementedError

    @abstractmethod
    def cancel_appointment(self, appointment_id: str) -> bool:
        """Returns True if cancelled."""
        raise NotImplementedError
