from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date

from nailbook.application.utils.time_grid import to_minutes
from nailbook.domain.entities.stylist import ANY_STYLIST


def new_appointment_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class Appointment:
    appointment_id: str
    service_id: str
    stylist_id: str  # always a real stylist, resolved before persistence
    date: date
    time: str  # HH:MM
    duration_minutes: int  # copied from the service at creation
    user_name: str

    def __post_init__(self) -> None:
        if not self.stylist_id or self.stylist_id == ANY_STYLIST:
            raise ValueError("Appointment requires a concrete stylist")
        if self.duration_minutes <= 0:
            raise ValueError("Appointment duration must be positive")
        to_minutes(self.time)  # raises MalformedTimeError
