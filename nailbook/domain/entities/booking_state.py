from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import IntEnum

from nailbook.domain.entities.stylist import ANY_STYLIST


class BookingStep(IntEnum):
    SERVICE = 1
    STYLIST = 2
    DATE = 3
    TIME = 4
    CONFIRM = 5
    SUCCESS = 6


@dataclass(frozen=True)
class BookingState:
    step: BookingStep = BookingStep.SERVICE
    service_id: str | None = None
    stylist_id: str = ANY_STYLIST  # selector, may be "any"
    date: date | None = None
    time: str | None = None  # HH:MM
    appointment_id: str | None = None  # set once SUCCESS is reached
    assigned_stylist_id: str | None = None  # resolved stylist of the created appointment
    last_error: str | None = None  # user-visible notice from the last failed action
