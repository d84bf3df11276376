from __future__ import annotations

import logging
from typing import Iterable

from nailbook.application.ports.booking_gateway import BookingGatewayPort, InitialData
from nailbook.domain.entities.appointment import Appointment
from nailbook.domain.entities.leave import Leave


class MockBookingGateway(BookingGatewayPort):
    """In-memory store. Like the real endpoint it accepts overlapping bookings."""

    def __init__(
        self,
        appointments: Iterable[Appointment] | None = None,
        leaves: Iterable[Leave] | None = None,
        fail_creates: bool = False,
    ) -> None:
        self._appointments: dict[str, Appointment] = {a.appointment_id: a for a in appointments or ()}
        self._leaves: list[Leave] = list(leaves or ())
        self.fail_creates = fail_creates
        self.create_calls = 0
        self._logger = logging.getLogger(__name__)

    def is_configured(self) -> bool:
        return True

    def fetch_appointments(self) -> list[Appointment]:
        return list(self._appointments.values())

    def fetch_leaves(self) -> list[Leave]:
        return list(self._leaves)

    def fetch_initial_data(self) -> InitialData:
        return InitialData(appointments=self.fetch_appointments(), leaves=self.fetch_leaves())

    def create_appointment(self, appointment: Appointment) -> bool:
        self.create_calls += 1
        if self.fail_creates:
            self._logger.info("Mock create rejected", extra={"appointment_id": appointment.appointment_id})
            return False
        self._appointments[appointment.appointment_id] = appointment
        self._logger.info(
            "Mock appointment created",
            extra={
                "appointment_id": appointment.appointment_id,
                "stylist_id": appointment.stylist_id,
                "date": appointment.date.isoformat(),
                "time": appointment.time,
            },
        )
        return True

    def cancel_appointment(self, appointment_id: str) -> bool:
        if appointment_id in self._appointments:
            del self._appointments[appointment_id]
            self._logger.info("Mock appointment cancelled", extra={"appointment_id": appointment_id})
            return True
        return False
