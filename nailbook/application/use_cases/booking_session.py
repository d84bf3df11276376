from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Callable
from zoneinfo import ZoneInfo

from nailbook.application import messages
from nailbook.application.exceptions import (
    BookingInFlightError,
    InvalidTransitionError,
    SlotConflictError,
)
from nailbook.application.ports.booking_gateway import BookingGatewayPort
from nailbook.application.ports.identity import IdentityPort
from nailbook.application.ports.reference_catalog import ReferenceCatalogPort
from nailbook.application.use_cases.availability import AvailabilityEngine
from nailbook.application.utils.time_grid import format_minutes, to_minutes
from nailbook.domain.entities.appointment import Appointment, new_appointment_id
from nailbook.domain.entities.booking_state import BookingState, BookingStep
from nailbook.domain.entities.leave import Leave
from nailbook.domain.entities.profile import Profile
from nailbook.domain.entities.service import Service
from nailbook.domain.entities.slot import SlotList
from nailbook.domain.entities.stylist import ANY_STYLIST


class BookingSession:
    """One client's walk through service -> stylist -> date -> time -> confirm.

    Steps move strictly one at a time. A rejected operation raises
    InvalidTransitionError and leaves the state untouched. The appointment is
    only written by confirm(), which runs at most once at a time; while it
    runs every other mutator raises BookingInFlightError.
    """

    def __init__(
        self,
        engine: AvailabilityEngine,
        catalog: ReferenceCatalogPort,
        gateway: BookingGatewayPort,
        identity: IdentityPort,
        timezone: ZoneInfo,
        anonymous_name: str = "Guest",
        today: Callable[[], date] | None = None,
    ) -> None:
        self._engine = engine
        self._catalog = catalog
        self._gateway = gateway
        self._identity = identity
        self._timezone = timezone
        self._anonymous_name = anonymous_name
        self._today = today or (lambda: datetime.now(self._timezone).date())
        self._state = BookingState()
        self._appointments: list[Appointment] = []
        self._leaves: list[Leave] = []
        self._profile: Profile | None = None
        self._confirm_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> BookingState:
        return self._state

    @property
    def appointments(self) -> list[Appointment]:
        return list(self._appointments)

    @property
    def leaves(self) -> list[Leave]:
        return list(self._leaves)

    @property
    def profile(self) -> Profile | None:
        return self._profile

    @property
    def display_name(self) -> str:
        return self._profile.display_name if self._profile else self._anonymous_name

    @property
    def is_submitting(self) -> bool:
        return self._confirm_lock.locked()

    def is_configured(self) -> bool:
        return self._gateway.is_configured()

    def load(self, access_token: str | None = None) -> None:
        """Fetch appointments, leaves and the platform profile. Never raises for remote issues."""
        data = self._gateway.fetch_initial_data()
        self._appointments = list(data.appointments)
        self._leaves = list(data.leaves)
        self._profile = self._identity.get_profile(access_token)
        self._logger.info(
            "Booking session loaded",
            extra={"status": f"appointments={len(self._appointments)} leaves={len(self._leaves)}"},
        )

    # -- selections -------------------------------------------------------

    def select_service(self, service_id: str) -> BookingState:
        self._ensure_idle()
        self._require_step(BookingStep.SERVICE)
        if self._catalog.get_service(service_id) is None:
            raise InvalidTransitionError(f"Unknown service: {service_id}")
        self._state = replace(self._state, service_id=service_id, time=None, last_error=None)
        return self._state

    def select_stylist(self, stylist_id: str) -> BookingState:
        self._ensure_idle()
        self._require_step(BookingStep.STYLIST)
        if stylist_id != ANY_STYLIST and self._catalog.get_stylist(stylist_id) is None:
            raise InvalidTransitionError(f"Unknown stylist: {stylist_id}")
        self._state = replace(self._state, stylist_id=stylist_id, time=None, last_error=None)
        return self._state

    def select_date(self, day: date) -> BookingState:
        self._ensure_idle()
        self._require_step(BookingStep.DATE)
        if day < self._today():
            raise InvalidTransitionError("Cannot book a date in the past")
        self._state = replace(self._state, date=day, time=None, last_error=None)
        return self._state

    def select_time(self, time: str) -> BookingState:
        self._ensure_idle()
        self._require_step(BookingStep.TIME)
        normalized = format_minutes(to_minutes(time))
        if normalized not in self._engine.grid():
            raise InvalidTransitionError(f"{normalized} is not a bookable time")
        if not self._is_bookable(normalized):
            raise InvalidTransitionError(f"{normalized} is no longer available")
        self._state = replace(self._state, time=normalized, last_error=None)
        return self._state

    def slots(self) -> SlotList:
        service = self._selected_service()
        if self._state.date is None:
            raise InvalidTransitionError("Select a date first")
        return self._engine.slot_list(
            service, self._state.date, self._state.stylist_id, self._appointments, self._leaves
        )

    # -- navigation -------------------------------------------------------

    def next(self) -> BookingState:
        self._ensure_idle()
        step = self._state.step
        if step == BookingStep.SERVICE:
            self._selected_service()
            return self._move(BookingStep.STYLIST)
        if step == BookingStep.STYLIST:
            if self._state.date is None:
                self._state = replace(self._state, date=self._today())
            return self._move(BookingStep.DATE)
        if step == BookingStep.DATE:
            if self._state.date is None or self._state.date < self._today():
                raise InvalidTransitionError("Select a date that is not in the past")
            return self._move(BookingStep.TIME)
        if step == BookingStep.TIME:
            if self._state.time is None:
                raise InvalidTransitionError("Select a time first")
            if not self._is_bookable(self._state.time):
                raise InvalidTransitionError(f"{self._state.time} is no longer available")
            return self._move(BookingStep.CONFIRM)
        raise InvalidTransitionError(f"Cannot advance from {step.name}")

    def back(self) -> BookingState:
        self._ensure_idle()
        step = self._state.step
        if step in (BookingStep.SERVICE, BookingStep.SUCCESS):
            raise InvalidTransitionError(f"Cannot go back from {step.name}")
        return self._move(BookingStep(step - 1))

    def reset(self) -> BookingState:
        self._ensure_idle()
        self._state = BookingState()
        return self._state

    # -- commit -----------------------------------------------------------

    def confirm(self) -> BookingState:
        self._require_step(BookingStep.CONFIRM)
        if not self._confirm_lock.acquire(blocking=False):
            raise BookingInFlightError("A booking is already being submitted")
        try:
            return self._submit()
        finally:
            self._confirm_lock.release()

    def _submit(self) -> BookingState:
        service = self._selected_service()
        day, time = self._state.date, self._state.time
        if day is None or time is None:
            raise InvalidTransitionError("Booking is missing a date or time")

        stylist_id = self._state.stylist_id
        if stylist_id == ANY_STYLIST:
            stylist_id = self._engine.assign_stylist(service, day, time, self._appointments, self._leaves)

        appointment = Appointment(
            appointment_id=new_appointment_id(),
            service_id=service.service_id,
            stylist_id=stylist_id,
            date=day,
            time=time,
            duration_minutes=service.duration_minutes,
            user_name=self.display_name,
        )

        if not self._gateway.create_appointment(appointment):
            self._logger.warning(
                "Booking rejected",
                extra={"appointment_id": appointment.appointment_id, "date": day.isoformat(), "time": time},
            )
            self._state = replace(
                self._state, step=BookingStep.TIME, time=None, last_error=messages.SLOT_TAKEN
            )
            raise SlotConflictError(messages.SLOT_TAKEN)

        self._appointments.append(appointment)
        self._state = replace(
            self._state,
            step=BookingStep.SUCCESS,
            appointment_id=appointment.appointment_id,
            assigned_stylist_id=stylist_id,
            last_error=None,
        )
        self._logger.info(
            "Booking completed",
            extra={
                "appointment_id": appointment.appointment_id,
                "stylist_id": stylist_id,
                "date": day.isoformat(),
                "time": time,
            },
        )
        return self._state

    # -- my bookings ------------------------------------------------------

    def my_appointments(self) -> list[Appointment]:
        if self._profile is None:
            # anonymous clients share one display name, so they own nothing
            return []
        mine = [a for a in self._appointments if a.user_name == self.display_name]
        return sorted(mine, key=lambda a: (a.date, to_minutes(a.time)))

    def cancel(self, appointment_id: str) -> bool:
        self._ensure_idle()
        if self._profile is None:
            raise InvalidTransitionError("Log in to manage bookings")
        if not any(a.appointment_id == appointment_id for a in self.my_appointments()):
            raise InvalidTransitionError(f"Unknown appointment: {appointment_id}")
        if not self._gateway.cancel_appointment(appointment_id):
            return False
        self._appointments = [a for a in self._appointments if a.appointment_id != appointment_id]
        return True

    # -- helpers ----------------------------------------------------------

    def _ensure_idle(self) -> None:
        if self._confirm_lock.locked():
            raise BookingInFlightError("A booking is being submitted")

    def _require_step(self, step: BookingStep) -> None:
        if self._state.step != step:
            raise InvalidTransitionError(f"Not allowed at {self._state.step.name}, expected {step.name}")

    def _move(self, step: BookingStep) -> BookingState:
        self._state = replace(self._state, step=step, last_error=None)
        return self._state

    def _selected_service(self) -> Service:
        service = self._catalog.get_service(self._state.service_id) if self._state.service_id else None
        if service is None:
            raise InvalidTransitionError("Select a service first")
        return service

    def _is_bookable(self, time: str) -> bool:
        service = self._selected_service()
        if self._state.date is None:
            return False
        return self._engine.is_slot_bookable(
            service, self._state.date, self._state.stylist_id, time, self._appointments, self._leaves
        )
