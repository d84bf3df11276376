from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Iterator, Sequence

from nailbook.application.exceptions import NoStylistAvailableError
from nailbook.application.ports.reference_catalog import ReferenceCatalogPort
from nailbook.application.utils.time_grid import end_minutes, grid_times, intervals_overlap, to_minutes
from nailbook.domain.entities.appointment import Appointment
from nailbook.domain.entities.leave import Leave
from nailbook.domain.entities.service import Service
from nailbook.domain.entities.slot import Slot, SlotList
from nailbook.domain.entities.stylist import ANY_STYLIST


class AvailabilityEngine:
    """Decides which slots can be booked and which stylist takes an "any" booking.

    Checks are advisory: they only see the appointments handed in, so a
    concurrent booking made elsewhere can still collide at the remote store.
    Service end times are not checked against closing time.
    """

    def __init__(
        self,
        catalog: ReferenceCatalogPort,
        opening_hour: int = 10,
        closing_hour: int = 20,
        weekly_closed_day: int | None = 2,
        slot_step_minutes: int = 30,
    ) -> None:
        if opening_hour > closing_hour:
            raise ValueError("Opening hour must not be after closing hour")
        self._catalog = catalog
        self._opening_hour = opening_hour
        self._closing_hour = closing_hour
        self._weekly_closed_day = weekly_closed_day
        self._slot_step_minutes = slot_step_minutes
        self._logger = logging.getLogger(__name__)

    def grid(self) -> list[str]:
        return list(grid_times(self._opening_hour, self._closing_hour, self._slot_step_minutes))

    def is_shop_closed(self, day: date, leaves: Iterable[Leave]) -> bool:
        if self._weekly_closed_day is not None and day.weekday() == self._weekly_closed_day:
            return True
        return any(leave.is_shop_wide and leave.date == day for leave in leaves)

    def is_stylist_bookable(
        self,
        service: Service,
        day: date,
        stylist_id: str,
        time: str,
        appointments: Sequence[Appointment],
        leaves: Sequence[Leave],
    ) -> bool:
        start = to_minutes(time)
        end = end_minutes(time, service.duration_minutes)

        if self.is_shop_closed(day, leaves):
            return False
        if any(leave.stylist_id == stylist_id and leave.date == day for leave in leaves):
            return False

        for appt in appointments:
            if appt.stylist_id != stylist_id or appt.date != day:
                continue
            appt_start = to_minutes(appt.time)
            appt_end = appt_start + appt.duration_minutes
            if intervals_overlap(start, end, appt_start, appt_end):
                return False
        return True

    def is_slot_bookable(
        self,
        service: Service,
        day: date,
        stylist_selector: str,
        time: str,
        appointments: Sequence[Appointment],
        leaves: Sequence[Leave],
    ) -> bool:
        if stylist_selector == ANY_STYLIST:
            return any(
                self.is_stylist_bookable(service, day, s.stylist_id, time, appointments, leaves)
                for s in self._catalog.list_stylists()
            )
        return self.is_stylist_bookable(service, day, stylist_selector, time, appointments, leaves)

    def first_available_stylist(
        self,
        service: Service,
        day: date,
        time: str,
        appointments: Sequence[Appointment],
        leaves: Sequence[Leave],
    ) -> str:
        for stylist in self._catalog.list_stylists():
            if self.is_stylist_bookable(service, day, stylist.stylist_id, time, appointments, leaves):
                return stylist.stylist_id
        raise NoStylistAvailableError(f"No stylist free on {day.isoformat()} at {time}")

    def assign_stylist(
        self,
        service: Service,
        day: date,
        time: str,
        appointments: Sequence[Appointment],
        leaves: Sequence[Leave],
    ) -> str:
        """Pick the first free stylist in roster order for an "any" booking.

        Falls back to the first stylist on the roster when nobody is free;
        the remote store has the final say on the booking.
        """
        try:
            return self.first_available_stylist(service, day, time, appointments, leaves)
        except NoStylistAvailableError as e:
            fallback = self._catalog.list_stylists()[0].stylist_id
            self._logger.warning(
                "No stylist available, falling back to first on roster",
                extra={"date": day.isoformat(), "time": time, "stylist_id": fallback, "error": str(e)},
            )
            return fallback

    def slot_list(
        self,
        service: Service,
        day: date,
        stylist_selector: str,
        appointments: Sequence[Appointment],
        leaves: Sequence[Leave],
    ) -> SlotList:
        appointments = tuple(appointments)
        leaves = tuple(leaves)

        def produce() -> Iterator[Slot]:
            for time in grid_times(self._opening_hour, self._closing_hour, self._slot_step_minutes):
                yield Slot(
                    time=time,
                    bookable=self.is_slot_bookable(service, day, stylist_selector, time, appointments, leaves),
                )

        return SlotList(closed=self.is_shop_closed(day, leaves), produce=produce)
