#!/usr/bin/env python3
"""
Interactive local booking harness (no HTTP, no LINE).

Usage:
  python3 scripts/book_local.py

What it does:
- Builds a BookingSession wired to the in-memory gateway
- Walks service -> stylist -> date -> time -> confirm from the terminal
- Prints the slot grid with closed / fully booked notices
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from zoneinfo import ZoneInfo

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

load_dotenv()

from nailbook.application import messages
from nailbook.application.exceptions import InvalidTransitionError, MalformedTimeError, SlotConflictError
from nailbook.application.use_cases.availability import AvailabilityEngine
from nailbook.application.use_cases.booking_session import BookingSession
from nailbook.core.config import settings
from nailbook.domain.entities.booking_state import BookingStep
from nailbook.domain.entities.stylist import ANY_STYLIST
from nailbook.infrastructure.catalog.reference_catalog_store import ReferenceCatalogStore
from nailbook.infrastructure.gateway.mock_gateway import MockBookingGateway
from nailbook.infrastructure.line.mock_identity import MockIdentity


def _build_session() -> BookingSession:
    catalog = ReferenceCatalogStore()
    engine = AvailabilityEngine(
        catalog=catalog,
        opening_hour=settings.OPENING_HOUR,
        closing_hour=settings.CLOSING_HOUR,
        weekly_closed_day=settings.WEEKLY_CLOSED_DAY,
        slot_step_minutes=settings.SLOT_STEP_MINUTES,
    )
    session = BookingSession(
        engine=engine,
        catalog=catalog,
        gateway=MockBookingGateway(),
        identity=MockIdentity(),
        timezone=ZoneInfo(settings.SHOP_TIMEZONE),
        anonymous_name=settings.ANONYMOUS_DISPLAY_NAME,
    )
    session.load()
    return session


def _prompt(session: BookingSession, catalog: ReferenceCatalogStore) -> None:
    step = session.state.step
    if step == BookingStep.SERVICE:
        for svc in catalog.list_services():
            print(f"  {svc.service_id:4} {svc.display_name} ({svc.duration_minutes} min)")
        print("select with: s <service_id>")
    elif step == BookingStep.STYLIST:
        print(f"  {ANY_STYLIST:4} no preference")
        for stylist in catalog.list_stylists():
            print(f"  {stylist.stylist_id:4} {stylist.display_name}")
        print("select with: s <stylist_id>")
    elif step == BookingStep.DATE:
        print(f"date: {session.state.date}  (select with: s YYYY-MM-DD)")
    elif step == BookingStep.TIME:
        slot_list = session.slots()
        if slot_list.closed:
            print(messages.SHOP_CLOSED)
        elif slot_list.fully_booked:
            print(messages.FULLY_BOOKED)
        else:
            print("  " + " ".join(s.time if s.bookable else "--:--" for s in slot_list))
        print("select with: s HH:MM")
    elif step == BookingStep.CONFIRM:
        print(f"confirm {session.state} ? (c to confirm)")
    elif step == BookingStep.SUCCESS:
        print(f"Booked! appointment {session.state.appointment_id} with {session.state.assigned_stylist_id}")
        print("r to start over")


def _select(session: BookingSession, value: str) -> None:
    step = session.state.step
    if step == BookingStep.SERVICE:
        session.select_service(value)
    elif step == BookingStep.STYLIST:
        session.select_stylist(value)
    elif step == BookingStep.DATE:
        session.select_date(date.fromisoformat(value))
    elif step == BookingStep.TIME:
        session.select_time(value)
    else:
        raise InvalidTransitionError(f"Nothing to select at {step.name}")


def main() -> None:
    session = _build_session()
    catalog = ReferenceCatalogStore()
    print("\nLocal Booking Harness")
    print("-" * 60)
    print("Commands: s <value> (select), n (next), b (back), c (confirm), r (reset), m (my bookings), q (quit)")
    print("-" * 60)

    while True:
        print(f"\n[{session.state.step.name}]")
        _prompt(session, catalog)
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        cmd, _, arg = line.partition(" ")
        try:
            if cmd == "q":
                return
            if cmd == "s":
                _select(session, arg.strip())
            elif cmd == "n":
                session.next()
            elif cmd == "b":
                session.back()
            elif cmd == "c":
                session.confirm()
            elif cmd == "r":
                session.reset()
            elif cmd == "m":
                for appt in session.my_appointments():
                    print(f"  {appt.appointment_id} {appt.date} {appt.time} {appt.service_id} {appt.stylist_id}")
            else:
                print("unknown command")
        except (InvalidTransitionError, MalformedTimeError, SlotConflictError, ValueError) as e:
            print(f"! {e}")


if __name__ == "__main__":
    main()
