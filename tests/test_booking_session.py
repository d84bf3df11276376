"""
Tests for the booking session step machine.
"""

from __future__ import annotations

import threading
from datetime import date
from zoneinfo import ZoneInfo

import httpx
import pytest

from nailbook.application import messages
from nailbook.application.exceptions import BookingInFlightError, InvalidTransitionError, SlotConflictError
from nailbook.application.use_cases.availability import AvailabilityEngine
from nailbook.application.use_cases.booking_session import BookingSession
from nailbook.domain.entities.appointment import Appointment
from nailbook.domain.entities.booking_state import BookingState, BookingStep
from nailbook.domain.entities.leave import Leave
from nailbook.domain.entities.profile import Profile
from nailbook.domain.entities.stylist import ANY_STYLIST
from nailbook.infrastructure.catalog.reference_catalog_store import ReferenceCatalogStore
from nailbook.infrastructure.gateway.gas_gateway import GasBookingGateway
from nailbook.infrastructure.gateway.mock_gateway import MockBookingGateway
from nailbook.infrastructure.line.mock_identity import MockIdentity

TODAY = date(2024, 5, 31)
SATURDAY = date(2024, 6, 1)


def _session(gateway=None, profile: Profile | None = Profile("Ms. Lin", "https://example.com/p.jpg")) -> BookingSession:
    catalog = ReferenceCatalogStore()
    engine = AvailabilityEngine(catalog=catalog)
    session = BookingSession(
        engine=engine,
        catalog=catalog,
        gateway=gateway or MockBookingGateway(),
        identity=MockIdentity(profile),
        timezone=ZoneInfo("Asia/Taipei"),
        anonymous_name="Guest",
        today=lambda: TODAY,
    )
    session.load(access_token="token")
    return session


def _to_time_step(session: BookingSession, service_id: str = "h1", stylist_id: str = ANY_STYLIST) -> None:
    session.select_service(service_id)
    session.next()
    session.select_stylist(stylist_id)
    session.next()
    session.select_date(SATURDAY)
    session.next()
    assert session.state.step == BookingStep.TIME


def _appt(stylist_id: str, time: str, duration: int = 60, appt_id: str = "x1", user_name: str = "Other") -> Appointment:
    return Appointment(appt_id, "h1", stylist_id, SATURDAY, time, duration, user_name)


def test_cannot_advance_without_service():
    session = _session()
    with pytest.raises(InvalidTransitionError):
        session.next()
    assert session.state == BookingState()


def test_cannot_go_below_first_step():
    session = _session()
    with pytest.raises(InvalidTransitionError):
        session.back()
    session.select_service("h1")
    session.next()
    assert session.back().step == BookingStep.SERVICE
    assert session.state.service_id == "h1"


def test_unknown_selections_rejected():
    session = _session()
    with pytest.raises(InvalidTransitionError):
        session.select_service("nope")
    session.select_service("h1")
    session.next()
    with pytest.raises(InvalidTransitionError):
        session.select_stylist("nobody")
    assert session.state.stylist_id == ANY_STYLIST


def test_selection_only_at_its_own_step():
    session = _session()
    with pytest.raises(InvalidTransitionError):
        session.select_time("11:00")
    with pytest.raises(InvalidTransitionError):
        session.confirm()


def test_date_defaults_to_today_and_past_dates_rejected():
    session = _session()
    session.select_service("h1")
    session.next()
    session.next()
    assert session.state.step == BookingStep.DATE
    assert session.state.date == TODAY
    with pytest.raises(InvalidTransitionError):
        session.select_date(date(2024, 5, 30))
    assert session.state.date == TODAY


def test_cannot_confirm_without_time():
    session = _session()
    _to_time_step(session)
    with pytest.raises(InvalidTransitionError):
        session.next()
    assert session.state.step == BookingStep.TIME


def test_unbookable_time_rejected():
    gateway = MockBookingGateway(appointments=[_appt("s1", "14:00", 90)])
    session = _session(gateway)
    _to_time_step(session, stylist_id="s1")

    with pytest.raises(InvalidTransitionError):
        session.select_time("14:30")
    with pytest.raises(InvalidTransitionError):
        session.select_time("14:15")  # off grid
    assert session.select_time("15:30").time == "15:30"


def test_successful_booking_reaches_success():
    gateway = MockBookingGateway()
    session = _session(gateway)
    _to_time_step(session, service_id="h2", stylist_id="s2")
    session.select_time("11:00")
    assert session.next().step == BookingStep.CONFIRM

    state = session.confirm()

    assert state.step == BookingStep.SUCCESS
    assert state.assigned_stylist_id == "s2"
    assert gateway.create_calls == 1
    stored = gateway.fetch_appointments()
    assert len(stored) == 1
    appt = stored[0]
    assert appt.appointment_id == state.appointment_id
    assert appt.stylist_id == "s2"
    assert appt.duration_minutes == 90
    assert appt.date == SATURDAY
    assert appt.time == "11:00"
    assert appt.user_name == "Ms. Lin"
    # the session sees its own booking
    assert session.appointments == stored


def test_any_selector_resolves_to_free_stylist():
    gateway = MockBookingGateway(appointments=[_appt("s1", "10:30", 90)])
    session = _session(gateway)
    _to_time_step(session)
    session.select_time("11:00")
    session.next()

    state = session.confirm()

    assert state.assigned_stylist_id == "s2"
    assert state.stylist_id == ANY_STYLIST
    assert all(a.stylist_id != ANY_STYLIST for a in gateway.fetch_appointments())


def test_failed_create_routes_back_to_time():
    gateway = MockBookingGateway(fail_creates=True)
    session = _session(gateway)
    _to_time_step(session)
    session.select_time("11:00")
    session.next()

    with pytest.raises(SlotConflictError):
        session.confirm()

    assert session.state.step == BookingStep.TIME
    assert session.state.time is None
    assert session.state.last_error == messages.SLOT_TAKEN
    assert gateway.create_calls == 1
    assert session.appointments == []


class _ReentrantGateway(MockBookingGateway):
    def __init__(self) -> None:
        super().__init__()
        self.session: BookingSession | None = None
        self.inner_error: Exception | None = None

    def create_appointment(self, appointment: Appointment) -> bool:
        try:
            self.session.confirm()
        except Exception as e:
            self.inner_error = e
        return super().create_appointment(appointment)


def test_double_confirm_is_ignored_while_in_flight():
    gateway = _ReentrantGateway()
    session = _session(gateway)
    gateway.session = session
    _to_time_step(session)
    session.select_time("11:00")
    session.next()

    session.confirm()

    assert isinstance(gateway.inner_error, BookingInFlightError)
    assert gateway.create_calls == 1
    assert session.state.step == BookingStep.SUCCESS
    assert session.is_submitting is False


def test_success_is_terminal_until_reset():
    session = _session()
    _to_time_step(session)
    session.select_time("12:00")
    session.next()
    session.confirm()

    with pytest.raises(InvalidTransitionError):
        session.next()
    with pytest.raises(InvalidTransitionError):
        session.back()

    assert session.reset() == BookingState()


def test_back_from_confirm_returns_to_time():
    session = _session()
    _to_time_step(session)
    session.select_time("12:00")
    session.next()
    state = session.back()
    assert state.step == BookingStep.TIME
    assert state.time == "12:00"


def test_changing_stylist_clears_time():
    session = _session()
    _to_time_step(session)
    session.select_time("12:00")
    session.back()
    session.back()
    session.select_stylist("s3")
    assert session.state.time is None


def test_slots_follow_current_selection():
    leaves = [Leave("", SATURDAY)]
    session = _session(MockBookingGateway(leaves=leaves))
    _to_time_step(session)
    slot_list = session.slots()
    assert slot_list.closed is True
    assert list(slot_list) == []
    with pytest.raises(InvalidTransitionError):
        session.select_time("12:00")


def test_anonymous_name_when_not_logged_in():
    session = _session(profile=None)
    assert session.profile is None
    assert session.display_name == "Guest"


def test_my_appointments_and_cancel():
    mine = _appt("s1", "16:00", appt_id="m1", user_name="Ms. Lin")
    theirs = _appt("s2", "16:00", appt_id="t1", user_name="Someone")
    gateway = MockBookingGateway(appointments=[mine, theirs])
    session = _session(gateway)

    assert [a.appointment_id for a in session.my_appointments()] == ["m1"]
    with pytest.raises(InvalidTransitionError):
        session.cancel("t1")

    assert session.cancel("m1") is True
    assert session.my_appointments() == []
    assert [a.appointment_id for a in gateway.fetch_appointments()] == ["t1"]


def test_unreachable_remote_degrades_to_empty():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    gateway = GasBookingGateway(
        url="https://script.google.com/macros/s/abc/exec",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    session = _session(gateway)

    assert session.appointments == []
    assert session.leaves == []
    _to_time_step(session)
    session.select_time("11:00")
    session.next()
    with pytest.raises(SlotConflictError):
        session.confirm()
    assert session.state.step == BookingStep.TIME


class _BlockingGateway(MockBookingGateway):
    def __init__(self) -> None:
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def create_appointment(self, appointment: Appointment) -> bool:
        self.entered.set()
        assert self.release.wait(timeout=5)
        return super().create_appointment(appointment)


def test_mutators_rejected_while_confirm_in_flight():
    gateway = _BlockingGateway()
    session = _session(gateway)
    _to_time_step(session)
    session.select_time("11:00")
    session.next()

    worker = threading.Thread(target=session.confirm)
    worker.start()
    try:
        assert gateway.entered.wait(timeout=5)
        assert session.is_submitting is True
        for mutate in (
            session.reset,
            session.back,
            session.next,
            lambda: session.select_time("12:00"),
            lambda: session.select_service("h2"),
            lambda: session.cancel("x1"),
        ):
            with pytest.raises(BookingInFlightError):
                mutate()
        with pytest.raises(BookingInFlightError):
            session.confirm()
    finally:
        gateway.release.set()
        worker.join(timeout=5)

    assert session.is_submitting is False
    assert session.state.step == BookingStep.SUCCESS
    assert session.state.service_id == "h1"
    assert session.state.time == "11:00"
    assert gateway.create_calls == 1


def test_anonymous_client_owns_no_bookings():
    guest_booking = _appt("s1", "16:00", appt_id="g1", user_name="Guest")
    gateway = MockBookingGateway(appointments=[guest_booking])
    session = _session(gateway, profile=None)

    assert session.my_appointments() == []
    with pytest.raises(InvalidTransitionError):
        session.cancel("g1")
    assert [a.appointment_id for a in gateway.fetch_appointments()] == ["g1"]
