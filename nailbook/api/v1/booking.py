from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Response

from nailbook.api.v1.schemas import (
    AppointmentSchema,
    CatalogSchema,
    CategorySchema,
    ProfileSchema,
    SelectDateSchema,
    SelectServiceSchema,
    SelectStylistSchema,
    SelectTimeSchema,
    ServiceSchema,
    SessionSchema,
    SlotListSchema,
    SlotSchema,
    StylistSchema,
)
from nailbook.application import messages
from nailbook.application.exceptions import (
    BookingInFlightError,
    InvalidTransitionError,
    MalformedTimeError,
    SlotConflictError,
)
from nailbook.application.ports.reference_catalog import ReferenceCatalogPort
from nailbook.application.ports.session_store import SessionStorePort
from nailbook.application.use_cases.booking_session import BookingSession
from nailbook.domain.entities.appointment import Appointment
from nailbook.wiring.dependencies import get_reference_catalog, get_session_store, new_booking_session

router = APIRouter()
logger = logging.getLogger(__name__)


def _session_or_404(session_id: str, store: SessionStorePort) -> BookingSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _to_schema(session_id: str, session: BookingSession) -> SessionSchema:
    state = session.state
    configured = session.is_configured()
    profile = session.profile
    return SessionSchema(
        session_id=session_id,
        step=state.step.name,
        step_number=int(state.step),
        service_id=state.service_id,
        stylist_id=state.stylist_id,
        date=state.date,
        time=state.time,
        appointment_id=state.appointment_id,
        assigned_stylist_id=state.assigned_stylist_id,
        last_error=state.last_error,
        configured=configured,
        notice=None if configured else messages.NOT_CONFIGURED,
        submitting=session.is_submitting,
        profile=ProfileSchema(
            display_name=session.display_name,
            picture_ref=profile.picture_ref if profile else None,
        ),
    )


def _appointment_schema(appt: Appointment, catalog: ReferenceCatalogPort) -> AppointmentSchema:
    service = catalog.get_service(appt.service_id)
    stylist = catalog.get_stylist(appt.stylist_id)
    return AppointmentSchema(
        appointment_id=appt.appointment_id,
        service_id=appt.service_id,
        service_name=service.display_name if service else None,
        stylist_id=appt.stylist_id,
        stylist_name=stylist.display_name if stylist else None,
        date=appt.date,
        time=appt.time,
        duration_minutes=appt.duration_minutes,
        user_name=appt.user_name,
    )


def _apply(session_id: str, session: BookingSession, action) -> SessionSchema:
    try:
        action()
    except (InvalidTransitionError, MalformedTimeError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BookingInFlightError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _to_schema(session_id, session)


@router.get("/catalog", response_model=CatalogSchema)
def catalog(catalog: ReferenceCatalogPort = Depends(get_reference_catalog)):
    services = catalog.list_services()
    categories = [
        CategorySchema(
            key=key,
            label=label,
            services=[ServiceSchema.from_entity(s) for s in services if s.category == key],
        )
        for key, label in catalog.category_labels().items()
    ]
    stylists = [
        StylistSchema(stylist_id=s.stylist_id, display_name=s.display_name, image=s.image, greeting=s.greeting)
        for s in catalog.list_stylists()
    ]
    return CatalogSchema(categories=categories, stylists=stylists)


@router.post("/sessions", response_model=SessionSchema, status_code=201)
def create_session(
    x_line_access_token: str | None = Header(None),
    store: SessionStorePort = Depends(get_session_store),
    session: BookingSession = Depends(new_booking_session),
):
    session.load(access_token=x_line_access_token)
    session_id = store.put(session)
    logger.info("Session created", extra={"session_id": session_id})
    return _to_schema(session_id, session)


@router.get("/sessions/{session_id}", response_model=SessionSchema)
def get_session(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    return _to_schema(session_id, _session_or_404(session_id, store))


@router.put("/sessions/{session_id}/service", response_model=SessionSchema)
def select_service(session_id: str, req: SelectServiceSchema, store: SessionStorePort = Depends(get_session_store)):
    session = _session_or_404(session_id, store)
    return _apply(session_id, session, lambda: session.select_service(req.service_id))


@router.put("/sessions/{session_id}/stylist", response_model=SessionSchema)
def select_stylist(session_id: str, req: SelectStylistSchema, store: SessionStorePort = Depends(get_session_store)):
    session = _session_or_404(session_id, store)
    return _apply(session_id, session, lambda: session.select_stylist(req.stylist_id))


@router.put("/sessions/{session_id}/date", response_model=SessionSchema)
def select_date(session_id: str, req: SelectDateSchema, store: SessionStorePort = Depends(get_session_store)):
    session = _session_or_404(session_id, store)
    return _apply(session_id, session, lambda: session.select_date(req.date))


@router.put("/sessions/{session_id}/time", response_model=SessionSchema)
def select_time(session_id: str, req: SelectTimeSchema, store: SessionStorePort = Depends(get_session_store)):
    session = _session_or_404(session_id, store)
    return _apply(session_id, session, lambda: session.select_time(req.time))


@router.post("/sessions/{session_id}/next", response_model=SessionSchema)
def next_step(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session_or_404(session_id, store)
    return _apply(session_id, session, session.next)


@router.post("/sessions/{session_id}/back", response_model=SessionSchema)
def previous_step(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session_or_404(session_id, store)
    return _apply(session_id, session, session.back)


@router.post("/sessions/{session_id}/reset", response_model=SessionSchema)
def reset(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session_or_404(session_id, store)
    return _apply(session_id, session, session.reset)


@router.post("/sessions/{session_id}/confirm", response_model=SessionSchema)
def confirm(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session_or_404(session_id, store)
    try:
        session.confirm()
    except InvalidTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (SlotConflictError, BookingInFlightError) as e:
        logger.info("Confirm rejected", extra={"session_id": session_id, "error": str(e)})
        raise HTTPException(status_code=409, detail=str(e))
    return _to_schema(session_id, session)


@router.get("/sessions/{session_id}/slots", response_model=SlotListSchema)
def slots(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session_or_404(session_id, store)
    try:
        slot_list = session.slots()
    except InvalidTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    items = [SlotSchema(time=s.time, bookable=s.bookable) for s in slot_list]
    notice = None
    if slot_list.closed:
        notice = messages.SHOP_CLOSED
    elif not any(s.bookable for s in items):
        notice = messages.FULLY_BOOKED
    return SlotListSchema(date=session.state.date, closed=slot_list.closed, notice=notice, slots=items)


@router.get("/sessions/{session_id}/appointments", response_model=list[AppointmentSchema])
def my_appointments(
    session_id: str,
    store: SessionStorePort = Depends(get_session_store),
    catalog: ReferenceCatalogPort = Depends(get_reference_catalog),
):
    session = _session_or_404(session_id, store)
    return [_appointment_schema(a, catalog) for a in session.my_appointments()]


@router.delete("/sessions/{session_id}/appointments/{appointment_id}", status_code=204)
def cancel_appointment(session_id: str, appointment_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session_or_404(session_id, store)
    if session.profile is None:
        raise HTTPException(status_code=403, detail="Log in to manage bookings")
    try:
        cancelled = session.cancel(appointment_id)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BookingInFlightError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not cancelled:
        raise HTTPException(status_code=502, detail=messages.PLEASE_RETRY)
    return Response(status_code=204)


@router.delete("/sessions/{session_id}", status_code=204)
def end_session(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session_or_404(session_id, store)
    if session.is_submitting:
        raise HTTPException(status_code=409, detail="A booking is being submitted")
    store.delete(session_id)
    logger.info("Session ended", extra={"session_id": session_id})
    return Response(status_code=204)
