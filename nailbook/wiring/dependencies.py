from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from nailbook.core.config import settings
from nailbook.application.ports.booking_gateway import BookingGatewayPort
from nailbook.application.ports.identity import IdentityPort
from nailbook.application.ports.reference_catalog import ReferenceCatalogPort
from nailbook.application.ports.session_store import SessionStorePort
from nailbook.application.use_cases.availability import AvailabilityEngine
from nailbook.application.use_cases.booking_session import BookingSession
from nailbook.infrastructure.catalog.reference_catalog_store import ReferenceCatalogStore
from nailbook.infrastructure.gateway.gas_gateway import GAS_URL_PREFIX, GasBookingGateway
from nailbook.infrastructure.gateway.mock_gateway import MockBookingGateway
from nailbook.infrastructure.line.line_identity import LineIdentity
from nailbook.infrastructure.line.mock_identity import MockIdentity
from nailbook.infrastructure.store.memory_store import MemorySessionStore


_session_store: MemorySessionStore | None = None


@lru_cache
def get_reference_catalog() -> ReferenceCatalogPort:
    return ReferenceCatalogStore()


@lru_cache
def get_availability_engine() -> AvailabilityEngine:
    return AvailabilityEngine(
        catalog=get_reference_catalog(),
        opening_hour=settings.OPENING_HOUR,
        closing_hour=settings.CLOSING_HOUR,
        weekly_closed_day=settings.WEEKLY_CLOSED_DAY,
        slot_step_minutes=settings.SLOT_STEP_MINUTES,
    )


@lru_cache
def get_booking_gateway() -> BookingGatewayPort:
    logger = logging.getLogger(__name__)
    configured = settings.GAS_URL.strip().startswith(GAS_URL_PREFIX)
    logger.info("GAS_URL configured=%s ENV=%s", configured, settings.ENV)

    if not configured and settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockBookingGateway (GAS_URL missing, ENV=dev/local)")
        return MockBookingGateway()
    # unconfigured outside dev: the GAS gateway reports not-configured and simulates writes
    return GasBookingGateway()


@lru_cache
def get_identity() -> IdentityPort:
    if settings.ENV.lower() in {"dev", "local"}:
        return MockIdentity()
    return LineIdentity()


def get_session_store() -> SessionStorePort:
    global _session_store
    if _session_store is None:
        _session_store = MemorySessionStore()
    return _session_store


def new_booking_session() -> BookingSession:
    return BookingSession(
        engine=get_availability_engine(),
        catalog=get_reference_catalog(),
        gateway=get_booking_gateway(),
        identity=get_identity(),
        timezone=ZoneInfo(settings.SHOP_TIMEZONE),
        anonymous_name=settings.ANONYMOUS_DISPLAY_NAME,
    )
