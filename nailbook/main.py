"""ASGI entry point for the nail salon booking API.

Run with ``uvicorn nailbook.main:app``. Log lines carry booking context
(session, appointment, stylist, date, time) appended by ContextFormatter.
"""

import logging

from fastapi import Depends, FastAPI

from nailbook.api.v1.booking import router as booking_router
from nailbook.application.ports.booking_gateway import BookingGatewayPort
from nailbook.core.config import settings
from nailbook.wiring.dependencies import get_booking_gateway

CONTEXT_KEYS = ("session_id", "appointment_id", "stylist_id", "date", "time", "status", "error")


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = [
            f"{key}={getattr(record, key)}"
            for key in CONTEXT_KEYS
            if getattr(record, key, None) not in (None, "")
        ]
        return f"{base} | {' '.join(context)}" if context else base


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


configure_logging(settings.LOG_LEVEL)

app = FastAPI(title=f"{settings.SHOP_NAME} Booking", version="1.0.0")
app.include_router(booking_router, prefix="/api/v1", tags=["booking"])


@app.get("/health")
def health(gateway: BookingGatewayPort = Depends(get_booking_gateway)) -> dict[str, object]:
    # "configured" false means bookings are simulated, not persisted
    return {"status": "ok", "configured": gateway.is_configured()}
