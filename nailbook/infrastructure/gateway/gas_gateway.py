from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from nailbook.application.dto.wire_records import AppointmentRecordDTO, LeaveRecordDTO
from nailbook.application.exceptions import RemoteUnavailableError
from nailbook.application.ports.booking_gateway import BookingGatewayPort, InitialData
from nailbook.core.config import settings
from nailbook.domain.entities.appointment import Appointment
from nailbook.domain.entities.leave import Leave

GAS_URL_PREFIX = "https://script.google.com"


class GasBookingGateway(BookingGatewayPort):
    """Google Apps Script web app in front of the booking spreadsheet.

    The script does no overlap checking of its own. While the URL is not
    configured the gateway runs in simulation mode: reads are empty and
    writes report success.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = (url if url is not None else settings.GAS_URL).strip()
        self._client = client or httpx.Client(
            timeout=timeout or settings.GATEWAY_TIMEOUT_SECONDS,
            follow_redirects=True,
        )
        self._logger = logging.getLogger(__name__)

    def is_configured(self) -> bool:
        return self._url.startswith(GAS_URL_PREFIX)

    def fetch_appointments(self) -> list[Appointment]:
        if not self.is_configured():
            return []
        try:
            data = self._get("getAppointments")
        except RemoteUnavailableError as e:
            self._logger.error("Error fetching appointments", extra={"error": str(e)})
            return []
        return self._parse_appointments(data)

    def fetch_leaves(self) -> list[Leave]:
        if not self.is_configured():
            return []
        try:
            data = self._get("getLeaves")
        except RemoteUnavailableError as e:
            self._logger.error("Error fetching leaves", extra={"error": str(e)})
            return []
        return self._parse_leaves(data)

    def fetch_initial_data(self) -> InitialData:
        if not self.is_configured():
            return InitialData()
        try:
            data = self._get("getInitialData")
        except RemoteUnavailableError as e:
            self._logger.error("Error fetching initial data", extra={"error": str(e)})
            return InitialData()
        if not isinstance(data, dict):
            self._logger.warning("Unexpected initial data payload", extra={"error": type(data).__name__})
            return InitialData()
        return InitialData(
            appointments=self._parse_appointments(data.get("appointments")),
            leaves=self._parse_leaves(data.get("leaves")),
        )

    def create_appointment(self, appointment: Appointment) -> bool:
        if not self.is_configured():
            self._logger.warning(
                "GAS_URL not configured, simulating create",
                extra={"appointment_id": appointment.appointment_id},
            )
            return True
        payload = {"action": "create", "data": AppointmentRecordDTO.from_entity(appointment).to_wire()}
        try:
            self._post(payload)
        except RemoteUnavailableError as e:
            self._logger.error(
                "Error creating appointment",
                extra={"appointment_id": appointment.appointment_id, "error": str(e)},
            )
            return False
        self._logger.info("Appointment created", extra={"appointment_id": appointment.appointment_id})
        return True

    def cancel_appointment(self, appointment_id: str) -> bool:
        if not self.is_configured():
            self._logger.warning("GAS_URL not configured, simulating cancel", extra={"appointment_id": appointment_id})
            return True
        try:
            self._post({"action": "cancel", "id": appointment_id})
        except RemoteUnavailableError as e:
            self._logger.error("Error cancelling appointment", extra={"appointment_id": appointment_id, "error": str(e)})
            return False
        self._logger.info("Appointment cancelled", extra={"appointment_id": appointment_id})
        return True

    def _get(self, action: str) -> Any:
        try:
            response = self._client.get(self._url, params={"action": action})
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise RemoteUnavailableError(f"{action} failed: {e}") from e

    def _post(self, payload: dict[str, Any]) -> None:
        try:
            response = self._client.post(self._url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise RemoteUnavailableError(f"{payload.get('action')} failed: {e}") from e

    def _parse_appointments(self, data: Any) -> list[Appointment]:
        if not isinstance(data, list):
            return []
        appointments: list[Appointment] = []
        for row in data:
            try:
                appointments.append(AppointmentRecordDTO.model_validate(row).to_entity())
            except (ValidationError, ValueError) as e:
                self._logger.warning("Skipping malformed appointment record", extra={"error": str(e)})
        return appointments

    def _parse_leaves(self, data: Any) -> list[Leave]:
        if not isinstance(data, list):
            return []
        leaves: list[Leave] = []
        for row in data:
            try:
                leaves.append(LeaveRecordDTO.model_validate(row).to_entity())
            except ValidationError as e:
                self._logger.warning("Skipping malformed leave record", extra={"error": str(e)})
        return leaves
