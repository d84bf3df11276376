from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nailbook.application.utils.time_grid import format_minutes, to_minutes
from nailbook.domain.entities.appointment import Appointment
from nailbook.domain.entities.leave import SHOP_WIDE, Leave


class AppointmentRecordDTO(BaseModel):
    """Appointment row as stored by the remote spreadsheet endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    service_id: str = Field(alias="serviceId")
    stylist_id: str = Field(alias="stylistId")
    date: dt.date
    time: str
    duration_minutes: int = Field(alias="durationMinutes", gt=0)
    user_name: str = Field(default="", alias="userName")

    @field_validator("id", "service_id", "stylist_id", "user_name", mode="before")
    @classmethod
    def _coerce_str(cls, value):
        # spreadsheet cells may come back as numbers
        return "" if value is None else str(value)

    @field_validator("time")
    @classmethod
    def _normalize_time(cls, value: str) -> str:
        return format_minutes(to_minutes(value))

    def to_entity(self) -> Appointment:
        return Appointment(
            appointment_id=self.id,
            service_id=self.service_id,
            stylist_id=self.stylist_id,
            date=self.date,
            time=self.time,
            duration_minutes=self.duration_minutes,
            user_name=self.user_name,
        )

    @staticmethod
    def from_entity(appointment: Appointment) -> "AppointmentRecordDTO":
        return AppointmentRecordDTO(
            id=appointment.appointment_id,
            service_id=appointment.service_id,
            stylist_id=appointment.stylist_id,
            date=appointment.date,
            time=appointment.time,
            duration_minutes=appointment.duration_minutes,
            user_name=appointment.user_name,
        )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class LeaveRecordDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stylist_id: str = Field(default=SHOP_WIDE, alias="stylistId")
    date: dt.date

    @field_validator("stylist_id", mode="before")
    @classmethod
    def _coerce_str(cls, value):
        return SHOP_WIDE if value is None else str(value).strip()

    def to_entity(self) -> Leave:
        return Leave(stylist_id=self.stylist_id, date=self.date)
