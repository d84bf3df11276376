from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from nailbook.domain.entities.service import PRICE_QUOTE, Service


def price_label(service: Service) -> str:
    return "Quoted on-site" if service.price == PRICE_QUOTE else f"${service.price}"


class ServiceSchema(BaseModel):
    service_id: str
    display_name: str
    category: str
    price: int | None  # None means quoted on-site
    price_label: str
    duration_minutes: int

    @staticmethod
    def from_entity(service: Service) -> "ServiceSchema":
        return ServiceSchema(
            service_id=service.service_id,
            display_name=service.display_name,
            category=service.category,
            price=None if service.is_quoted_on_site else service.price,
            price_label=price_label(service),
            duration_minutes=service.duration_minutes,
        )


class CategorySchema(BaseModel):
    key: str
    label: str
    services: list[ServiceSchema] = Field(default_factory=list)


class StylistSchema(BaseModel):
    stylist_id: str
    display_name: str
    image: str
    greeting: str = ""


class CatalogSchema(BaseModel):
    categories: list[CategorySchema]
    stylists: list[StylistSchema]


class ProfileSchema(BaseModel):
    display_name: str
    picture_ref: str | None = None


class SessionSchema(BaseModel):
    session_id: str
    step: str
    step_number: int
    service_id: str | None = None
    stylist_id: str
    date: dt.date | None = None
    time: str | None = None
    appointment_id: str | None = None
    assigned_stylist_id: str | None = None
    last_error: str | None = None
    configured: bool
    notice: str | None = None
    submitting: bool = False
    profile: ProfileSchema


class SelectServiceSchema(BaseModel):
    service_id: str


class SelectStylistSchema(BaseModel):
    stylist_id: str


class SelectDateSchema(BaseModel):
    date: dt.date


class SelectTimeSchema(BaseModel):
    time: str


class SlotSchema(BaseModel):
    time: str
    bookable: bool


class SlotListSchema(BaseModel):
    date: dt.date
    closed: bool
    notice: str | None = None
    slots: list[SlotSchema] = Field(default_factory=list)


class AppointmentSchema(BaseModel):
    appointment_id: str
    service_id: str
    service_name: str | None = None
    stylist_id: str
    stylist_name: str | None = None
    date: dt.date
    time: str
    duration_minutes: int
    user_name: str
