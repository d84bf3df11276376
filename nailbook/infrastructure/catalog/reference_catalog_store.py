from __future__ import annotations

from typing import Iterable

from nailbook.application.ports.reference_catalog import ReferenceCatalogPort
from nailbook.domain.entities.service import Service
from nailbook.domain.entities.stylist import ANY_STYLIST, Stylist
from nailbook.infrastructure.catalog.catalog_data import CATEGORY_LABELS, SERVICES, STYLISTS


class ReferenceCatalogStore(ReferenceCatalogPort):
    def __init__(
        self,
        services: Iterable[Service] | None = None,
        stylists: Iterable[Stylist] | None = None,
        category_labels: dict[str, str] | None = None,
    ) -> None:
        self._services = tuple(services if services is not None else SERVICES)
        self._stylists = tuple(stylists if stylists is not None else STYLISTS)
        self._category_labels = dict(category_labels or CATEGORY_LABELS)

        if any(s.stylist_id == ANY_STYLIST for s in self._stylists):
            raise ValueError(f"Stylist id {ANY_STYLIST!r} is reserved for no preference")
        if not self._stylists:
            raise ValueError("Stylist roster must not be empty")

        self._services_by_id = {s.service_id: s for s in self._services}
        self._stylists_by_id = {s.stylist_id: s for s in self._stylists}

    def get_service(self, service_id: str) -> Service | None:
        return self._services_by_id.get(service_id)

    def list_services(self) -> list[Service]:
        return list(self._services)

    def get_stylist(self, stylist_id: str) -> Stylist | None:
        return self._stylists_by_id.get(stylist_id)

    def list_stylists(self) -> list[Stylist]:
        return list(self._stylists)

    def category_labels(self) -> dict[str, str]:
        return dict(self._category_labels)
