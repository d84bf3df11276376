from __future__ import annotations

from abc import ABC, abstractmethod

from nailbook.domain.entities.service import Service
from nailbook.domain.entities.stylist import Stylist


class ReferenceCatalogPort(ABC):
    @abstractmethod
    def get_service(self, service_id: str) -> Service | None:
        """Get service by id."""
        raise NotImplementedError

    @abstractmethod
    def list_services(self) -> list[Service]:
        """All services in declared order."""
        raise NotImplementedError

    @abstractmethod
    def get_stylist(self, stylist_id: str) -> Stylist | None:
        """Get stylist by id. Never matches the "any" selector."""
        raise NotImplementedError

    @abstractmethod
    def list_stylists(self) -> list[Stylist]:
        """Stylist roster in declared order; assignment scans it in this order."""
        raise NotImplementedError

    @abstractmethod
    def category_labels(self) -> dict[str, str]:
        """Category key -> display label, in display order."""
        raise NotImplementedError
