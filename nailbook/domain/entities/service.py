from __future__ import annotations

from dataclasses import dataclass

PRICE_QUOTE = "quote"

CATEGORIES = ("hand", "foot", "care", "removal", "combo")


@dataclass(frozen=True)
class Service:
    service_id: str
    display_name: str
    category: str  # one of CATEGORIES
    price: int | str  # positive amount or PRICE_QUOTE
    duration_minutes: int

    def __post_init__(self) -> None:
        if self.category not in CATEGORIES:
            raise ValueError(f"Unknown service category: {self.category!r}")
        if self.price != PRICE_QUOTE and (not isinstance(self.price, int) or self.price <= 0):
            raise ValueError(f"Service price must be positive or {PRICE_QUOTE!r}")
        if self.duration_minutes <= 0:
            raise ValueError("Service duration must be positive")

    @property
    def is_quoted_on_site(self) -> bool:
        return self.price == PRICE_QUOTE
