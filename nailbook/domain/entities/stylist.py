from __future__ import annotations

from dataclasses import dataclass

ANY_STYLIST = "any"


@dataclass(frozen=True)
class Stylist:
    stylist_id: str
    display_name: str
    image: str
    greeting: str = ""
    specialty: str = ""
