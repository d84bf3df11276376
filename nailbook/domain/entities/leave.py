from __future__ import annotations

from dataclasses import dataclass
from datetime import date

SHOP_WIDE = ""


@dataclass(frozen=True)
class Leave:
    stylist_id: str  # SHOP_WIDE closes the whole shop
    date: date

    @property
    def is_shop_wide(self) -> bool:
        return self.stylist_id == SHOP_WIDE
