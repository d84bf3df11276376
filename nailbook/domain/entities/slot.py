from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator


@dataclass(frozen=True)
class Slot:
    time: str  # HH:MM
    bookable: bool


class SlotList:
    """Slots for one date, recomputed on every iteration.

    ``closed`` marks a shop-wide closure; a closed list never yields slots, so
    callers can tell "closed" apart from "fully booked".
    """

    def __init__(self, closed: bool, produce: Callable[[], Iterator[Slot]]) -> None:
        self.closed = closed
        self._produce = produce

    def __iter__(self) -> Iterator[Slot]:
        if self.closed:
            return iter(())
        return self._produce()

    def bookable_times(self) -> list[str]:
        return [slot.time for slot in self if slot.bookable]

    @property
    def fully_booked(self) -> bool:
        return not self.closed and not any(slot.bookable for slot in self)
