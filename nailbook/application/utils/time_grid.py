from __future__ import annotations

import re
from typing import Iterator

from nailbook.application.exceptions import MalformedTimeError

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def to_minutes(time: str) -> int:
    """Convert an ``HH:MM`` wall-clock string to minutes since midnight."""
    if not isinstance(time, str):
        raise MalformedTimeError(f"Expected HH:MM string, got {time!r}")
    match = _TIME_RE.match(time.strip())
    if not match:
        raise MalformedTimeError(f"Malformed time: {time!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise MalformedTimeError(f"Time out of range: {time!r}")
    return hour * 60 + minute


def end_minutes(time: str, duration_minutes: int) -> int:
    if duration_minutes < 0:
        raise ValueError("Duration must not be negative")
    return to_minutes(time) + duration_minutes


def format_minutes(minutes: int) -> str:
    hour, minute = divmod(minutes, 60)
    return f"{hour:02d}:{minute:02d}"


def add_minutes(time: str, duration_minutes: int) -> str:
    return format_minutes(end_minutes(time, duration_minutes))


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open [start, end) overlap; touching intervals do not overlap."""
    return start_a < end_b and end_a > start_b


def grid_times(opening_hour: int, closing_hour: int, step_minutes: int = 30) -> Iterator[str]:
    """Yield grid times from the opening hour up to and including the closing hour."""
    if step_minutes <= 0:
        raise ValueError("Grid step must be positive")
    current = opening_hour * 60
    last = closing_hour * 60
    while current <= last:
        yield format_minutes(current)
        current += step_minutes
