"""
Tests for wall-clock conversion and interval overlap.
"""

from __future__ import annotations

import pytest

from nailbook.application.exceptions import MalformedTimeError
from nailbook.application.utils.time_grid import (
    add_minutes,
    end_minutes,
    format_minutes,
    grid_times,
    intervals_overlap,
    to_minutes,
)


def test_to_minutes_parses_grid_times():
    assert to_minutes("10:00") == 600
    assert to_minutes("19:30") == 1170
    assert to_minutes("9:30") == 570
    assert to_minutes("00:00") == 0


def test_duration_carries_into_next_hour():
    assert add_minutes("19:45", 30) == "20:15"
    assert add_minutes("19:30", 90) == "21:00"
    assert add_minutes("10:30", 135) == "12:45"
    assert end_minutes("14:00", 90) == to_minutes("15:30")


def test_format_minutes_pads():
    assert format_minutes(570) == "09:30"
    assert format_minutes(1260) == "21:00"


@pytest.mark.parametrize("bad", ["", "7pm", "1030", "25:00", "10:60", "10:5", "ab:cd", None, 1030])
def test_malformed_time_fails_fast(bad):
    with pytest.raises(MalformedTimeError):
        to_minutes(bad)


def test_negative_duration_rejected():
    with pytest.raises(ValueError):
        end_minutes("10:00", -30)


def test_overlap_is_half_open():
    # back-to-back bookings do not collide
    assert intervals_overlap(600, 660, 660, 720) is False
    assert intervals_overlap(660, 720, 600, 660) is False
    assert intervals_overlap(600, 690, 660, 720) is True
    # containment
    assert intervals_overlap(600, 780, 630, 660) is True


def test_overlap_is_symmetric():
    cases = [
        (600, 660, 630, 690),
        (600, 660, 660, 720),
        (600, 720, 540, 600),
        (840, 930, 870, 930),
        (840, 930, 930, 990),
    ]
    for a, b, c, d in cases:
        assert intervals_overlap(a, b, c, d) == intervals_overlap(c, d, a, b)


def test_grid_includes_opening_and_closing_hour():
    grid = list(grid_times(10, 20))
    assert grid[0] == "10:00"
    assert grid[1] == "10:30"
    assert grid[-1] == "20:00"
    assert "20:30" not in grid
    assert len(grid) == 21


def test_grid_is_restartable():
    assert list(grid_times(10, 12)) == ["10:00", "10:30", "11:00", "11:30", "12:00"]
    assert list(grid_times(10, 12, 60)) == ["10:00", "11:00", "12:00"]
