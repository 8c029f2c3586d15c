import pytest

from saunafinder.schedule import (
    SEASONALLY_CLOSED,
    describe_next_opening,
    find_interval,
    hours_for_day,
    is_open,
    next_open_short_day,
    next_opening,
)


def _facility(intervals):
    return {"id": 1, "name": "Test", "opening_hours": intervals}


def test_open_exactly_on_interval_days():
    facility = _facility([{"days": [1, 3, 5], "start": "16:00", "end": "21:00", "note": ""}])
    assert [d for d in range(1, 8) if is_open(facility, d)] == [1, 3, 5]


def test_no_intervals_is_always_closed():
    facility = _facility([])
    assert not any(is_open(facility, d) for d in range(1, 8))
    assert not is_open({"id": 2}, 3)


def test_first_matching_interval_wins():
    facility = _facility(
        [
            {"days": [2], "start": "10:00", "end": "12:00", "note": "first"},
            {"days": [2, 4], "start": "18:00", "end": "22:00", "note": "second"},
        ]
    )
    assert find_interval(facility, 2)["note"] == "first"
    assert find_interval(facility, 4)["note"] == "second"
    assert next_opening(facility, 1).start_time == "10:00"


def test_next_opening_wraps_around_week():
    facility = _facility([{"days": [3], "start": "17:00", "end": "20:00", "note": ""}])
    found = next_opening(facility, 5)
    assert found.day_index == 3
    assert found.offset == 5
    assert not found.is_tomorrow
    assert describe_next_opening(facility, 5) == "Wednesday at 17:00"


def test_next_opening_tomorrow_and_same_day_next_week():
    facility = _facility([{"days": [1], "start": None, "end": None, "note": ""}])
    assert describe_next_opening(facility, 7) == "Tomorrow at ?"
    found = next_opening(facility, 1)
    assert found.day_index == 1
    assert found.offset == 7


def test_next_opening_none_for_empty_schedule():
    facility = _facility([])
    for day in range(1, 8):
        assert next_opening(facility, day) is None
        assert describe_next_opening(facility, day) == SEASONALLY_CLOSED
        assert next_open_short_day(facility, day) is None


def test_hours_for_day_cells():
    facility = _facility(
        [
            {"days": [6], "start": "12:00", "end": "20:00", "note": "mixed"},
            {"days": [7], "start": None, "end": None, "note": "on request"},
        ]
    )
    assert hours_for_day(facility, 6) == {"time": "12:00 - 20:00", "note": "mixed"}
    assert hours_for_day(facility, 7) == {"time": "Open", "note": "on request"}
    assert hours_for_day(facility, 1) is None


def test_out_of_range_day_is_rejected():
    facility = _facility([{"days": [1], "start": None, "end": None, "note": ""}])
    with pytest.raises(ValueError):
        is_open(facility, 0)
    with pytest.raises(ValueError):
        next_opening(facility, 8)
