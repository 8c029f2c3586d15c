"""Opening-hours resolution over a facility's recurring weekly intervals.

An interval is a dict with ``days`` (weekday indices, Monday=1), ``start``,
``end`` and ``note``. When several intervals cover the same day, the first one
in source order wins. Every lookup here goes through ``find_interval`` so that
open/closed status, grid cells and next-opening searches agree on that rule.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .weekday import (
    DAYS_IN_WEEK,
    day_name,
    is_valid_day_index,
    short_day_name,
    wrap_day,
)

SEASONALLY_CLOSED = "Seasonally Closed"


@dataclass(frozen=True)
class NextOpening:
    day_index: int
    day_name: str
    start_time: Optional[str]
    offset: int

    @property
    def is_tomorrow(self) -> bool:
        return self.offset == 1


def _check_day(day_index: int) -> None:
    if not is_valid_day_index(day_index):
        raise ValueError(f"Weekday index must be in 1..7, got {day_index!r}")


def find_interval(facility: Dict[str, Any], day_index: int) -> Optional[Dict[str, Any]]:
    """Return the first interval whose day set contains ``day_index``."""
    _check_day(day_index)
    for interval in facility.get("opening_hours") or []:
        if day_index in (interval.get("days") or []):
            return interval
    return None


def is_open(facility: Dict[str, Any], day_index: int) -> bool:
    return find_interval(facility, day_index) is not None


def next_opening(facility: Dict[str, Any], from_day: int) -> Optional[NextOpening]:
    """Scan the following seven days (wrapping) for the first opening.

    Returns None when no day of the cycle has an interval.
    """
    _check_day(from_day)
    for offset in range(1, DAYS_IN_WEEK + 1):
        day = wrap_day(from_day, offset)
        interval = find_interval(facility, day)
        if interval is not None:
            return NextOpening(
                day_index=day,
                day_name=day_name(day),
                start_time=interval.get("start"),
                offset=offset,
            )
    return None


def describe_next_opening(facility: Dict[str, Any], from_day: int) -> str:
    found = next_opening(facility, from_day)
    if found is None:
        return SEASONALLY_CLOSED
    start = found.start_time or "?"
    if found.is_tomorrow:
        return f"Tomorrow at {start}"
    return f"{found.day_name} at {start}"


def next_open_short_day(facility: Dict[str, Any], from_day: int) -> Optional[str]:
    found = next_opening(facility, from_day)
    if found is None:
        return None
    return short_day_name(found.day_index)


def hours_for_day(facility: Dict[str, Any], day_index: int) -> Optional[Dict[str, Any]]:
    interval = find_interval(facility, day_index)
    if interval is None:
        return None
    start = interval.get("start")
    time_text = f"{start} - {interval.get('end')}" if start else "Open"
    return {"time": time_text, "note": interval.get("note") or ""}
