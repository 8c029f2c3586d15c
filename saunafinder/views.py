"""Row shapes for the list, weekly grid and map surfaces."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .geo import format_distance
from .schedule import describe_next_opening, find_interval, hours_for_day, is_open, next_open_short_day
from .scoring import rating_profile
from .weekday import DAYS_IN_WEEK, short_day_name


def list_row(
    facility: Dict[str, Any],
    day_index: int,
    water_temps: Optional[Mapping[int, float]] = None,
) -> Dict[str, Any]:
    open_today = is_open(facility, day_index)
    interval = find_interval(facility, day_index)
    distance = facility.get("distance")
    return {
        "id": facility.get("id"),
        "rank": facility.get("rank"),
        "name": facility.get("name"),
        "municipality": facility.get("municipality"),
        "score": facility.get("score"),
        "open_today": open_today,
        "hours_start": interval.get("start") if interval else None,
        "hours_end": interval.get("end") if interval else None,
        "hours_note": interval.get("note") if interval else None,
        "next_opening": None if open_today else describe_next_opening(facility, day_index),
        "distance_km": distance,
        "distance_text": format_distance(distance) if distance is not None else None,
        "water_temp": (water_temps or {}).get(facility.get("id")),
        "features": list(facility.get("features") or []),
        "rating_profile": rating_profile(facility.get("ratings")),
    }


def week_grid(facilities: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    rows = []
    for facility in facilities:
        cells = {}
        for day in range(1, DAYS_IN_WEEK + 1):
            hours = hours_for_day(facility, day)
            if hours is not None:
                cells[short_day_name(day)] = {"open": True, **hours}
            else:
                cells[short_day_name(day)] = {
                    "open": False,
                    "next_open_day": next_open_short_day(facility, day),
                }
        rows.append({"id": facility.get("id"), "name": facility.get("name"), "days": cells})
    return rows


def map_markers(facilities: Iterable[Dict[str, Any]], day_index: int) -> List[Dict[str, Any]]:
    markers = []
    for facility in facilities:
        coords = facility.get("coordinates")
        if not coords:
            continue
        markers.append(
            {
                "id": facility.get("id"),
                "name": facility.get("name"),
                "lat": coords.get("lat"),
                "lon": coords.get("lon"),
                "open_today": is_open(facility, day_index),
            }
        )
    return markers
