"""Filter criteria, view modes and the per-facility inclusion predicate."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Collection, Dict, Iterable, List, Optional, Tuple

from . import config
from .schedule import is_open
from .weekday import current_day_index

logger = logging.getLogger(__name__)

VIEW_CARDS = "cards"
VIEW_CALENDAR = "calendar"
VIEW_MAP = "map"
VIEW_MODES = (VIEW_CARDS, VIEW_CALENDAR, VIEW_MAP)

TABS = ("today", "all", "favorites", "calendar", "map")


@dataclass(frozen=True)
class FilterCriteria:
    only_open: bool = True
    require_ice_swim: bool = False
    require_smoke_sauna: bool = False
    favorites_only: bool = False
    sort_by_distance: bool = False
    search_term: str = ""


def apply_tab(criteria: FilterCriteria, tab: str) -> Tuple[str, FilterCriteria]:
    if tab == "today":
        return VIEW_CARDS, replace(criteria, only_open=True, favorites_only=False)
    if tab == "all":
        return VIEW_CARDS, replace(criteria, only_open=False, favorites_only=False)
    if tab == "favorites":
        return VIEW_CARDS, replace(criteria, only_open=False, favorites_only=True)
    if tab == "calendar":
        return VIEW_CALENDAR, replace(criteria, only_open=False)
    if tab == "map":
        return VIEW_MAP, replace(criteria, only_open=False)
    raise ValueError(f"Unknown tab: {tab}")


def has_ice_swim(facility: Dict[str, Any]) -> bool:
    return config.ICE_SWIM_TAG in (facility.get("features") or [])


def has_smoke_sauna(facility: Dict[str, Any]) -> bool:
    needle = config.SMOKE_SAUNA_SUBSTRING
    return any(needle in (feat or "").lower() for feat in facility.get("features") or [])


def matches_search(facility: Dict[str, Any], term: str) -> bool:
    term = term.lower()
    name = (facility.get("name") or "").lower()
    municipality = (facility.get("municipality") or "").lower()
    return term in name or term in municipality


def passes_filters(
    facility: Dict[str, Any],
    criteria: FilterCriteria,
    favorites: Collection[int] = (),
    view_mode: str = VIEW_CARDS,
    day_index: Optional[int] = None,
) -> bool:
    if facility.get("id") == config.INVALID_FACILITY_ID:
        return False

    if criteria.favorites_only and facility.get("id") not in favorites:
        return False

    # Grid and map show every candidate; open status is rendered, not filtered.
    if view_mode == VIEW_CARDS and criteria.only_open:
        if day_index is None:
            day_index = current_day_index()
        if not is_open(facility, day_index):
            return False

    if criteria.require_ice_swim and not has_ice_swim(facility):
        return False

    if criteria.require_smoke_sauna and not has_smoke_sauna(facility):
        return False

    # A non-empty search term decides inclusion on its own.
    if criteria.search_term:
        return matches_search(facility, criteria.search_term)

    return True


def apply_filters(
    facilities: Iterable[Dict[str, Any]],
    criteria: FilterCriteria,
    favorites: Collection[int] = (),
    view_mode: str = VIEW_CARDS,
    day_index: Optional[int] = None,
) -> List[Dict[str, Any]]:
    if day_index is None:
        day_index = current_day_index()
    favorite_set = set(favorites)
    kept = [
        f
        for f in facilities
        if passes_filters(f, criteria, favorite_set, view_mode=view_mode, day_index=day_index)
    ]
    logger.debug("Filters kept %s facilities (view=%s, day=%s)", len(kept), view_mode, day_index)
    return kept
