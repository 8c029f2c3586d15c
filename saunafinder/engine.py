"""Engine orchestration: merge, filter, rank.

Every view is recomputed from the current inputs; nothing is memoized, so
edits, favorites and day changes show up on the next call.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Any, Collection, Dict, List, Mapping, Optional

from . import config
from .filters import VIEW_CARDS, VIEW_MODES, FilterCriteria, apply_filters, apply_tab
from .overrides import effective_records, merge_edit, toggle_favorite
from .ranking import Location, attach_distances, pick_random, sort_facilities
from .store import JsonStore
from .weekday import current_day_index, day_name

logger = logging.getLogger(__name__)


@dataclass
class ViewResult:
    facilities: List[Dict[str, Any]]
    total_count: int
    day_index: int
    day_name: str
    view_mode: str
    distance_sorted: bool
    criteria: FilterCriteria = field(default_factory=FilterCriteria)

    @property
    def active_count(self) -> int:
        return len(self.facilities)


def build_view(
    base: List[Dict[str, Any]],
    criteria: FilterCriteria,
    view_mode: str = VIEW_CARDS,
    favorites: Collection[int] = (),
    overrides: Optional[Mapping[Any, Dict[str, Any]]] = None,
    user_location: Optional[Location] = None,
    day_index: Optional[int] = None,
    enrichments: Optional[Mapping[Any, Dict[str, Any]]] = None,
) -> ViewResult:
    if view_mode not in VIEW_MODES:
        raise ValueError(f"view_mode must be one of: {', '.join(VIEW_MODES)}")
    if day_index is None:
        day_index = current_day_index()

    merged = effective_records(base, overrides, enrichments=enrichments)
    total_count = sum(1 for f in merged if f.get("id") != config.INVALID_FACILITY_ID)

    filtered = apply_filters(
        merged, criteria, favorites=favorites, view_mode=view_mode, day_index=day_index
    )
    with_distance = attach_distances(filtered, user_location)
    distance_sorted = bool(criteria.sort_by_distance and user_location)
    ordered = sort_facilities(with_distance, criteria.sort_by_distance, user_location)

    return ViewResult(
        facilities=ordered,
        total_count=total_count,
        day_index=day_index,
        day_name=day_name(day_index),
        view_mode=view_mode,
        distance_sorted=distance_sorted,
        criteria=criteria,
    )


def _favorite_ids(stored: List[Any]) -> List[int]:
    ids = []
    for item in stored:
        try:
            ids.append(int(item))
        except (TypeError, ValueError):
            logger.warning("Ignoring stored favorite %r", item)
    return ids


class Finder:
    """A browsing session over one catalogue with injected local stores."""

    def __init__(
        self,
        catalogue: List[Dict[str, Any]],
        favorites_store: JsonStore,
        overrides_store: JsonStore,
        criteria: Optional[FilterCriteria] = None,
        view_mode: str = VIEW_CARDS,
    ) -> None:
        self.catalogue = catalogue
        self.favorites_store = favorites_store
        self.overrides_store = overrides_store
        self.favorites: List[int] = _favorite_ids(favorites_store.load())
        self.overrides: Dict[str, Dict[str, Any]] = dict(overrides_store.load())
        self.criteria = criteria or FilterCriteria()
        self.view_mode = view_mode
        self.user_location: Optional[Location] = None

    def view(self, day_index: Optional[int] = None) -> ViewResult:
        return build_view(
            self.catalogue,
            self.criteria,
            view_mode=self.view_mode,
            favorites=self.favorites,
            overrides=self.overrides,
            user_location=self.user_location,
            day_index=day_index,
        )

    def select_tab(self, tab: str) -> None:
        self.view_mode, self.criteria = apply_tab(self.criteria, tab)

    def set_search(self, term: str) -> None:
        self.criteria = replace(self.criteria, search_term=term)

    def toggle_filter(self, name: str) -> None:
        if name not in ("require_ice_swim", "require_smoke_sauna"):
            raise ValueError(f"Unknown toggle: {name}")
        self.criteria = replace(self.criteria, **{name: not getattr(self.criteria, name)})

    def set_location(self, lat: float, lon: float) -> None:
        self.user_location = {"lat": lat, "lon": lon}
        self.criteria = replace(self.criteria, sort_by_distance=True)

    def toggle_favorite(self, facility_id: int) -> bool:
        self.favorites = toggle_favorite(self.favorites, facility_id)
        self.favorites_store.save(self.favorites)
        return facility_id in self.favorites

    def update_facility(self, facility_id: int, patch: Dict[str, Any]) -> None:
        self.overrides = merge_edit(self.overrides, facility_id, patch)
        self.overrides_store.save(self.overrides)
        logger.info("Saved edit for facility %s: %s", facility_id, sorted(patch))

    def clear_overrides(self) -> None:
        self.overrides = {}
        self.overrides_store.save(self.overrides)

    def surprise_me(
        self, rng: Optional[random.Random] = None, day_index: Optional[int] = None
    ) -> Optional[Dict[str, Any]]:
        # The pick comes from the current filtered set; the list view is then shown.
        picked = pick_random(self.view(day_index=day_index).facilities, rng=rng)
        if picked is not None:
            self.view_mode = VIEW_CARDS
        return picked
