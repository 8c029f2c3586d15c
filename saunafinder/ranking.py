"""Distance attachment and the two competing sort strategies."""
from __future__ import annotations

import math
import random
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .geo import distance_to

Location = Dict[str, float]


def attach_distances(
    facilities: Iterable[Dict[str, Any]], user_location: Optional[Location]
) -> List[Dict[str, Any]]:
    if not user_location:
        return list(facilities)
    out = []
    for facility in facilities:
        dist = distance_to(facility, user_location["lat"], user_location["lon"])
        if dist is None:
            out.append(facility)
        else:
            out.append({**facility, "distance": dist})
    return out


def checked_score(facility: Dict[str, Any]) -> float:
    score = facility.get("score")
    if score is None:
        score = 0.0
    score = float(score)
    if not math.isfinite(score) or score < 0:
        raise ValueError(f"Facility {facility.get('id')!r} has invalid score {score!r}")
    return score


def distance_sort_key(facility: Dict[str, Any]) -> Tuple[int, float, float]:
    dist = facility.get("distance")
    if dist is not None:
        return (0, float(dist), 0.0)
    return (1, 0.0, -checked_score(facility))


def rank_sort_key(facility: Dict[str, Any]) -> Tuple[float, float]:
    rank = facility.get("rank")
    rank_value = math.inf if rank is None else float(rank)
    return (rank_value, -checked_score(facility))


def sort_facilities(
    facilities: Iterable[Dict[str, Any]],
    sort_by_distance: bool,
    user_location: Optional[Location],
) -> List[Dict[str, Any]]:
    if sort_by_distance and user_location:
        return sorted(facilities, key=distance_sort_key)
    return sorted(facilities, key=rank_sort_key)


def pick_random(
    facilities: List[Dict[str, Any]], rng: Optional[random.Random] = None
) -> Optional[Dict[str, Any]]:
    if not facilities:
        return None
    chooser = rng if rng is not None else random
    return chooser.choice(facilities)
