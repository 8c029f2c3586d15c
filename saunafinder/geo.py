"""Geospatial helpers."""
from __future__ import annotations

import math
from typing import Any, Dict, Optional

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_to(facility: Dict[str, Any], lat: float, lon: float) -> Optional[float]:
    coords = facility.get("coordinates")
    if not coords or coords.get("lat") is None or coords.get("lon") is None:
        return None
    return haversine_km(lat, lon, coords["lat"], coords["lon"])


def format_distance(km: float) -> str:
    if km < 1:
        meters = int(round(km * 1000 / 10.0)) * 10
        if meters < 1000:
            return f"{meters} m"
    return f"{km:.1f} km"
