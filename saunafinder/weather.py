"""Current weather from Open-Meteo."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from . import config
from .http import HttpClient, HttpError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeatherData:
    temperature: float
    weather_code: int


def weather_kind(code: int) -> str:
    if code in (0, 1):
        return "sun"
    if code in (2, 3):
        return "cloud"
    if 51 <= code <= 67:
        return "rain"
    if 71 <= code <= 86:
        return "snow"
    return "cloud"


def parse_weather_response(response: Dict[str, Any]) -> Optional[WeatherData]:
    current = response.get("current_weather") or {}
    temperature = current.get("temperature")
    code = current.get("weathercode")
    if temperature is None or code is None:
        return None
    return WeatherData(temperature=float(temperature), weather_code=int(code))


def fetch_weather(lat: float, lon: float, http: Optional[HttpClient] = None) -> Optional[WeatherData]:
    client = http or HttpClient()
    params = {"latitude": lat, "longitude": lon, "current_weather": "true"}
    try:
        response = client.get_json(config.WEATHER_URL, params=params)
    except HttpError as exc:
        logger.warning("Weather fetch failed: %s", exc)
        return None
    return parse_weather_response(response)
