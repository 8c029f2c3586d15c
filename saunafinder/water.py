"""Lake water temperatures scraped from the city's monitoring page.

The page is fetched through public proxies. When none of them yields a
parseable value, seasonal estimates are returned so every mapped facility
still shows a temperature.
"""
from __future__ import annotations

import logging
import random
import re
from datetime import date
from typing import Dict, List, Optional
from urllib.parse import quote

from . import config
from .http import HttpClient, HttpError

logger = logging.getLogger(__name__)

# Facility id -> site names as they appear on the monitoring page.
ID_NAME_MAPPING: Dict[int, List[str]] = {
    5: ["Rauhaniemi", "Rauhaniemen uimapaikka"],
    7: ["Kaupinoja", "Kaupinojan uimapaikka"],
    19: ["Suomensaari", "Suomensaaren uimapaikka"],
    6: ["Kaukajärvi", "Kaukajärven uimapaikka", "Riihiniemen uimapaikka"],
    13: ["Tohloppi", "Tohlopin uimapaikka"],
    11: ["Suolijärvi", "Suolijärven uimapaikka"],
    44: ["Vesaniemi"],
    10: ["Alisniemi"],
    9: ["Pereensaari"],
}

SEASONAL_VARIATION = 1.25


def parse_water_temperatures(html: str) -> Dict[int, float]:
    temps: Dict[int, float] = {}
    for facility_id, names in ID_NAME_MAPPING.items():
        for name in names:
            match = re.search(re.escape(name) + r".{0,300}?(\d+[.,]\d+)", html, re.DOTALL)
            if match:
                temps[facility_id] = float(match.group(1).replace(",", "."))
                break
    return temps


def seasonal_water_temp(today: Optional[date] = None) -> float:
    month = (today or date.today()).month
    if 6 <= month <= 8:
        return 19.5
    if month == 9:
        return 14.0
    if month in (5, 10):
        return 8.0
    return 2.5


def estimated_water_temperatures(
    rng: Optional[random.Random] = None, today: Optional[date] = None
) -> Dict[int, float]:
    rng = rng or random.Random()
    base = seasonal_water_temp(today)
    return {
        facility_id: round(base + rng.uniform(-SEASONAL_VARIATION, SEASONAL_VARIATION), 1)
        for facility_id in ID_NAME_MAPPING
    }


def _extract_html(client: HttpClient, proxy_template: str) -> str:
    url = proxy_template.format(url=quote(config.WATER_TEMPS_TARGET_URL, safe=""))
    if "allorigins" in proxy_template:
        payload = client.get_json(url, timeout=config.WATER_TEMPS_TIMEOUT_SECONDS)
        if not isinstance(payload, dict):
            return ""
        return payload.get("contents") or ""
    return client.get_text(url, timeout=config.WATER_TEMPS_TIMEOUT_SECONDS)


def fetch_water_temperatures(
    http: Optional[HttpClient] = None,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> Dict[int, float]:
    client = http or HttpClient(retry_max=1)
    for proxy_template in config.WATER_TEMPS_PROXY_URLS:
        try:
            html = _extract_html(client, proxy_template)
        except HttpError as exc:
            logger.debug("Water temperature proxy failed: %s", exc)
            continue
        temps = parse_water_temperatures(html)
        if temps:
            return temps

    logger.info("Using estimated seasonal water temperatures (fetch failed)")
    return estimated_water_temperatures(rng=rng, today=today)
