"""Project configuration.

Loads user-defined settings from finder_config.json when available,
falling back to sensible defaults. Keep endpoint URLs centralized here.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

_REPO_ROOT = Path(__file__).resolve().parent.parent

# --- Catalogue ---

CATALOGUE_SOURCE = str(_REPO_ROOT / "saunas.json")
CATALOGUE_ENV_VAR = "SAUNAFINDER_CATALOGUE"
INVALID_FACILITY_ID = -1

# --- Endpoints ---

WEATHER_URL = "https://api.open-meteo.com/v1/forecast"
WATER_TEMPS_TARGET_URL = "https://tampere.sometec.fi/showSpace03S.php"
WATER_TEMPS_PROXY_URLS: List[str] = [
    "https://api.allorigins.win/get?url={url}",
    "https://api.codetabs.com/v1/proxy?quest={url}",
]
WATER_TEMPS_TIMEOUT_SECONDS = 4

# --- Location ---

# Tampere centre, used for the weather widget before a location fix.
DEFAULT_CENTER: Dict[str, float] = {"lat": 61.4978, "lon": 23.7608}

# --- Presentation ---

DAY_NAME_LOCALE = "en"
DEFAULT_TAB = "today"

# --- Feature tags ---

ICE_SWIM_TAG = "avanto"
SMOKE_SAUNA_SUBSTRING = "savusauna"

# --- HTTP ---

HTTP_TIMEOUT_SECONDS = 10
HTTP_RETRY_MAX = 3
HTTP_BACKOFF_BASE = 0.5
HTTP_BACKOFF_MAX = 8.0
HTTP_USER_AGENT = "saunafinder/0.1"

# --- Storage ---

STORE_DB_PATH = "saunafinder.db"
FAVORITES_KEY = "saunaFavorites"
OVERRIDES_KEY = "saunaEdits"


def load_finder_config(path: Optional[str] = None) -> bool:
    """Load finder configuration from a JSON file.

    Updates module-level globals with values from the config file.
    Returns True if config was loaded, False if file not found.
    """
    if path is None:
        path = str(_REPO_ROOT / "finder_config.json")

    config_path = Path(path)
    if not config_path.exists():
        return False

    with open(config_path, "r", encoding="utf-8") as f:
        data: Dict[str, Any] = json.load(f)

    globals_ref = globals()

    catalogue = data.get("catalogue")
    if catalogue:
        globals_ref["CATALOGUE_SOURCE"] = str(catalogue)

    center = data.get("center", {})
    center_lat = center.get("lat")
    center_lon = center.get("lon")
    if center_lat is not None and center_lon is not None:
        globals_ref["DEFAULT_CENTER"] = {"lat": float(center_lat), "lon": float(center_lon)}

    locale = data.get("locale")
    if locale:
        globals_ref["DAY_NAME_LOCALE"] = str(locale)

    tab = data.get("default_tab")
    if tab:
        globals_ref["DEFAULT_TAB"] = str(tab)

    store = data.get("store_path")
    if store:
        globals_ref["STORE_DB_PATH"] = str(store)

    http = data.get("http", {})
    if "timeout_seconds" in http:
        globals_ref["HTTP_TIMEOUT_SECONDS"] = int(http["timeout_seconds"])
    if "retry_max" in http:
        globals_ref["HTTP_RETRY_MAX"] = int(http["retry_max"])

    proxies = data.get("water_proxy_urls", [])
    if proxies:
        globals_ref["WATER_TEMPS_PROXY_URLS"] = list(proxies)

    return True
