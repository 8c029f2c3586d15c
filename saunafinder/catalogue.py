"""Catalogue loading and record normalization."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .http import HttpClient, HttpError

logger = logging.getLogger(__name__)


class CatalogueError(RuntimeError):
    pass


def _pick(raw: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return default


def normalize_interval(raw: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "days": list(_pick(raw, "days", "viikonpaivat", default=[]) or []),
        "start": _pick(raw, "start", "alkaa"),
        "end": _pick(raw, "end", "paattyy"),
        "note": _pick(raw, "note", "selite", default="") or "",
    }


# Adapter/mapper for catalogue record fields

def normalize_record(raw: Dict[str, Any]) -> Dict[str, Any]:
    location = raw.get("sijainti") or {}
    record = {
        "id": raw.get("id"),
        "rank": _pick(raw, "rank", "sijoitus"),
        "name": _pick(raw, "name", "nimi"),
        "municipality": _pick(raw, "municipality", default=location.get("kunta")),
        "address": _pick(raw, "address", default=location.get("osoite")),
        "price": _pick(raw, "price", "hinta"),
        "description": _pick(raw, "description", "kuvaus"),
        "notes": _pick(raw, "notes", "huomioita"),
        "status": _pick(raw, "status", "tila"),
        "image": raw.get("image"),
        "score": _pick(raw, "score", "pisteet", default=0),
        "features": list(_pick(raw, "features", "ominaisuudet", default=[]) or []),
        "ratings": dict(_pick(raw, "ratings", "arvioinnit", default={}) or {}),
        "opening_hours": [
            normalize_interval(i) for i in _pick(raw, "opening_hours", "aukioloajat", default=[]) or []
        ],
    }
    if raw.get("coordinates"):
        record["coordinates"] = dict(raw["coordinates"])
    return record


def parse_catalogue(data: Any) -> List[Dict[str, Any]]:
    if not isinstance(data, list):
        raise CatalogueError("Catalogue must be a JSON array of facility records")
    return [normalize_record(item) for item in data if isinstance(item, dict)]


def load_catalogue(source: str, http: Optional[HttpClient] = None) -> List[Dict[str, Any]]:
    if source.startswith(("http://", "https://")):
        client = http or HttpClient()
        try:
            data = client.get_json(source)
        except HttpError as exc:
            raise CatalogueError(f"Could not fetch catalogue: {exc}") from exc
    else:
        path = Path(source)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise CatalogueError(f"Could not read catalogue {path}: {exc}") from exc
    records = parse_catalogue(data)
    logger.info("Loaded %s facilities from %s", len(records), source)
    return records


def load_catalogue_or_empty(source: str, http: Optional[HttpClient] = None) -> List[Dict[str, Any]]:
    try:
        return load_catalogue(source, http=http)
    except CatalogueError as exc:
        logger.error("%s", exc)
        return []
