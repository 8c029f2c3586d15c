"""CLI entrypoint."""
from __future__ import annotations

import argparse
import logging
import os
import random
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv as _load_dotenv

from saunafinder import config
from saunafinder.catalogue import load_catalogue_or_empty
from saunafinder.engine import Finder
from saunafinder.filters import TABS
from saunafinder.http import HttpClient
from saunafinder.overrides import EDITABLE_FIELDS
from saunafinder.reporting import (
    ensure_dir,
    render_score_distribution,
    render_view,
    write_results_csv,
    write_results_json,
    write_summary,
    write_week_grid_csv,
)
from saunafinder.scoring import score_distribution
from saunafinder.store import SqliteKeyValueStore, favorites_store, overrides_store
from saunafinder.views import list_row, map_markers, week_grid
from saunafinder.water import fetch_water_temperatures
from saunafinder.weather import fetch_weather, weather_kind

logger = logging.getLogger(__name__)


def _repo_root() -> Path:
    return Path(__file__).resolve().parent


def load_env(path: str = ".env", root_dir: Optional[Path] = None) -> None:
    """Optionally load a repo-root .env file without overriding real env vars."""
    root = Path(root_dir) if root_dir else _repo_root()
    env_path = (root / path).resolve()
    if not env_path.exists():
        return
    _load_dotenv(dotenv_path=env_path, override=False)


def parse_edit(pairs: List[str]) -> Dict[str, Any]:
    patch: Dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Edit must be FIELD=VALUE, got {pair!r}")
        field, value = pair.split("=", 1)
        field = field.strip()
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field {field!r} is not editable (allowed: {', '.join(EDITABLE_FIELDS)})")
        patch[field] = value
    return patch


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find public saunas that are open today")
    parser.add_argument("--tab", choices=list(TABS), default=None, help="View tab (default: today)")
    parser.add_argument("--search", type=str, default="", help="Match name or municipality")
    parser.add_argument("--ice-swim", action="store_true", help="Only saunas with ice swimming (avanto)")
    parser.add_argument("--smoke-sauna", action="store_true", help="Only saunas with a smoke sauna")
    parser.add_argument("--lat", type=float, default=None, help="Your latitude (enables distance sort)")
    parser.add_argument("--lon", type=float, default=None, help="Your longitude (enables distance sort)")
    parser.add_argument("--random", action="store_true", help="Pick one sauna from the current results")
    parser.add_argument("--toggle-favorite", type=int, default=None, metavar="ID")
    parser.add_argument(
        "--edit",
        nargs="+",
        default=None,
        metavar="ARG",
        help="Edit a sauna locally: ID FIELD=VALUE [FIELD=VALUE ...]",
    )
    parser.add_argument("--clear-edits", action="store_true", help="Drop all local edits")
    parser.add_argument("--weather", action="store_true", help="Show current weather")
    parser.add_argument("--water", action="store_true", help="Show lake water temperatures")
    parser.add_argument("--catalogue", type=str, default=None, help="Catalogue JSON path or URL")
    parser.add_argument("--store", type=str, default=None, help="Local store database path")
    parser.add_argument("--out", type=str, default=None, help="Write results to this directory")
    args = parser.parse_args(argv)
    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together")
    return args


def _http_client(retry_max: Optional[int] = None) -> HttpClient:
    return HttpClient(
        timeout=config.HTTP_TIMEOUT_SECONDS,
        retry_max=config.HTTP_RETRY_MAX if retry_max is None else retry_max,
        backoff_base=config.HTTP_BACKOFF_BASE,
        backoff_max=config.HTTP_BACKOFF_MAX,
    )


def main(argv: Optional[List[str]] = None) -> int:
    load_env()
    config.load_finder_config()
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    source = args.catalogue or os.environ.get(config.CATALOGUE_ENV_VAR) or config.CATALOGUE_SOURCE
    http = _http_client()
    catalogue = load_catalogue_or_empty(source, http=http)

    kv = SqliteKeyValueStore(args.store or config.STORE_DB_PATH)
    try:
        finder = Finder(catalogue, favorites_store(kv), overrides_store(kv))

        if args.toggle_favorite is not None:
            now_favorite = finder.toggle_favorite(args.toggle_favorite)
            print(f"Favorite {args.toggle_favorite}: {'on' if now_favorite else 'off'}")

        if args.clear_edits:
            finder.clear_overrides()
            print("Local edits cleared")

        if args.edit:
            try:
                facility_id = int(args.edit[0])
                patch = parse_edit(args.edit[1:])
            except ValueError as exc:
                print(f"Edit error: {exc}", file=sys.stderr)
                return 2
            if not patch:
                print("Edit error: nothing to change", file=sys.stderr)
                return 2
            finder.update_facility(facility_id, patch)

        finder.select_tab(args.tab or config.DEFAULT_TAB)
        if args.search:
            finder.set_search(args.search)
        if args.ice_swim:
            finder.toggle_filter("require_ice_swim")
        if args.smoke_sauna:
            finder.toggle_filter("require_smoke_sauna")
        if args.lat is not None:
            finder.set_location(args.lat, args.lon)

        if args.weather:
            center = finder.user_location or config.DEFAULT_CENTER
            weather = fetch_weather(center["lat"], center["lon"], http=http)
            if weather is None:
                print("Weather: unavailable")
            else:
                print(f"Weather: {weather.temperature} C ({weather_kind(weather.weather_code)})")

        water_temps = fetch_water_temperatures(http=_http_client(retry_max=1)) if args.water else {}

        try:
            picked = None
            if args.random:
                picked = finder.surprise_me(rng=random.Random())
                if picked is None:
                    print("No saunas match the current filters")
                    return 1

            view = finder.view()
            rows = [list_row(f, view.day_index, water_temps) for f in view.facilities]
            if picked is not None:
                rows = [list_row(picked, view.day_index, water_temps)]

            lines = render_view(view, rows)
            for line in lines:
                print(line)

            if args.out:
                ensure_dir(args.out)
                write_results_json(f"{args.out}/results.json", rows)
                write_results_csv(f"{args.out}/results.csv", rows)
                write_week_grid_csv(f"{args.out}/week_grid.csv", week_grid(view.facilities))
                write_results_json(f"{args.out}/map_markers.json", map_markers(view.facilities, view.day_index))
                write_results_json(f"{args.out}/score_distribution.json", score_distribution(view.facilities))
                write_summary(f"{args.out}/summary.txt", lines + render_score_distribution(view.facilities))
                logger.info("Wrote outputs to %s", args.out)
        except Exception as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
    finally:
        kv.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
