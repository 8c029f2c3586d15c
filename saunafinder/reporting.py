"""Output reporting helpers."""
from __future__ import annotations

import csv
import json
import os
import tempfile
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, TextIO

from .engine import ViewResult
from .filters import VIEW_CALENDAR, VIEW_MAP
from .scoring import score_distribution
from .weekday import DAYS_IN_WEEK, short_day_name


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def _fsync_dir(path: str) -> None:
    try:
        dir_fd = os.open(path, os.O_DIRECTORY)
    except OSError:
        return
    try:
        os.fsync(dir_fd)
    except OSError:
        pass
    finally:
        os.close(dir_fd)


@contextmanager
def atomic_writer(
    path: str,
    mode: str = "w",
    encoding: str = "utf-8",
    newline: Optional[str] = None,
) -> Iterator[TextIO]:
    dir_path = os.path.dirname(path) or "."
    base = os.path.basename(path)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{base}.", suffix=".tmp", dir=dir_path)
    try:
        with os.fdopen(fd, mode, encoding=encoding, newline=newline) as f:
            yield f
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
        _fsync_dir(dir_path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def atomic_write_text(path: str, text: str) -> None:
    with atomic_writer(path, mode="w", encoding="utf-8") as f:
        f.write(text)


def write_results_json(path: str, rows: Iterable[Dict[str, Any]]) -> None:
    with atomic_writer(path, mode="w", encoding="utf-8") as f:
        json.dump(list(rows), f, ensure_ascii=False, indent=2)


def write_results_csv(path: str, rows: Iterable[Dict[str, Any]]) -> None:
    rows = list(rows)
    if not rows:
        with atomic_writer(path, mode="w", encoding="utf-8", newline="") as f:
            f.write("")
        return

    fieldnames = [
        "id",
        "rank",
        "name",
        "municipality",
        "score",
        "open_today",
        "hours_start",
        "hours_end",
        "hours_note",
        "next_opening",
        "distance_km",
        "distance_text",
        "water_temp",
        "features",
        "rating_profile",
    ]
    with atomic_writer(path, mode="w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            out = dict(row)
            out["features"] = json.dumps(out.get("features", []), ensure_ascii=False)
            out["rating_profile"] = json.dumps(out.get("rating_profile", []), ensure_ascii=False)
            writer.writerow(out)


def write_week_grid_csv(path: str, grid_rows: Iterable[Dict[str, Any]]) -> None:
    days = [short_day_name(d) for d in range(1, DAYS_IN_WEEK + 1)]
    with atomic_writer(path, mode="w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "name"] + days)
        for row in grid_rows:
            writer.writerow([row["id"], row["name"]] + [_grid_cell_text(row["days"][d]) for d in days])


def _grid_cell_text(cell: Dict[str, Any]) -> str:
    if cell["open"]:
        return cell["time"]
    if cell.get("next_open_day"):
        return f"-> {cell['next_open_day']}"
    return "-"


def render_view(view: ViewResult, rows: List[Dict[str, Any]]) -> List[str]:
    lines = []
    if view.view_mode == VIEW_CALENDAR:
        title = "Weekly grid"
    elif view.view_mode == VIEW_MAP:
        title = "Map"
    elif view.criteria.favorites_only:
        title = "Your Favorites"
    elif view.criteria.only_open:
        title = f"Open Today ({view.day_name})"
    else:
        title = "All Saunas"
    lines.append(f"{title}: {view.active_count} of {view.total_count} saunas")
    if view.distance_sorted:
        lines.append("Sorted by distance")
    for row in rows:
        rank = row.get("rank")
        prefix = f"#{rank}" if rank is not None else "--"
        status = "open" if row["open_today"] else f"closed, next: {row['next_opening']}"
        if row["open_today"] and row.get("hours_start"):
            status = f"open {row['hours_start']} - {row['hours_end']}"
        parts = [f"{prefix} {row['name']} ({row.get('municipality') or '?'})", status]
        if row.get("distance_text"):
            parts.append(row["distance_text"])
        if row.get("water_temp") is not None:
            parts.append(f"water {row['water_temp']} C")
        lines.append(" | ".join(parts))
    return lines


def write_summary(path: str, summary_lines: List[str]) -> None:
    atomic_write_text(path, "\n".join(summary_lines) + "\n")


def render_score_distribution(facilities: Iterable[Dict[str, Any]], bins: int = 15) -> List[str]:
    buckets = score_distribution(facilities, bins=bins)
    if not buckets:
        return []
    lines = ["", "Score distribution:"]
    for bucket in buckets:
        lines.append(f"{bucket['x0']:6.1f} - {bucket['x1']:6.1f} | {'#' * bucket['count']}")
    return lines
