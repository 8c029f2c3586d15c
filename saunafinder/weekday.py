"""Weekday arithmetic on the Monday=1 .. Sunday=7 convention."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from . import config

DAYS_IN_WEEK = 7

DAY_NAMES: Dict[str, List[str]] = {
    "en": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
    "fi": ["Maanantai", "Tiistai", "Keskiviikko", "Torstai", "Perjantai", "Lauantai", "Sunnuntai"],
}


def from_sunday_based(day: int) -> int:
    """Map a Sunday=0 .. Saturday=6 day number onto Monday=1 .. Sunday=7."""
    return DAYS_IN_WEEK if day == 0 else day


def current_day_index(today: Optional[date] = None) -> int:
    if today is None:
        today = date.today()
    # weekday() is Monday=0; shift to the Sunday=0 numbering first.
    return from_sunday_based((today.weekday() + 1) % DAYS_IN_WEEK)


def is_valid_day_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= DAYS_IN_WEEK


def day_name(index: int, locale: Optional[str] = None) -> str:
    if not is_valid_day_index(index):
        return ""
    names = DAY_NAMES.get(locale or config.DAY_NAME_LOCALE, DAY_NAMES["en"])
    return names[index - 1]


def short_day_name(index: int, locale: Optional[str] = None) -> str:
    return day_name(index, locale)[:3]


def wrap_day(from_day: int, offset: int) -> int:
    return (from_day + offset - 1) % DAYS_IN_WEEK + 1
