# core/formatting.py

from __future__ import annotations

from typing import Iterable, Optional

from core.models import TRIP_TYPES

RESTAURANT_SEPARATOR = " ، "


def format_duration(duration: Optional[str]) -> str:
    """
    "02:30" → "2 hours and 30 minutes", "01:00" → "1 hour", "00:00" → "0 minutes".
    Empty or missing duration → "-".
    """
    if not duration:
        return "-"
    hours_s, _, minutes_s = duration.partition(":")
    try:
        h = int(hours_s or 0)
        m = int(minutes_s or 0)
    except ValueError:
        return duration

    parts = []
    if h > 0:
        parts.append(f"{h} {'hour' if h == 1 else 'hours'}")
    if m > 0:
        parts.append(f"{m} {'minute' if m == 1 else 'minutes'}")
    return " and ".join(parts) or "0 minutes"


def trip_type_label(trip_type: str) -> str:
    # Unknown values fall back to food & beverage
    if trip_type in ("nile", "drink"):
        return TRIP_TYPES[trip_type]
    return TRIP_TYPES["foodBeverage"]


def restaurants_label(names: Iterable[str]) -> str:
    names = list(names or [])
    return RESTAURANT_SEPARATOR.join(names) if names else "-"


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def preview_trip_number(trip_date: str, trips) -> str:
    """Count of cached trips on the same date, plus one. Display only."""
    if not trip_date:
        return ""
    return str(sum(1 for t in trips if t.trip_date == trip_date) + 1)
