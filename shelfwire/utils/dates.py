"""Datetime helpers."""

from __future__ import annotations

import os
from datetime import date, timedelta

import pendulum

DEFAULT_TZ = "America/Los_Angeles"

LOOKBACK_WINDOWS: dict[str, int | None] = {
    "all": None,
    "90days": 90,
    "45days": 45,
    "30days": 30,
    "15days": 15,
}


def timezone_name() -> str:
    return os.environ.get("TIMEZONE", DEFAULT_TZ)


def now_in_tz() -> pendulum.DateTime:
    tz = pendulum.timezone(timezone_name())
    return pendulum.now(tz)


def today_in_tz() -> date:
    return now_in_tz().date()


def parse_iso_date(value: str) -> date:
    return pendulum.parse(value).date()


def format_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def lookback_cutoff(window: str, as_of: date | None = None) -> date | None:
    """Cutoff date for a named lookback window; ``None`` means lifetime."""
    if window not in LOOKBACK_WINDOWS:
        raise KeyError(window)
    days = LOOKBACK_WINDOWS[window]
    if days is None:
        return None
    return (as_of or today_in_tz()) - timedelta(days=days)
