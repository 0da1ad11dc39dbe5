from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Any


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_date(value: Any) -> date:
    """Turn a stored or submitted date value into a ``date``.

    Accepts ``date``/``datetime`` objects and ISO-8601 strings
    (``2025-01-10`` or ``2025-01-10T08:00:00Z``). Raises ``ValueError`` for
    anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        if len(text) == 10:
            return parse_iso_date(text)
        return datetime.fromisoformat(text).date()
    raise ValueError(f"Unsupported date value: {value!r}")


def first_sunday(year: int, month_index: int) -> date:
    """First Sunday of a month (month_index is 0-based)."""
    first = date(year, month_index + 1, 1)
    days_until_sunday = (calendar.SUNDAY - first.weekday()) % 7
    return first.replace(day=1 + days_until_sunday)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
