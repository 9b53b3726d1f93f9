from __future__ import annotations

from datetime import date, datetime, time
from typing import Callable, Optional, Union

Clock = Callable[[], datetime]

DateLike = Union[date, datetime, str, None]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def to_date_string(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def coerce_date(value: DateLike) -> Optional[date]:
    """Normalize a date-ish value to a midnight-free ``date``.

    Returns None for missing or unparseable input instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip()[:10])
    except ValueError:
        return None


def at_time(day: date, hh_mm: str) -> datetime:
    return datetime.combine(day, time.fromisoformat(hh_mm))


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
