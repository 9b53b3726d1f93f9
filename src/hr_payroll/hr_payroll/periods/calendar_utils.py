"""Calendar and period arithmetic.

Every function here is pure. Months are addressed by ``(year, month_index)``
with a 0-based month index, and periods are keyed ``"YYYY-MM"`` so that plain
string comparison sorts them chronologically.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..core.exceptions import ValidationError
from .model import Holiday, Period


def _check_month_index(month_index: int) -> None:
    if not 0 <= int(month_index) <= 11:
        raise ValidationError(f"Month index must be between 0 and 11, got {month_index}")


def period_key(year: int, month_index: int) -> str:
    _check_month_index(month_index)
    return f"{int(year):04d}-{int(month_index) + 1:02d}"


def period_label(year: int, month_index: int) -> str:
    _check_month_index(month_index)
    return f"{calendar.month_name[int(month_index) + 1]} {int(year)}"


def make_period(year: int, month_index: int) -> Period:
    return Period(
        year=int(year),
        month_index=int(month_index),
        key=period_key(year, month_index),
        label=period_label(year, month_index),
    )


def parse_period_key(key: str) -> Period:
    if not isinstance(key, str):
        raise ValidationError(f"Invalid period key: {key!r} (expected YYYY-MM)")
    try:
        year_s, month_s = (key or "").split("-")
        year, month = int(year_s), int(month_s)
    except ValueError:
        raise ValidationError(f"Invalid period key: {key!r} (expected YYYY-MM)")
    return make_period(year, month - 1)


def period_key_from_label(label: str) -> str:
    """``"March 2026"`` -> ``"2026-03"``; empty string when unparseable."""
    if not label:
        return ""
    try:
        parsed = datetime.strptime(label.strip(), "%B %Y")
    except ValueError:
        return ""
    return period_key(parsed.year, parsed.month - 1)


def current_month_period(reference: date) -> Period:
    return make_period(reference.year, reference.month - 1)


def previous_month_period(reference: date) -> Period:
    if reference.month == 1:
        return make_period(reference.year - 1, 11)
    return make_period(reference.year, reference.month - 2)


def days_in_period(year: int, month_index: int) -> list[date]:
    _check_month_index(month_index)
    first = date(int(year), int(month_index) + 1, 1)
    count = calendar.monthrange(first.year, first.month)[1]
    return [first + timedelta(days=i) for i in range(count)]


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def holidays_in_period(holidays: Iterable[Holiday], year: int, month_index: int) -> set[date]:
    """Holiday dates that fall inside the given month; everything else is dropped."""
    return {
        h.date
        for h in holidays
        if h.date is not None and h.date.year == int(year) and h.date.month == int(month_index) + 1
    }


def is_holiday(
    day: date,
    holidays: Iterable[Holiday],
    *,
    year: Optional[int] = None,
    month_index: Optional[int] = None,
) -> bool:
    """Exact date match against holidays of the queried month only.

    The queried month defaults to the month of ``day``.
    """
    year = day.year if year is None else year
    month_index = day.month - 1 if month_index is None else month_index
    return day in holidays_in_period(holidays, year, month_index)


def working_days(year: int, month_index: int, holidays: Iterable[Holiday]) -> list[date]:
    """Days that are neither weekend nor a holiday of the same month."""
    holiday_dates = holidays_in_period(holidays, year, month_index)
    return [d for d in days_in_period(year, month_index) if not is_weekend(d) and d not in holiday_dates]
