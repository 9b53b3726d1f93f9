from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Period:
    """A payroll month. ``month_index`` is 0-based (January = 0)."""

    year: int
    month_index: int
    key: str
    label: str


@dataclass(frozen=True)
class Holiday:
    """Read-only reference data for a period."""

    holiday_id: str
    date: date
    name: str
    type: str = "official"
