from __future__ import annotations

from datetime import date
from typing import Sequence

from ...core.constants import FULL_DAY_MINUTES, HALF_DAY_MINUTES
from ..model import AttendanceSession
from .base import AttendanceCreditStrategy, CreditDecision


class WorkedTimeStrategy(AttendanceCreditStrategy):
    """Credit from the sum of worked minutes across the day's sessions.

    Any work below the half-day threshold still earns half credit.
    """

    def __init__(self, *, full_day_minutes: int = FULL_DAY_MINUTES, half_day_minutes: int = HALF_DAY_MINUTES):
        self._full_day_minutes = int(full_day_minutes)
        self._half_day_minutes = int(half_day_minutes)

    def decide(self, *, employee_id: str, day: date, sessions: Sequence[AttendanceSession]) -> CreditDecision:
        minutes = sum(
            int(s.worked_minutes or 0) for s in sessions if s.employee_id == employee_id and s.work_date == day
        )

        if minutes >= self._full_day_minutes:
            return CreditDecision(credit=1.0, source="sessions")
        if minutes >= self._half_day_minutes or minutes > 0:
            return CreditDecision(credit=0.5, source="sessions")
        return CreditDecision(credit=0.0, source="absent")
