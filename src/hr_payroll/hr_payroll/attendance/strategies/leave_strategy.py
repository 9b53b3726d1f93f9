from __future__ import annotations

from datetime import date
from typing import Sequence

from ...core.enums import DayType
from ...leaves.model import LeaveRequest
from ..model import AttendanceSession
from .base import AttendanceCreditStrategy, CreditDecision


class ApprovedLeaveStrategy(AttendanceCreditStrategy):
    """Approved leave covers the day: full credit, or half for a Half Day leave."""

    def __init__(self, leave: LeaveRequest):
        self._leave = leave

    def decide(self, *, employee_id: str, day: date, sessions: Sequence[AttendanceSession]) -> CreditDecision:
        credit = 0.5 if self._leave.day_type == DayType.HALF_DAY else 1.0
        return CreditDecision(credit=credit, source=f"leave:{self._leave.leave_id}")
