from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..core.constants import FULL_DAY_MINUTES, HALF_DAY_MINUTES
from ..core.enums import LeaveState
from ..leaves.model import LeaveRequest
from .strategies.base import AttendanceCreditStrategy
from .strategies.leave_strategy import ApprovedLeaveStrategy
from .strategies.worked_time_strategy import WorkedTimeStrategy


def find_covering_leave(employee_id: str, day: date, leaves: Iterable[LeaveRequest]) -> Optional[LeaveRequest]:
    for leave in leaves:
        if leave.employee_id == employee_id and leave.state == LeaveState.APPROVED and leave.covers(day):
            return leave
    return None


@dataclass
class AttendanceCreditFactory:
    """Factory Pattern: approved leave takes precedence over worked sessions."""

    full_day_minutes: int = FULL_DAY_MINUTES
    half_day_minutes: int = HALF_DAY_MINUTES

    def for_day(self, *, employee_id: str, day: date, leaves: Iterable[LeaveRequest]) -> AttendanceCreditStrategy:
        leave = find_covering_leave(employee_id, day, leaves)
        if leave is not None:
            return ApprovedLeaveStrategy(leave)
        return WorkedTimeStrategy(full_day_minutes=self.full_day_minutes, half_day_minutes=self.half_day_minutes)
