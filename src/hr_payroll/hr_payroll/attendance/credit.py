from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..leaves.model import LeaveRequest
from .factory import AttendanceCreditFactory
from .model import AttendanceSession


def resolve_attendance_credit(
    employee_id: str,
    day: date,
    sessions: Sequence[AttendanceSession],
    leaves: Sequence[LeaveRequest],
    *,
    factory: Optional[AttendanceCreditFactory] = None,
) -> float:
    """Day credit for one employee: 0, 0.5 or 1."""
    factory = factory or AttendanceCreditFactory()
    strategy = factory.for_day(employee_id=employee_id, day=day, leaves=leaves)
    return strategy.decide(employee_id=employee_id, day=day, sessions=sessions).credit
