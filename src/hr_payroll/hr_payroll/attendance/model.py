from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one clock-in/clock-out work session.

    ``worked_minutes`` is filled at clock-out or overridden by regularization.
    An open session has ``clock_out`` set to None.
    """

    session_id: str
    employee_id: str
    work_date: date
    clock_in: datetime
    clock_out: Optional[datetime] = None
    worked_minutes: int = 0

    @property
    def is_open(self) -> bool:
        return self.clock_out is None


@dataclass(frozen=True)
class RegularizationRequest:
    request_id: str
    employee_id: str
    work_date: date
    reason: str
    recipient_id: Optional[str]
    status: RequestStatus
    created_at: datetime
    reviewed_by: Optional[str] = None
    review_comment: str = ""
    reviewed_at: Optional[datetime] = None
