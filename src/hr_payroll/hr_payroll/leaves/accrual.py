from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..common.money import round_one_decimal
from ..core.constants import PAID_LEAVE_ACCRUAL_PER_MONTH
from ..core.enums import LeaveState, LeaveType
from ..employees.model import Employee
from .model import LeaveRequest
from .workflow import leave_days


@dataclass(frozen=True)
class PaidLeaveSummary:
    accrued: float
    used: float
    remaining: float


def accrual_months(joining_date: date, as_of: date) -> int:
    """Calendar months from the joining month to ``as_of``, both inclusive; never negative."""
    months = (as_of.year - joining_date.year) * 12 + (as_of.month - joining_date.month) + 1
    return max(months, 0)


def paid_leave_summary(
    employee: Employee,
    leaves: Iterable[LeaveRequest],
    as_of: date,
    *,
    accrual_per_month: float = PAID_LEAVE_ACCRUAL_PER_MONTH,
) -> PaidLeaveSummary:
    joining = employee.joining_date or date(as_of.year, 1, 1)
    accrued = round_one_decimal(accrual_months(joining, as_of) * accrual_per_month)

    used = sum(
        leave.leave_days or leave_days(leave.from_date, leave.to_date, leave.day_type)
        for leave in leaves
        if leave.employee_id == employee.employee_id
        and leave.state == LeaveState.APPROVED
        and leave.leave_type == LeaveType.PAID
    )

    return PaidLeaveSummary(
        accrued=accrued,
        used=round_one_decimal(used),
        remaining=round_one_decimal(max(accrued - used, 0)),
    )
