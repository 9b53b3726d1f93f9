"""Payroll computation for one employee and one calendar month.

The engine is a pure function of its inputs: the same employee, sessions,
leaves, holidays and period always give the same slip (``generated_at`` is
passed in, not read from the clock).
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.factory import AttendanceCreditFactory
from ..attendance.model import AttendanceSession
from ..common.money import round_one_decimal
from ..employees.model import CompensationTemplate, Employee
from ..leaves.model import LeaveRequest
from ..periods.calendar_utils import make_period, working_days
from ..periods.model import Holiday
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import AttendanceSummary
from .rules import PayrollRules
from .slip import SalarySlip, assemble_salary_slip

logger = logging.getLogger(__name__)


def summarize_attendance(
    employee_id: str,
    sessions: Sequence[AttendanceSession],
    leaves: Sequence[LeaveRequest],
    holidays: Sequence[Holiday],
    year: int,
    month_index: int,
    *,
    factory: Optional[AttendanceCreditFactory] = None,
) -> AttendanceSummary:
    """Working days and paid days of a month; weekends and same-month holidays are skipped."""
    factory = factory or AttendanceCreditFactory()
    own_sessions = [s for s in sessions if s.employee_id == employee_id]
    own_leaves = [lv for lv in leaves if lv.employee_id == employee_id]

    days = working_days(year, month_index, holidays)
    paid = 0.0
    for day in days:
        strategy = factory.for_day(employee_id=employee_id, day=day, leaves=own_leaves)
        paid += strategy.decide(employee_id=employee_id, day=day, sessions=own_sessions).credit

    return AttendanceSummary(
        working_days=len(days),
        paid_days=round_one_decimal(paid),
        lop_days=round_one_decimal(max(len(days) - paid, 0)),
    )


def compute_salary_slip(
    employee: Employee,
    sessions: Sequence[AttendanceSession],
    leaves: Sequence[LeaveRequest],
    holidays: Sequence[Holiday],
    year: int,
    month_index: int,
    *,
    generated_at: datetime,
    company_name: Optional[str] = None,
    rules: Optional[PayrollRules] = None,
    calculator: Optional[PayrollCalculator] = None,
) -> SalarySlip:
    rules = rules or PayrollRules()
    calculator = calculator or StandardPayrollCalculator(rules)
    factory = AttendanceCreditFactory(
        full_day_minutes=rules.full_day_minutes,
        half_day_minutes=rules.half_day_minutes,
    )

    period = make_period(year, month_index)
    template = employee.compensation or CompensationTemplate()
    if not template.ctc_annual or float(template.ctc_annual) <= 0:
        logger.warning(
            "No CTC on file for employee %s; using fallback monthly gross %s for %s",
            employee.employee_id,
            rules.fallback_monthly_gross,
            period.key,
        )

    summary = summarize_attendance(
        employee.employee_id, sessions, leaves, holidays, year, month_index, factory=factory
    )
    breakdown = calculator.compute(
        template=template,
        working_days=summary.working_days,
        paid_days=summary.paid_days,
    )

    return assemble_salary_slip(
        employee,
        period,
        summary,
        breakdown,
        generated_at=generated_at,
        company_name=company_name,
        template=template,
    )
