from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

import pytest

from src.hr_payroll.hr_payroll.attendance.model import AttendanceSession
from src.hr_payroll.hr_payroll.core.constants import COMPANY_NAME
from src.hr_payroll.hr_payroll.core.enums import DayType, LeaveState, LeaveType
from src.hr_payroll.hr_payroll.leaves.model import LeaveRequest
from src.hr_payroll.hr_payroll.payroll.engine import compute_salary_slip, summarize_attendance
from src.hr_payroll.hr_payroll.periods.calendar_utils import working_days
from src.hr_payroll.hr_payroll.periods.model import Holiday

GENERATED_AT = datetime(2026, 4, 1, 10, 0, 0)


def _full_day(employee_id: str, day: date, idx: int, minutes: int = 540) -> AttendanceSession:
    start = datetime(day.year, day.month, day.day, 9, 0)
    return AttendanceSession(
        session_id=f"as-{employee_id}-{idx}",
        employee_id=employee_id,
        work_date=day,
        clock_in=start,
        clock_out=start + timedelta(minutes=minutes),
        worked_minutes=minutes,
    )


def _approved_leave(employee_id, start, end, day_type=DayType.FULL_DAY) -> LeaveRequest:
    return LeaveRequest(
        leave_id=f"leave-{start.isoformat()}",
        employee_id=employee_id,
        leave_type=LeaveType.PAID,
        day_type=day_type,
        from_date=start,
        to_date=end,
        reason="family",
        leave_days=1.0,
        state=LeaveState.APPROVED,
    )


@pytest.fixture
def e1(directory):
    return next(e for e in directory if e.employee_id == "e1")


@pytest.fixture
def march_days():
    return working_days(2026, 2, ())


def test_march_2026_has_22_working_days(march_days):
    assert len(march_days) == 22
    assert march_days[0] == date(2026, 3, 2)


def test_full_attendance_pays_full_month(e1, march_days):
    sessions = [_full_day("e1", d, i) for i, d in enumerate(march_days)]
    slip = compute_salary_slip(e1, sessions, [], [], 2026, 2, generated_at=GENERATED_AT)

    assert slip.slip_id == "slip-e1-2026-03"
    assert slip.period.label == "March 2026"
    assert slip.attendance_summary.working_days == 22
    assert slip.attendance_summary.paid_days == 22
    assert slip.attendance_summary.lop_days == 0
    assert slip.earnings.gross == 50000
    assert slip.net == 49800
    assert slip.allowances_total == 30000
    assert slip.currency == "USD"
    assert slip.company_name == COMPANY_NAME
    assert slip.revision == 1


def test_half_month_attendance(e1, march_days):
    sessions = [_full_day("e1", d, i) for i, d in enumerate(march_days[:11])]
    slip = compute_salary_slip(e1, sessions, [], [], 2026, 2, generated_at=GENERATED_AT)

    assert slip.attendance_summary.paid_days == 11
    assert slip.attendance_summary.lop_days == 11
    assert slip.earnings.gross == 25000
    assert slip.net == 24800


def test_same_inputs_give_equal_slips(e1, march_days):
    sessions = [_full_day("e1", d, i) for i, d in enumerate(march_days[:7])]
    first = compute_salary_slip(e1, sessions, [], [], 2026, 2, generated_at=GENERATED_AT)
    second = compute_salary_slip(e1, list(sessions), [], [], 2026, 2, generated_at=GENERATED_AT)
    assert first == second


def test_short_session_earns_half_credit():
    sessions = [_full_day("e1", date(2026, 3, 2), 1, minutes=120), _full_day("e1", date(2026, 3, 3), 2, minutes=300)]
    summary = summarize_attendance("e1", sessions, [], [], 2026, 2)
    assert summary.paid_days == 1.0


def test_sessions_on_one_date_are_summed():
    sessions = [_full_day("e1", date(2026, 3, 2), 1, minutes=300), _full_day("e1", date(2026, 3, 2), 2, minutes=240)]
    assert summarize_attendance("e1", sessions, [], [], 2026, 2).paid_days == 1.0


def test_other_employees_sessions_are_ignored():
    sessions = [_full_day("s1", date(2026, 3, 2), 1)]
    assert summarize_attendance("e1", sessions, [], [], 2026, 2).paid_days == 0


def test_approved_leave_is_credited_and_pending_is_not():
    leaves = [
        _approved_leave("e1", date(2026, 3, 2), date(2026, 3, 6)),
        _approved_leave("e1", date(2026, 3, 9), date(2026, 3, 9), DayType.HALF_DAY),
    ]
    pending = LeaveRequest(
        leave_id="leave-pending",
        employee_id="e1",
        leave_type=LeaveType.CASUAL,
        day_type=DayType.FULL_DAY,
        from_date=date(2026, 3, 10),
        to_date=date(2026, 3, 10),
        reason="trip",
        leave_days=1.0,
        state=LeaveState.PENDING,
    )
    summary = summarize_attendance("e1", [], leaves + [pending], [], 2026, 2)
    assert summary.paid_days == 5.5
    assert summary.lop_days == 16.5


def test_leave_takes_precedence_over_a_short_session():
    leaves = [_approved_leave("e1", date(2026, 3, 2), date(2026, 3, 2))]
    sessions = [_full_day("e1", date(2026, 3, 2), 1, minutes=60)]
    assert summarize_attendance("e1", sessions, leaves, [], 2026, 2).paid_days == 1.0


def test_holidays_only_count_within_the_same_month():
    holidays = [
        Holiday(holiday_id="h1", date=date(2026, 3, 10), name="Spring Day"),
        Holiday(holiday_id="h2", date=date(2026, 3, 14), name="Saturday Fair"),
        Holiday(holiday_id="h3", date=date(2026, 4, 10), name="April Day"),
    ]
    summary = summarize_attendance("e1", [], [], holidays, 2026, 2)
    assert summary.working_days == 21


def test_slip_snapshots_the_employee_profile(e1):
    slip = compute_salary_slip(e1, [], [], [], 2026, 2, generated_at=GENERATED_AT, company_name="Acme Ltd")
    profile = slip.employee_profile
    assert (profile.first_name, profile.last_name) == ("Rohan", "Kumar")
    assert profile.employee_code == "IT-E1"
    assert profile.department == "IT"
    assert profile.email == "e1@example.com"
    assert profile.account_number == ""
    assert slip.company_name == "Acme Ltd"
    assert slip.generated_on == GENERATED_AT


def test_missing_ctc_logs_fallback(directory, caplog):
    hr1 = directory[0]
    with caplog.at_level(logging.WARNING):
        slip = compute_salary_slip(hr1, [], [], [], 2026, 2, generated_at=GENERATED_AT)
    assert slip.earnings.gross == 0
    assert "fallback monthly gross" in caplog.text
