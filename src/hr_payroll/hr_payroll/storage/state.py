from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, Iterable, Optional, Tuple, TypeVar

from ..attendance.model import AttendanceSession, RegularizationRequest
from ..core.constants import SCHEMA_VERSION
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from ..leaves.model import LeaveRequest
from ..payroll.slip import SalarySlip
from ..periods.model import Holiday

T = TypeVar("T")


def _upsert(items: Tuple[T, ...], item: T, same: Callable[[T], bool]) -> Tuple[T, ...]:
    out = []
    found = False
    for existing in items:
        if same(existing):
            out.append(item)
            found = True
        else:
            out.append(existing)
    if not found:
        out.append(item)
    return tuple(out)


@dataclass(frozen=True)
class HRState:
    """One immutable snapshot of the whole portal.

    Commands never mutate a snapshot; they return a new one built with the
    ``with_*`` helpers below.
    """

    schema_version: int = SCHEMA_VERSION
    employees: Tuple[Employee, ...] = ()
    attendance_sessions: Tuple[AttendanceSession, ...] = ()
    regularization_requests: Tuple[RegularizationRequest, ...] = ()
    leaves: Tuple[LeaveRequest, ...] = ()
    holidays: Tuple[Holiday, ...] = ()
    salary_slips: Tuple[SalarySlip, ...] = ()

    # Employees

    def find_employee(self, employee_id: Optional[str]) -> Optional[Employee]:
        return next((e for e in self.employees if e.employee_id == employee_id), None)

    def require_employee(self, employee_id: Optional[str]) -> Employee:
        employee = self.find_employee(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def first_admin(self) -> Optional[Employee]:
        return next((e for e in self.employees if e.role == Role.ADMIN), None)

    def with_employee(self, employee: Employee) -> "HRState":
        return replace(
            self,
            employees=_upsert(self.employees, employee, lambda e: e.employee_id == employee.employee_id),
        )

    # Leaves

    def require_leave(self, leave_id: str) -> LeaveRequest:
        leave = next((lv for lv in self.leaves if lv.leave_id == leave_id), None)
        if leave is None:
            raise NotFoundError(f"Leave request {leave_id} not found")
        return leave

    def leaves_for(self, employee_id: str) -> list[LeaveRequest]:
        return [lv for lv in self.leaves if lv.employee_id == employee_id]

    def with_leave(self, leave: LeaveRequest) -> "HRState":
        return replace(self, leaves=_upsert(self.leaves, leave, lambda lv: lv.leave_id == leave.leave_id))

    # Attendance

    def sessions_for(self, employee_id: str, work_date: Optional[date] = None) -> list[AttendanceSession]:
        return [
            s
            for s in self.attendance_sessions
            if s.employee_id == employee_id and (work_date is None or s.work_date == work_date)
        ]

    def open_session(self, employee_id: str) -> Optional[AttendanceSession]:
        open_sessions = [s for s in self.sessions_for(employee_id) if s.is_open]
        return open_sessions[-1] if open_sessions else None

    def with_sessions(self, sessions: Iterable[AttendanceSession]) -> "HRState":
        return replace(self, attendance_sessions=tuple(sessions))

    def find_regularization(self, request_id: Optional[str]) -> Optional[RegularizationRequest]:
        return next((r for r in self.regularization_requests if r.request_id == request_id), None)

    def with_regularization(self, request: RegularizationRequest) -> "HRState":
        return replace(
            self,
            regularization_requests=_upsert(
                self.regularization_requests, request, lambda r: r.request_id == request.request_id
            ),
        )

    # Payroll

    def slips_for(self, employee_id: str, period_key: Optional[str] = None) -> list[SalarySlip]:
        return [
            s
            for s in self.salary_slips
            if s.employee_id == employee_id and (period_key is None or s.period_key == period_key)
        ]

    def latest_slip(self, employee_id: str, period_key: str) -> Optional[SalarySlip]:
        slips = self.slips_for(employee_id, period_key)
        return max(slips, key=lambda s: s.revision) if slips else None

    def with_slip(self, slip: SalarySlip) -> "HRState":
        return replace(self, salary_slips=self.salary_slips + (slip,))
