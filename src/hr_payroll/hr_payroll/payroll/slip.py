from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import COMPANY_NAME
from ..employees.model import CompensationTemplate, Employee
from ..periods.model import Period
from .model import AttendanceSummary, Deductions, Earnings, PayrollBreakdown


@dataclass(frozen=True)
class EmployeeProfileSnapshot:
    """Identity and bank fields copied onto the slip at generation time."""

    first_name: str
    last_name: str
    employee_code: str
    department: str
    designation: str
    email: str
    pf_number: str = ""
    esi_number: str = ""
    account_number: str = ""
    ifsc_code: str = ""
    bank_name: str = ""


@dataclass(frozen=True)
class SalarySlip:
    """Immutable payslip for one employee and period.

    Recomputing a period produces a new slip with a higher ``revision``;
    stored slips are never patched.
    """

    slip_id: str
    employee_id: str
    company_name: str
    period: Period
    currency: str
    generated_on: datetime
    employee_profile: EmployeeProfileSnapshot
    compensation: CompensationTemplate
    attendance_summary: AttendanceSummary
    earnings: Earnings
    deductions: Deductions
    net: int
    revision: int = 1

    @property
    def period_key(self) -> str:
        return self.period.key

    @property
    def allowances_total(self) -> int:
        return self.earnings.gross - self.earnings.basic


def slip_id_for(employee_id: str, period_key: str) -> str:
    return f"slip-{employee_id}-{period_key}"


def split_name(name: str) -> tuple[str, str]:
    parts = (name or "").split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def snapshot_profile(employee: Employee, template: CompensationTemplate) -> EmployeeProfileSnapshot:
    first, last = split_name(employee.name)
    bank = employee.bank_account
    return EmployeeProfileSnapshot(
        first_name=template.first_name or first,
        last_name=template.last_name or last,
        employee_code=employee.employee_code,
        department=employee.department,
        designation=employee.designation,
        email=employee.email,
        pf_number=template.pf_number or "",
        esi_number=template.esi_number or "",
        account_number=bank.account_number if bank else "",
        ifsc_code=bank.ifsc_code if bank else "",
        bank_name=bank.bank_name if bank else "",
    )


def assemble_salary_slip(
    employee: Employee,
    period: Period,
    summary: AttendanceSummary,
    breakdown: PayrollBreakdown,
    *,
    generated_at: datetime,
    company_name: Optional[str] = None,
    template: Optional[CompensationTemplate] = None,
) -> SalarySlip:
    template = template or employee.compensation or CompensationTemplate()
    return SalarySlip(
        slip_id=slip_id_for(employee.employee_id, period.key),
        employee_id=employee.employee_id,
        company_name=company_name or COMPANY_NAME,
        period=period,
        currency=template.currency,
        generated_on=generated_at,
        employee_profile=snapshot_profile(employee, template),
        compensation=template,
        attendance_summary=summary,
        earnings=breakdown.earnings,
        deductions=breakdown.deductions,
        net=breakdown.net,
    )
