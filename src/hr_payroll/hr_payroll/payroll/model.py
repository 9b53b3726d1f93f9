from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AttendanceSummary:
    working_days: int
    paid_days: float
    lop_days: float


@dataclass(frozen=True)
class Earnings:
    basic: int
    hra: int
    conveyance: int
    medical: int
    special_allowance: int
    other_allowance: int
    gross: int


@dataclass(frozen=True)
class Deductions:
    pf: int
    esi: int
    professional_tax: int
    tds: int
    loan_deduction: int
    total: int


@dataclass(frozen=True)
class PayrollBreakdown:
    """Calculator output for one employee and period."""

    attendance_factor: float
    monthly_gross: int
    target_gross: int
    earnings: Earnings
    deductions: Deductions
    net: int
