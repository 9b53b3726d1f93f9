from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, Optional

from ..core.constants import (
    ADMIN_PERMISSIONS,
    DEFAULT_BASIC_PCT,
    DEFAULT_CURRENCY,
    DEFAULT_ESI_RATE,
    DEFAULT_HRA_PCT,
    DEFAULT_PF_RATE,
    DEFAULT_PROFESSIONAL_TAX,
    EMPLOYEE_PERMISSIONS,
)
from ..core.enums import Role, TitleTag


@dataclass(frozen=True)
class CompensationTemplate:
    """Per-employee salary template.

    Percentages and statutory rates are percent numbers (40 means 40%).
    A PF/ESI deduction only applies when the matching registration number is set.
    """

    ctc_annual: float = 0
    currency: str = DEFAULT_CURRENCY
    basic_pct: float = DEFAULT_BASIC_PCT
    hra_pct: float = DEFAULT_HRA_PCT
    conveyance_fixed: float = 0
    medical_fixed: float = 0
    special_allowance_fixed: float = 0
    other_allowance_fixed: float = 0
    pf_rate: float = DEFAULT_PF_RATE
    esi_rate: float = DEFAULT_ESI_RATE
    professional_tax: float = DEFAULT_PROFESSIONAL_TAX
    tds: float = 0
    loan_deduction: float = 0
    pf_number: Optional[str] = None
    esi_number: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


@dataclass(frozen=True)
class BankAccount:
    account_number: str = ""
    ifsc_code: str = ""
    bank_name: str = ""


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object; role and title tags are fixed at onboarding and
    are not re-derived from ``designation`` later.
    """

    employee_id: str
    name: str
    email: str
    department: str
    designation: str = ""
    role: Role = Role.EMPLOYEE
    title_tags: FrozenSet[TitleTag] = field(default_factory=frozenset)
    manager_id: Optional[str] = None
    permissions: FrozenSet[str] = field(default_factory=lambda: frozenset(EMPLOYEE_PERMISSIONS))
    joining_date: Optional[date] = None
    employee_code: str = ""
    bank_account: Optional[BankAccount] = None
    compensation: Optional[CompensationTemplate] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def has_permission(self, key: str) -> bool:
        return self.is_admin or key in self.permissions


def infer_title_tags(designation: Optional[str]) -> FrozenSet[TitleTag]:
    """Legacy rule: read seniority from the free-text designation."""
    text = (designation or "").lower()
    tags = set()
    if "manager" in text:
        tags.add(TitleTag.MANAGER)
    if "senior" in text:
        tags.add(TitleTag.SENIOR)
    return frozenset(tags)


def permissions_for(role: Role, extra: Optional[FrozenSet[str]] = None) -> FrozenSet[str]:
    """Admins always get the full admin set; employees keep at least the employee set."""
    base = ADMIN_PERMISSIONS if role == Role.ADMIN else EMPLOYEE_PERMISSIONS
    return frozenset(base) | frozenset(extra or ())


def default_employee_code(department: str, employee_id: str) -> str:
    prefix = (department or "EMP")[:3].upper()
    return f"{prefix}-{employee_id[-4:].upper()}"
