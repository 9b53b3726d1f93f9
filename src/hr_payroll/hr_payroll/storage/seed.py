"""Demo directory used by ``scripts/seed_db.py`` and the in-memory dev server."""

from __future__ import annotations

from datetime import date

from ..core.enums import Role
from ..employees.model import BankAccount, CompensationTemplate, Employee, infer_title_tags, permissions_for
from ..periods.model import Holiday
from .state import HRState


def _employee(
    employee_id: str,
    name: str,
    email: str,
    designation: str,
    department: str,
    *,
    role: Role = Role.EMPLOYEE,
    manager_id: str | None = None,
    joining_date: date | None = None,
    employee_code: str = "",
    compensation: CompensationTemplate | None = None,
    bank_account: BankAccount | None = None,
) -> Employee:
    return Employee(
        employee_id=employee_id,
        name=name,
        email=email,
        department=department,
        designation=designation,
        role=role,
        title_tags=infer_title_tags(designation),
        manager_id=manager_id,
        permissions=permissions_for(role),
        joining_date=joining_date,
        employee_code=employee_code,
        bank_account=bank_account,
        compensation=compensation,
    )


def demo_state(today: date) -> HRState:
    employees = (
        _employee(
            "u1",
            "Ananya Mehta",
            "admin@hrportal.com",
            "HR Admin",
            "Human Resources",
            role=Role.ADMIN,
            joining_date=date(2020, 1, 10),
            employee_code="HR-U1",
        ),
        _employee(
            "u2",
            "Rohan Kumar",
            "employee@hrportal.com",
            "Software Engineer",
            "IT",
            manager_id="u6",
            joining_date=date(2023, 6, 1),
            employee_code="IT-U2",
            compensation=CompensationTemplate(ctc_annual=600000, pf_number="PF/IT/0002"),
            bank_account=BankAccount(account_number="001234567890", ifsc_code="HDFC0001234", bank_name="HDFC Bank"),
        ),
        _employee("u3", "Sara Wilson", "sara@hrportal.com", "Product Designer", "Design", manager_id="u1"),
        _employee("u4", "Daniel Brown", "daniel@hrportal.com", "Finance Analyst", "Finance", manager_id="u1"),
        _employee("u5", "Priya Nair", "priya@hrportal.com", "IT Support Engineer", "IT", manager_id="u6"),
        _employee(
            "u6",
            "Vikram Singh",
            "manager.it@hrportal.com",
            "Senior IT Manager",
            "IT",
            manager_id="u1",
            joining_date=date(2019, 3, 15),
        ),
    )
    holidays = (
        Holiday(holiday_id="h1", date=today.replace(day=10), name="Founders Day"),
        Holiday(holiday_id="h2", date=today.replace(day=25), name="Festival Holiday"),
    )
    return HRState(employees=employees, holidays=holidays)
