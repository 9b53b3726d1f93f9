from __future__ import annotations

from datetime import date, datetime

import pytest

from src.hr_payroll.hr_payroll.core.enums import Role, TitleTag
from src.hr_payroll.hr_payroll.employees.model import CompensationTemplate, Employee, permissions_for
from src.hr_payroll.hr_payroll.storage.memory_store import InMemoryKeyValueStore
from src.hr_payroll.hr_payroll.storage.state import HRState
from src.hr_payroll.hr_payroll.storage.state_store import StateStore


def _employee(employee_id, name, department, designation, *, role=Role.EMPLOYEE, tags=(), manager_id=None, **kwargs):
    return Employee(
        employee_id=employee_id,
        name=name,
        email=f"{employee_id}@example.com",
        department=department,
        designation=designation,
        role=role,
        title_tags=frozenset(tags),
        manager_id=manager_id,
        permissions=permissions_for(role),
        **kwargs,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def directory() -> tuple[Employee, ...]:
    """hr1 is an admin, m1 manages e1, s1 is a senior in e1's department, s2 a senior elsewhere."""
    return (
        _employee("hr1", "Ananya Mehta", "Human Resources", "HR Admin", role=Role.ADMIN),
        _employee("m1", "Vikram Singh", "IT", "Engineering Manager", tags=[TitleTag.MANAGER], manager_id="hr1"),
        _employee("s1", "Priya Nair", "IT", "Senior Engineer", tags=[TitleTag.SENIOR], manager_id="m1"),
        _employee(
            "e1",
            "Rohan Kumar",
            "IT",
            "Software Engineer",
            manager_id="m1",
            joining_date=date(2025, 1, 15),
            employee_code="IT-E1",
            compensation=CompensationTemplate(ctc_annual=600000),
        ),
        _employee("s2", "Sara Wilson", "Design", "Senior Designer", tags=[TitleTag.SENIOR], manager_id="hr1"),
    )


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv, directory) -> StateStore:
    return StateStore(kv, seed=HRState(employees=directory))


@pytest.fixture
def counter_ids():
    """Deterministic id factory: leave-1, leave-2, as-1, ..."""
    counts: dict[str, int] = {}

    def _new_id(prefix: str) -> str:
        counts[prefix] = counts.get(prefix, 0) + 1
        return f"{prefix}-{counts[prefix]}"

    return _new_id
