from __future__ import annotations

import logging
import re
from dataclasses import fields, replace
from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import Clock, DateLike, coerce_date, now_local
from ..common.ids import IdFactory, new_id
from ..common.validators import require_choice, require_non_empty, require_non_negative
from ..core.enums import Role, TitleTag
from ..core.exceptions import AuthorizationError, ValidationError
from ..storage.state import HRState
from ..storage.state_store import StateStore
from .model import (
    BankAccount,
    CompensationTemplate,
    Employee,
    default_employee_code,
    infer_title_tags,
    permissions_for,
)

logger = logging.getLogger(__name__)

NON_NEGATIVE_TEMPLATE_FIELDS = (
    "ctc_annual",
    "basic_pct",
    "hra_pct",
    "conveyance_fixed",
    "medical_fixed",
    "special_allowance_fixed",
    "other_allowance_fixed",
    "pf_rate",
    "esi_rate",
    "professional_tax",
    "tds",
    "loan_deduction",
)


def validate_template(template: CompensationTemplate) -> CompensationTemplate:
    for name in NON_NEGATIVE_TEMPLATE_FIELDS:
        require_non_negative(getattr(template, name), name.replace("_", " ").capitalize())
    if template.basic_pct + template.hra_pct > 100:
        raise ValidationError("Basic and HRA percentages cannot exceed 100% together")
    return template


class EmployeeService:
    """Use cases: onboarding, payroll setup, access control."""

    def __init__(self, store: StateStore, *, clock: Clock = now_local, id_factory: IdFactory = new_id):
        self._store = store
        self._clock = clock
        self._new_id = id_factory

    def get_employee(self, employee_id: str) -> Employee:
        return self._store.snapshot().require_employee(employee_id)

    def list_employees(self) -> list[Employee]:
        return sorted(self._store.snapshot().employees, key=lambda e: e.name.lower())

    def onboard(
        self,
        *,
        actor_id: str,
        name: str,
        email: str,
        department: str,
        designation: str = "",
        role: Role | str = Role.EMPLOYEE,
        title_tags: Optional[Iterable[TitleTag | str]] = None,
        manager_id: Optional[str] = None,
        joining_date: DateLike = None,
        permissions: Optional[Iterable[str]] = None,
        bank_account: Optional[BankAccount] = None,
        compensation: Optional[CompensationTemplate] = None,
        now: Optional[datetime] = None,
    ) -> Employee:
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email")
        department = require_non_empty(department, "Department")
        role = require_choice(Role, role, "Role")
        designation = (designation or "").strip() or f"{department} Associate"
        if title_tags is None:
            tags = infer_title_tags(designation)
        else:
            tags = frozenset(require_choice(TitleTag, t, "Title tag") for t in title_tags)
        if compensation is not None:
            validate_template(compensation)
        now = now or self._clock()

        def command(state: HRState):
            actor = state.require_employee(actor_id)
            if not actor.has_permission("access"):
                raise AuthorizationError("You are not allowed to onboard employees")
            if any(e.email.lower() == email.lower() for e in state.employees):
                raise ValidationError("Email already exists")
            if manager_id:
                state.require_employee(manager_id)

            employee_id = self._new_id("u")
            employee = Employee(
                employee_id=employee_id,
                name=name,
                email=email,
                department=department,
                designation=designation,
                role=role,
                title_tags=tags,
                manager_id=manager_id or actor.employee_id,
                permissions=permissions_for(role, frozenset(permissions or ())),
                joining_date=coerce_date(joining_date) or now.date(),
                employee_code=default_employee_code(department, employee_id),
                bank_account=bank_account,
                compensation=compensation,
            )
            return state.with_employee(employee), employee

        employee = self._store.execute(command)
        logger.info("Employee %s (%s) onboarded by %s", employee.employee_id, employee.email, actor_id)
        return employee

    def update_compensation(
        self,
        *,
        actor_id: str,
        employee_id: str,
        template: CompensationTemplate,
        bank_account: Optional[BankAccount] = None,
        employee_code: Optional[str] = None,
    ) -> Employee:
        """Replace the salary template wholesale; bank details and code only when given."""
        validate_template(template)

        def command(state: HRState):
            actor = state.require_employee(actor_id)
            if not actor.has_permission("payroll_admin"):
                raise AuthorizationError("You are not allowed to edit payroll details")
            employee = state.require_employee(employee_id)
            updated = replace(
                employee,
                compensation=template,
                bank_account=bank_account if bank_account is not None else employee.bank_account,
                employee_code=(employee_code or "").strip() or employee.employee_code,
            )
            return state.with_employee(updated), updated

        employee = self._store.execute(command)
        logger.info("Compensation of %s updated by %s", employee_id, actor_id)
        return employee

    def update_access(
        self,
        *,
        actor_id: str,
        employee_id: str,
        role: Role | str,
        permissions: Optional[Iterable[str]] = None,
    ) -> Employee:
        role = require_choice(Role, role, "Role")

        def command(state: HRState):
            if not state.require_employee(actor_id).is_admin:
                raise AuthorizationError("Only admins can change access")
            employee = state.require_employee(employee_id)
            updated = replace(employee, role=role, permissions=permissions_for(role, frozenset(permissions or ())))
            return state.with_employee(updated), updated

        employee = self._store.execute(command)
        logger.info("Access of %s set to %s by %s", employee_id, role.value, actor_id)
        return employee


def template_from_mapping(data: dict) -> CompensationTemplate:
    """Build a template from form/JSON input (snake_case or camelCase keys); unknown keys are rejected."""
    data = {re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower(): value for key, value in data.items()}
    known = {f.name for f in fields(CompensationTemplate)}
    unknown = set(data) - known
    if unknown:
        raise ValidationError(f"Unknown compensation field(s): {', '.join(sorted(unknown))}")
    defaults = CompensationTemplate()
    values = {}
    for key, value in data.items():
        if value is None or value == "":
            continue
        if isinstance(getattr(defaults, key), (int, float)):
            try:
                values[key] = float(value)
            except (TypeError, ValueError):
                raise ValidationError(f"{key} must be a number")
        else:
            values[key] = str(value)
    return CompensationTemplate(**values)
