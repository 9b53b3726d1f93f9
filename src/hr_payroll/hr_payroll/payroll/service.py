from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import Clock, now_local
from ..core.constants import COMPANY_NAME
from ..core.exceptions import AuthorizationError, NotFoundError
from ..periods.calendar_utils import parse_period_key, previous_month_period
from ..storage.state import HRState
from ..storage.state_store import StateStore
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .engine import compute_salary_slip
from .rules import PayrollRules
from .slip import SalarySlip

logger = logging.getLogger(__name__)


class PayrollService:
    """Use cases: generate a salary slip revision, read stored slips."""

    def __init__(
        self,
        store: StateStore,
        *,
        clock: Clock = now_local,
        rules: Optional[PayrollRules] = None,
        calculator: Optional[PayrollCalculator] = None,
        company_name: str = COMPANY_NAME,
    ):
        self._store = store
        self._clock = clock
        self._rules = rules or PayrollRules()
        self._calculator = calculator or StandardPayrollCalculator(self._rules)
        self._company_name = company_name

    def preview_slip(self, *, employee_id: str, year: int, month_index: int, now: Optional[datetime] = None) -> SalarySlip:
        """Compute without storing."""
        state = self._store.snapshot()
        return self._compute(state, employee_id, year, month_index, now or self._clock())

    def generate_slip(
        self,
        *,
        actor_id: str,
        employee_id: str,
        period_key: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> SalarySlip:
        """Compute and store a new revision; the period defaults to the previous month."""
        now = now or self._clock()
        period = parse_period_key(period_key) if period_key else previous_month_period(now.date())

        def command(state: HRState):
            actor = state.require_employee(actor_id)
            if actor_id != employee_id and not actor.has_permission("payroll_admin"):
                raise AuthorizationError("You are not allowed to generate slips for other employees")
            slip = self._compute(state, employee_id, period.year, period.month_index, now)
            latest = state.latest_slip(employee_id, period.key)
            slip = replace(slip, revision=latest.revision + 1 if latest else 1)
            return state.with_slip(slip), slip

        slip = self._store.execute(command)
        logger.info(
            "Salary slip %s rev %s generated: gross=%s net=%s",
            slip.slip_id,
            slip.revision,
            slip.earnings.gross,
            slip.net,
        )
        return slip

    def get_latest_slip(self, *, actor_id: str, employee_id: str, period_key: str) -> SalarySlip:
        period = parse_period_key(period_key)
        state = self._store.snapshot()
        actor = state.require_employee(actor_id)
        if actor_id != employee_id and not actor.has_permission("payroll_admin"):
            raise AuthorizationError("You are not allowed to view other employees' slips")
        slip = state.latest_slip(employee_id, period.key)
        if slip is None:
            raise NotFoundError(f"No salary slip for {employee_id} in {period.key}")
        return slip

    def list_slips(self, *, actor_id: str, employee_id: Optional[str] = None) -> list[SalarySlip]:
        """Latest revision per employee and period, newest period first.

        Payroll admins see every employee unless ``employee_id`` narrows it;
        everyone else sees only their own slips.
        """
        state = self._store.snapshot()
        actor = state.require_employee(actor_id)
        is_payroll_admin = actor.has_permission("payroll_admin")
        if employee_id and employee_id != actor_id and not is_payroll_admin:
            raise AuthorizationError("You are not allowed to view other employees' slips")
        if not employee_id and not is_payroll_admin:
            employee_id = actor_id

        latest: dict[tuple[str, str], SalarySlip] = {}
        for slip in state.salary_slips:
            if employee_id and slip.employee_id != employee_id:
                continue
            key = (slip.employee_id, slip.period_key)
            if key not in latest or slip.revision > latest[key].revision:
                latest[key] = slip
        slips = sorted(latest.values(), key=lambda s: s.employee_id)
        return sorted(slips, key=lambda s: s.period_key, reverse=True)

    def _compute(self, state: HRState, employee_id: str, year: int, month_index: int, now: datetime) -> SalarySlip:
        employee = state.require_employee(employee_id)
        return compute_salary_slip(
            employee,
            state.sessions_for(employee_id),
            state.leaves_for(employee_id),
            state.holidays,
            year,
            month_index,
            generated_at=now,
            company_name=self._company_name,
            rules=self._rules,
            calculator=self._calculator,
        )
