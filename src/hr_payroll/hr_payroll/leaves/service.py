from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, DateLike, now_local
from ..common.ids import IdFactory, new_id
from ..common.validators import require_any, require_choice, require_date, require_date_range, require_non_empty
from ..core.constants import PAID_LEAVE_ACCRUAL_PER_MONTH
from ..core.enums import DayType, Decision, LeaveState, LeaveType
from ..core.exceptions import AuthorizationError
from ..storage.state_store import StateStore
from . import workflow
from .accrual import PaidLeaveSummary, paid_leave_summary
from .model import LeaveRequest

logger = logging.getLogger(__name__)


class LeaveService:
    """Use cases: apply for leave, act on it, report paid-leave balance."""

    def __init__(
        self,
        store: StateStore,
        *,
        clock: Clock = now_local,
        id_factory: IdFactory = new_id,
        accrual_per_month: float = PAID_LEAVE_ACCRUAL_PER_MONTH,
    ):
        self._store = store
        self._clock = clock
        self._new_id = id_factory
        self._accrual_per_month = float(accrual_per_month)

    def submit_leave(
        self,
        *,
        employee_id: str,
        leave_type: LeaveType | str,
        from_date: DateLike,
        to_date: DateLike,
        reason: str,
        selected_approver_ids: Sequence[str],
        day_type: DayType | str = DayType.FULL_DAY,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        leave_type = require_choice(LeaveType, leave_type, "Leave type")
        day_type = require_choice(DayType, day_type or DayType.FULL_DAY, "Day type")
        start, end = require_date_range(from_date, to_date)
        reason = require_non_empty(reason, "Reason")
        approver_ids = require_any(selected_approver_ids or (), "Select at least one approver")
        now = now or self._clock()

        def command(state):
            employee = state.require_employee(employee_id)
            leave = workflow.submit(
                employee,
                state.employees,
                leave_id=self._new_id("leave"),
                leave_type=leave_type,
                day_type=day_type,
                from_date=start,
                to_date=end,
                reason=reason,
                selected_approver_ids=approver_ids,
                now=now,
            )
            return state.with_leave(leave), leave

        leave = self._store.execute(command)
        logger.info(
            "Leave %s submitted by %s (%s, %s day(s)): %s",
            leave.leave_id,
            employee_id,
            leave.leave_type.value,
            leave.leave_days,
            leave.status,
        )
        return leave

    def act_on_leave(
        self,
        *,
        leave_id: str,
        actor_id: str,
        decision: Decision | str,
        comment: str = "",
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        decision = require_choice(Decision, decision, "Decision")
        now = now or self._clock()

        def command(state):
            state.require_employee(actor_id)
            leave = workflow.act(
                state.require_leave(leave_id),
                actor_id=actor_id,
                decision=decision,
                comment=(comment or "").strip(),
                now=now,
            )
            return state.with_leave(leave), leave

        leave = self._store.execute(command)
        logger.info("Leave %s %s by %s; now %s", leave_id, decision.value.lower(), actor_id, leave.status)
        return leave

    def get_leave(self, leave_id: str, *, actor_id: str) -> LeaveRequest:
        """Visible to the requester, anyone on its approval flow, and HR with "access"."""
        state = self._store.snapshot()
        actor = state.require_employee(actor_id)
        leave = state.require_leave(leave_id)
        involved = actor_id == leave.employee_id or any(s.approver_id == actor_id for s in leave.approval_flow)
        if not involved and not actor.has_permission("access"):
            raise AuthorizationError("You are not allowed to view this leave request")
        return leave

    def list_for_employee(self, employee_id: str) -> list[LeaveRequest]:
        state = self._store.snapshot()
        state.require_employee(employee_id)
        return sorted(state.leaves_for(employee_id), key=lambda lv: lv.from_date, reverse=True)

    def list_pending_for(self, approver_id: str) -> list[LeaveRequest]:
        """Requests whose current pending step belongs to ``approver_id``."""
        state = self._store.snapshot()
        return [
            lv
            for lv in state.leaves
            if lv.state == LeaveState.PENDING and lv.current_approver_id == approver_id
        ]

    def paid_leave_summary(self, employee_id: str, as_of: DateLike = None) -> PaidLeaveSummary:
        as_of_date: date = require_date(as_of, "As-of date") if as_of else self._clock().date()
        state = self._store.snapshot()
        employee = state.require_employee(employee_id)
        return paid_leave_summary(
            employee,
            state.leaves,
            as_of_date,
            accrual_per_month=self._accrual_per_month,
        )
