"""Leave approval state machine.

A request moves Pending(step i) -> Pending(step i+1) -> ... -> Approved, or to
Denied from any pending step. Every transition returns a new ``LeaveRequest``
with a new tuple of steps; nothing is mutated in place.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import DateLike, coerce_date
from ..core.constants import NO_ACTIVE_APPROVER
from ..core.enums import Decision, DayType, LeaveState, LeaveType, StepStatus, TitleTag
from ..core.exceptions import AuthorizationError, ValidationError
from ..employees.model import Employee
from .model import ApprovalStep, LeaveRequest

logger = logging.getLogger(__name__)


def approval_role_label(approver: Optional[Employee]) -> str:
    if approver is None:
        return "Approver"
    if approver.is_admin:
        return "HR"
    if TitleTag.MANAGER in approver.title_tags:
        return "Manager"
    if TitleTag.SENIOR in approver.title_tags:
        return "Senior"
    return "Approver"


def eligible_approvers(employee: Employee, directory: Sequence[Employee]) -> list[Employee]:
    """Direct manager first, then admins and same-department seniors, never the employee."""
    manager = None
    if employee.manager_id and employee.manager_id != employee.employee_id:
        manager = next((u for u in directory if u.employee_id == employee.manager_id), None)

    others = [
        u
        for u in directory
        if u.employee_id != employee.employee_id
        and (u.is_admin or (TitleTag.SENIOR in u.title_tags and u.department == employee.department))
    ]

    return [u for u in [manager, *others] if u is not None]


def build_approval_queue(
    employee: Employee,
    directory: Sequence[Employee],
    selected_approver_ids: Iterable[str] = (),
) -> tuple[ApprovalStep, ...]:
    eligible = eligible_approvers(employee, directory)
    by_id = {u.employee_id: u for u in eligible}
    selected_ids = list(selected_approver_ids or ())

    selected = [by_id[i] for i in selected_ids if i in by_id]
    fallback = [u for u in eligible if u.employee_id not in selected_ids]

    queue: list[Employee] = []
    seen: set[str] = set()
    for approver in [*selected, *fallback]:
        if approver.employee_id in seen:
            continue
        seen.add(approver.employee_id)
        queue.append(approver)

    return tuple(
        ApprovalStep(
            approver_id=approver.employee_id,
            approver_role=approval_role_label(approver),
            status=StepStatus.PENDING if idx == 0 else StepStatus.AWAITING,
        )
        for idx, approver in enumerate(queue)
    )


def leave_days(from_date: DateLike, to_date: DateLike, day_type: DayType = DayType.FULL_DAY) -> float:
    """Inclusive day count for Full Day leave, 0.5 for Half Day. Never raises."""
    try:
        day_type = DayType(day_type)
    except ValueError:
        return 0
    if day_type == DayType.HALF_DAY:
        return 0.5

    start = coerce_date(from_date)
    end = coerce_date(to_date)
    if start is None or end is None or end < start:
        return 0
    return (end - start).days + 1


def submit(
    employee: Employee,
    directory: Sequence[Employee],
    *,
    leave_id: str,
    leave_type: LeaveType,
    day_type: DayType,
    from_date: date,
    to_date: date,
    reason: str,
    selected_approver_ids: Sequence[str] = (),
    now: Optional[datetime] = None,
) -> LeaveRequest:
    flow = build_approval_queue(employee, directory, selected_approver_ids)
    if not flow:
        logger.warning("No eligible approvers for employee %s; leave %s stays Pending", employee.employee_id, leave_id)

    return LeaveRequest(
        leave_id=leave_id,
        employee_id=employee.employee_id,
        leave_type=LeaveType(leave_type),
        day_type=DayType(day_type),
        from_date=from_date,
        to_date=to_date,
        reason=reason,
        leave_days=leave_days(from_date, to_date, day_type),
        state=LeaveState.PENDING,
        approval_flow=flow,
        current_approval_index=0 if flow else NO_ACTIVE_APPROVER,
        selected_approver_ids=tuple(selected_approver_ids),
        created_at=now,
    )


def act(
    leave: LeaveRequest,
    *,
    actor_id: str,
    decision: Decision,
    comment: str = "",
    now: datetime,
) -> LeaveRequest:
    """Apply one approver's decision and return the next request state."""
    if leave.is_terminal:
        raise ValidationError(f"Leave request {leave.leave_id} has already been {leave.state.value.lower()}")

    step = leave.current_step
    if step is None or step.approver_id != actor_id or step.status != StepStatus.PENDING:
        raise AuthorizationError(f"{actor_id} is not the current approver of leave {leave.leave_id}")

    decision = Decision(decision)
    index = leave.current_approval_index
    flow = list(leave.approval_flow)
    flow[index] = replace(
        step,
        status=StepStatus.APPROVED if decision == Decision.APPROVED else StepStatus.DENIED,
        comment=comment,
        acted_at=now,
    )

    admin_comment = comment or leave.admin_comment

    if decision == Decision.DENIED:
        return replace(
            leave,
            approval_flow=tuple(flow),
            state=LeaveState.DENIED,
            current_approval_index=NO_ACTIVE_APPROVER,
            admin_comment=admin_comment,
        )

    next_index = index + 1
    if next_index < len(flow):
        flow[next_index] = replace(flow[next_index], status=StepStatus.PENDING)
        return replace(
            leave,
            approval_flow=tuple(flow),
            current_approval_index=next_index,
            admin_comment=admin_comment,
        )

    return replace(
        leave,
        approval_flow=tuple(flow),
        state=LeaveState.APPROVED,
        current_approval_index=NO_ACTIVE_APPROVER,
        admin_comment=admin_comment,
    )
