from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..core.constants import NO_ACTIVE_APPROVER
from ..core.enums import DayType, LeaveState, LeaveType, StepStatus


@dataclass(frozen=True)
class ApprovalStep:
    approver_id: str
    approver_role: str
    status: StepStatus
    comment: str = ""
    acted_at: Optional[datetime] = None


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: a leave request travelling through its approval flow.

    ``state`` is the tagged machine state; ``status`` is the label shown to
    users ("Pending with Manager", "Approved", ...).
    """

    leave_id: str
    employee_id: str
    leave_type: LeaveType
    day_type: DayType
    from_date: date
    to_date: date
    reason: str
    leave_days: float
    state: LeaveState
    approval_flow: Tuple[ApprovalStep, ...] = ()
    current_approval_index: int = NO_ACTIVE_APPROVER
    selected_approver_ids: Tuple[str, ...] = ()
    admin_comment: str = ""
    created_at: Optional[datetime] = None

    @property
    def current_step(self) -> Optional[ApprovalStep]:
        if self.state != LeaveState.PENDING:
            return None
        if 0 <= self.current_approval_index < len(self.approval_flow):
            return self.approval_flow[self.current_approval_index]
        return None

    @property
    def current_approver_id(self) -> Optional[str]:
        step = self.current_step
        return step.approver_id if step else None

    @property
    def status(self) -> str:
        step = self.current_step
        if step is not None:
            return f"Pending with {step.approver_role}"
        return self.state.value

    @property
    def is_terminal(self) -> bool:
        return self.state in (LeaveState.APPROVED, LeaveState.DENIED)

    def covers(self, day: date) -> bool:
        return self.from_date <= day <= self.to_date
