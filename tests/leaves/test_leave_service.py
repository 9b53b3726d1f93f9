from __future__ import annotations

from datetime import date

import pytest

from src.hr_payroll.hr_payroll.core.enums import Decision, LeaveState
from src.hr_payroll.hr_payroll.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.hr_payroll.hr_payroll.leaves.service import LeaveService


@pytest.fixture
def service(store, fixed_now, counter_ids):
    return LeaveService(store, clock=lambda: fixed_now, id_factory=counter_ids)


def _submit(service, **overrides):
    payload = dict(
        employee_id="e1",
        leave_type="Paid Leave",
        from_date="2026-03-09",
        to_date="2026-03-10",
        reason="Family function",
        selected_approver_ids=["m1"],
    )
    payload.update(overrides)
    return service.submit_leave(**payload)


def test_submit_persists_request(service, store, kv):
    leave = _submit(service)

    assert leave.leave_id == "leave-1"
    assert leave.status == "Pending with Manager"
    assert store.snapshot().require_leave("leave-1") == leave
    assert '"leave-1"' in kv.get("hr_portal_state")


@pytest.mark.parametrize(
    "overrides",
    [
        {"from_date": "2026-03-10", "to_date": "2026-03-09"},
        {"from_date": "", "to_date": "2026-03-09"},
        {"reason": "  "},
        {"selected_approver_ids": []},
        {"leave_type": "Sabbatical"},
        {"day_type": "Quarter Day"},
    ],
)
def test_submit_validation(service, store, overrides):
    with pytest.raises(ValidationError):
        _submit(service, **overrides)
    assert store.snapshot().leaves == ()


def test_submit_unknown_employee(service):
    with pytest.raises(NotFoundError):
        _submit(service, employee_id="ghost")


def test_pending_queue_follows_current_approver(service):
    leave = _submit(service)
    assert [lv.leave_id for lv in service.list_pending_for("m1")] == [leave.leave_id]
    assert service.list_pending_for("hr1") == []

    service.act_on_leave(leave_id=leave.leave_id, actor_id="m1", decision="Approved")
    assert service.list_pending_for("m1") == []
    assert [lv.leave_id for lv in service.list_pending_for("hr1")] == [leave.leave_id]


def test_full_approval_updates_paid_leave_balance(service):
    leave = _submit(service)
    for approver in ["m1", "hr1", "s1"]:
        leave = service.act_on_leave(leave_id=leave.leave_id, actor_id=approver, decision=Decision.APPROVED)

    assert leave.state == LeaveState.APPROVED
    summary = service.paid_leave_summary("e1", "2026-03-31")
    # joined 2025-01-15: 15 months x 1.5
    assert summary.accrued == 22.5
    assert summary.used == 2
    assert summary.remaining == 20.5


def test_wrong_approver_leaves_state_unchanged(service, store):
    leave = _submit(service)
    with pytest.raises(AuthorizationError):
        service.act_on_leave(leave_id=leave.leave_id, actor_id="s1", decision="Approved")
    assert store.snapshot().require_leave(leave.leave_id) == leave


def test_act_on_unknown_leave(service):
    with pytest.raises(NotFoundError):
        service.act_on_leave(leave_id="nope", actor_id="m1", decision="Approved")


def test_act_on_decided_leave(service):
    leave = _submit(service)
    service.act_on_leave(leave_id=leave.leave_id, actor_id="m1", decision="Denied", comment="Release week")
    with pytest.raises(ValidationError):
        service.act_on_leave(leave_id=leave.leave_id, actor_id="hr1", decision="Approved")


def test_paid_leave_summary_defaults_to_clock_date(service, fixed_now):
    summary = service.paid_leave_summary("e1")
    # 2025-01 .. 2026-03 inclusive
    assert summary.accrued == 15 * 1.5
    assert fixed_now.date() == date(2026, 3, 2)


def test_list_for_employee_newest_first(service):
    _submit(service, from_date="2026-03-09", to_date="2026-03-09")
    _submit(service, from_date="2026-04-06", to_date="2026-04-06")
    assert [lv.from_date for lv in service.list_for_employee("e1")] == [date(2026, 4, 6), date(2026, 3, 9)]


def test_get_leave_is_visible_to_requester_approvers_and_hr(service):
    leave = service.submit_leave(
        employee_id="e1",
        leave_type="Casual Leave",
        from_date="2026-03-10",
        to_date="2026-03-10",
        reason="Errand",
        selected_approver_ids=["m1"],
    )
    for viewer in ("e1", "m1", "s1", "hr1"):
        assert service.get_leave(leave.leave_id, actor_id=viewer).leave_id == leave.leave_id

    with pytest.raises(AuthorizationError):
        service.get_leave(leave.leave_id, actor_id="s2")
