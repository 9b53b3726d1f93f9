"""Example: drive the service layer directly (no Flask).

Controllers are thin; every rule lives in the services and the pure engine.
"""

from datetime import date, datetime

from src.hr_payroll.hr_payroll.container import build_container
from src.hr_payroll.hr_payroll.storage.seed import demo_state


def main():
    today = date(2026, 3, 2)
    container = build_container(seed=demo_state(today))

    leave = container.leave_service.submit_leave(
        employee_id="u2",
        leave_type="Paid Leave",
        from_date="2026-03-03",
        to_date="2026-03-04",
        reason="Family function",
        selected_approver_ids=["u6"],
        now=datetime(2026, 3, 2, 9, 0),
    )
    print(leave.status)

    for approver_id in [s.approver_id for s in leave.approval_flow]:
        leave = container.leave_service.act_on_leave(
            leave_id=leave.leave_id,
            actor_id=approver_id,
            decision="Approved",
            now=datetime(2026, 3, 2, 10, 0),
        )
        print(leave.status)

    slip = container.payroll_service.generate_slip(actor_id="u1", employee_id="u2", period_key="2026-03")
    print(slip.period.label, slip.attendance_summary, slip.earnings.gross, slip.net)


if __name__ == "__main__":
    main()
