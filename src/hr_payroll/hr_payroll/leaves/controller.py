from __future__ import annotations

from flask import Flask, request

from ..common.http import current_employee_id, json_body, ok
from ..container import Container
from ..core.exceptions import AuthorizationError
from ..storage.codec import encode_flat, encode_leave


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["POST"], endpoint="submit_leave")
    def submit_leave():
        data = json_body()
        leave = container.leave_service.submit_leave(
            employee_id=current_employee_id(),
            leave_type=data.get("leaveType"),
            day_type=data.get("dayType") or "Full Day",
            from_date=data.get("fromDate"),
            to_date=data.get("toDate"),
            reason=data.get("reason") or "",
            selected_approver_ids=data.get("selectedApproverIds") or [],
        )
        return ok(encode_leave(leave), status=201)

    @app.route("/api/leaves", methods=["GET"], endpoint="my_leaves")
    def my_leaves():
        leaves = container.leave_service.list_for_employee(current_employee_id())
        return ok([encode_leave(lv) for lv in leaves])

    @app.route("/api/leaves/pending", methods=["GET"], endpoint="pending_leaves")
    def pending_leaves():
        leaves = container.leave_service.list_pending_for(current_employee_id())
        return ok([encode_leave(lv) for lv in leaves])

    @app.route("/api/leaves/<leave_id>", methods=["GET"], endpoint="get_leave")
    def get_leave(leave_id: str):
        leave = container.leave_service.get_leave(leave_id, actor_id=current_employee_id())
        return ok(encode_leave(leave))

    @app.route("/api/leaves/<leave_id>/actions", methods=["POST"], endpoint="act_on_leave")
    def act_on_leave(leave_id: str):
        data = json_body()
        leave = container.leave_service.act_on_leave(
            leave_id=leave_id,
            actor_id=current_employee_id(),
            decision=data.get("decision"),
            comment=data.get("comment") or "",
        )
        return ok(encode_leave(leave))

    @app.route("/api/employees/<employee_id>/paid-leave", methods=["GET"], endpoint="paid_leave_summary")
    def paid_leave_summary(employee_id: str):
        caller_id = current_employee_id()
        if caller_id != employee_id and not container.employee_service.get_employee(caller_id).has_permission("access"):
            raise AuthorizationError("You are not allowed to view this leave balance")
        summary = container.leave_service.paid_leave_summary(employee_id, request.args.get("asOf"))
        return ok(encode_flat(summary))
