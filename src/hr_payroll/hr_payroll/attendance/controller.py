from __future__ import annotations

from flask import Flask, request

from ..common.http import current_employee_id, json_body, ok
from ..container import Container
from ..core.exceptions import AuthorizationError
from ..storage.codec import encode_regularization, encode_session


def register(app: Flask, container: Container) -> None:
    def _require_self_or_access(caller_id: str, employee_id: str) -> None:
        if caller_id == employee_id:
            return
        if not container.employee_service.get_employee(caller_id).has_permission("access"):
            raise AuthorizationError("You are not allowed to view other employees' attendance")

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in():
        session = container.attendance_service.clock_in(current_employee_id())
        return ok(encode_session(session), status=201)

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out():
        session = container.attendance_service.clock_out(current_employee_id())
        return ok(encode_session(session))

    @app.route("/api/attendance/credit", methods=["GET"], endpoint="attendance_credit")
    def attendance_credit():
        caller_id = current_employee_id()
        employee_id = request.args.get("employeeId") or caller_id
        _require_self_or_access(caller_id, employee_id)
        work_date = request.args.get("date")
        credit = container.attendance_service.credit_for(employee_id, work_date)
        return ok({"employeeId": employee_id, "date": work_date, "credit": credit})

    @app.route("/api/attendance/regularizations", methods=["POST"], endpoint="submit_regularization")
    def submit_regularization():
        data = json_body()
        req = container.attendance_service.submit_regularization(
            employee_id=current_employee_id(),
            work_date=data.get("date"),
            reason=data.get("reason") or "",
            recipient_id=data.get("recipientId"),
        )
        return ok(encode_regularization(req), status=201)

    @app.route("/api/attendance/regularizations", methods=["GET"], endpoint="list_regularizations")
    def list_regularizations():
        queue = container.attendance_service.list_regularizations(
            actor_id=current_employee_id(),
            recipient_id=request.args.get("recipientId"),
            status=request.args.get("status"),
        )
        return ok([encode_regularization(r) for r in queue])

    @app.route("/api/attendance/regularize", methods=["POST"], endpoint="regularize_attendance")
    def regularize_attendance():
        data = json_body()
        session = container.attendance_service.regularize(
            actor_id=current_employee_id(),
            employee_id=data.get("employeeId") or "",
            work_date=data.get("date"),
            request_id=data.get("requestId"),
            comment=data.get("comment") or "",
        )
        return ok(encode_session(session))

    @app.route("/api/attendance/day", methods=["PUT"], endpoint="admin_set_day")
    def admin_set_day():
        data = json_body()
        session = container.attendance_service.admin_set_day(
            actor_id=current_employee_id(),
            employee_id=data.get("employeeId") or "",
            work_date=data.get("date"),
            status=data.get("status"),
            work_day_type=data.get("workDayType") or "No Work Session",
        )
        return ok(encode_session(session) if session else None)
