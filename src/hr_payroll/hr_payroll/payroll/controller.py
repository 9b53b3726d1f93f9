from __future__ import annotations

from flask import Flask, request

from ..common.http import current_employee_id, json_body, ok
from ..container import Container
from ..storage.codec import encode_slip


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/slips", methods=["POST"], endpoint="generate_slip")
    def generate_slip():
        data = json_body()
        caller_id = current_employee_id()
        slip = container.payroll_service.generate_slip(
            actor_id=caller_id,
            employee_id=data.get("employeeId") or caller_id,
            period_key=data.get("periodKey"),
        )
        return ok(encode_slip(slip), status=201)

    @app.route("/api/payroll/slips/<employee_id>/<period_key>", methods=["GET"], endpoint="get_slip")
    def get_slip(employee_id: str, period_key: str):
        slip = container.payroll_service.get_latest_slip(
            actor_id=current_employee_id(),
            employee_id=employee_id,
            period_key=period_key,
        )
        return ok(encode_slip(slip))

    @app.route("/api/payroll/slips", methods=["GET"], endpoint="list_slips")
    def list_slips():
        slips = container.payroll_service.list_slips(
            actor_id=current_employee_id(),
            employee_id=request.args.get("employeeId"),
        )
        return ok([encode_slip(s) for s in slips])
