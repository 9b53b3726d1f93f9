from __future__ import annotations

from flask import Flask

from ..common.http import current_employee_id, json_body, ok
from ..container import Container
from ..storage.codec import decode_flat, encode_employee
from .model import BankAccount
from .service import template_from_mapping


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        current_employee_id()
        return ok([encode_employee(e) for e in container.employee_service.list_employees()])

    @app.route("/api/employees", methods=["POST"], endpoint="onboard_employee")
    def onboard_employee():
        data = json_body()
        employee = container.employee_service.onboard(
            actor_id=current_employee_id(),
            name=data.get("name") or "",
            email=data.get("email") or "",
            department=data.get("department") or "",
            designation=data.get("designation") or "",
            role=data.get("role") or "employee",
            title_tags=data.get("titleTags"),
            manager_id=data.get("managerId"),
            joining_date=data.get("joiningDate"),
            permissions=data.get("permissions"),
        )
        return ok(encode_employee(employee), status=201)

    @app.route("/api/employees/<employee_id>/compensation", methods=["PUT"], endpoint="update_compensation")
    def update_compensation(employee_id: str):
        data = json_body()
        bank = data.get("bankAccount")
        employee = container.employee_service.update_compensation(
            actor_id=current_employee_id(),
            employee_id=employee_id,
            template=template_from_mapping(data.get("compensation") or {}),
            bank_account=decode_flat(BankAccount, bank) if bank else None,
            employee_code=data.get("employeeCode"),
        )
        return ok(encode_employee(employee))

    @app.route("/api/employees/<employee_id>/access", methods=["PUT"], endpoint="update_access")
    def update_access(employee_id: str):
        data = json_body()
        employee = container.employee_service.update_access(
            actor_id=current_employee_id(),
            employee_id=employee_id,
            role=data.get("role"),
            permissions=data.get("permissions"),
        )
        return ok(encode_employee(employee))
