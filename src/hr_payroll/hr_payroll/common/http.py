from __future__ import annotations

from flask import jsonify, request

from ..core.exceptions import AuthorizationError, ValidationError

EMPLOYEE_HEADER = "X-Employee-Id"


def ok(data=None, status=200, **meta):
    payload = {"success": True, "data": data}
    if meta:
        payload["meta"] = meta
    return jsonify(payload), status


def fail(message="Bad Request", status=400, code=None, detail=None):
    err = {"message": message}
    if code:
        err["code"] = code
    if detail:
        err["detail"] = detail
    return jsonify({"success": False, "error": err}), status


def current_employee_id() -> str:
    """Caller identity; authentication happens upstream and sets the header."""
    employee_id = (request.headers.get(EMPLOYEE_HEADER) or "").strip()
    if not employee_id:
        raise AuthorizationError(f"Missing {EMPLOYEE_HEADER} header")
    return employee_id


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data

