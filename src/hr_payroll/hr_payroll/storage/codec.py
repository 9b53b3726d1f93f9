"""JSON codec for the persisted portal document.

Field names on the wire are camelCase (``employeeId``, ``approvalFlow``,
``currentApprovalIndex``...). Decoding expects a document that has already
been brought to the current schema by ``storage.migrations``.
"""

from __future__ import annotations

import json
from dataclasses import fields
from datetime import date, datetime
from typing import Any, Optional, Type, TypeVar

from ..attendance.model import AttendanceSession, RegularizationRequest
from ..common.datetime_utils import parse_iso_date, parse_iso_datetime, to_date_string
from ..core.constants import NO_ACTIVE_APPROVER, SCHEMA_VERSION
from ..core.enums import DayType, LeaveState, LeaveType, RequestStatus, Role, StepStatus, TitleTag
from ..employees.model import BankAccount, CompensationTemplate, Employee, permissions_for
from ..leaves.model import ApprovalStep, LeaveRequest
from ..payroll.model import AttendanceSummary, Deductions, Earnings
from ..payroll.slip import EmployeeProfileSnapshot, SalarySlip
from ..periods.calendar_utils import make_period
from ..periods.model import Holiday
from .state import HRState

T = TypeVar("T")


def camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _date(value: Optional[date]) -> Optional[str]:
    return to_date_string(value) if value else None


def _datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _opt_date(value: Any) -> Optional[date]:
    return parse_iso_date(str(value)[:10]) if value else None


def encode_flat(obj: Any) -> dict:
    """Flat dataclass of primitives -> camelCase dict."""
    return {camel(f.name): getattr(obj, f.name) for f in fields(obj)}


def decode_flat(cls: Type[T], doc: Optional[dict]) -> T:
    """camelCase dict -> flat dataclass; missing or null keys fall back to field defaults."""
    doc = doc or {}
    kwargs = {}
    for f in fields(cls):
        value = doc.get(camel(f.name))
        if value is not None:
            kwargs[f.name] = value
    return cls(**kwargs)


# Employees


def encode_employee(e: Employee) -> dict:
    return {
        "id": e.employee_id,
        "name": e.name,
        "email": e.email,
        "department": e.department,
        "designation": e.designation,
        "role": e.role.value,
        "titleTags": sorted(t.value for t in e.title_tags),
        "managerId": e.manager_id,
        "permissions": sorted(e.permissions),
        "joiningDate": _date(e.joining_date),
        "employeeCode": e.employee_code,
        "bankAccount": encode_flat(e.bank_account) if e.bank_account else None,
        "compensation": encode_flat(e.compensation) if e.compensation else None,
    }


def decode_employee(doc: dict) -> Employee:
    role = Role(doc.get("role") or Role.EMPLOYEE.value)
    return Employee(
        employee_id=str(doc["id"]),
        name=doc.get("name") or "",
        email=doc.get("email") or "",
        department=doc.get("department") or "",
        designation=doc.get("designation") or "",
        role=role,
        title_tags=frozenset(TitleTag(t) for t in doc.get("titleTags") or ()),
        manager_id=doc.get("managerId"),
        permissions=permissions_for(role, frozenset(doc.get("permissions") or ())),
        joining_date=_opt_date(doc.get("joiningDate")),
        employee_code=doc.get("employeeCode") or "",
        bank_account=decode_flat(BankAccount, doc["bankAccount"]) if doc.get("bankAccount") else None,
        compensation=decode_flat(CompensationTemplate, doc["compensation"]) if doc.get("compensation") else None,
    )


# Attendance


def encode_session(s: AttendanceSession) -> dict:
    return {
        "id": s.session_id,
        "employeeId": s.employee_id,
        "date": _date(s.work_date),
        "clockIn": _datetime(s.clock_in),
        "clockOut": _datetime(s.clock_out),
        "workedMinutes": s.worked_minutes,
    }


def decode_session(doc: dict) -> AttendanceSession:
    return AttendanceSession(
        session_id=str(doc["id"]),
        employee_id=str(doc["employeeId"]),
        work_date=parse_iso_date(doc["date"]),
        clock_in=parse_iso_datetime(doc["clockIn"]),
        clock_out=parse_iso_datetime(doc.get("clockOut")),
        worked_minutes=int(doc.get("workedMinutes") or 0),
    )


def encode_regularization(r: RegularizationRequest) -> dict:
    return {
        "id": r.request_id,
        "employeeId": r.employee_id,
        "date": _date(r.work_date),
        "reason": r.reason,
        "recipientId": r.recipient_id,
        "status": r.status.value,
        "createdAt": _datetime(r.created_at),
        "reviewedBy": r.reviewed_by,
        "reviewComment": r.review_comment,
        "reviewedAt": _datetime(r.reviewed_at),
    }


def decode_regularization(doc: dict) -> RegularizationRequest:
    return RegularizationRequest(
        request_id=str(doc["id"]),
        employee_id=str(doc["employeeId"]),
        work_date=parse_iso_date(doc["date"]),
        reason=doc.get("reason") or "",
        recipient_id=doc.get("recipientId"),
        status=RequestStatus(doc.get("status") or RequestStatus.PENDING.value),
        created_at=parse_iso_datetime(doc.get("createdAt")),
        reviewed_by=doc.get("reviewedBy"),
        review_comment=doc.get("reviewComment") or "",
        reviewed_at=parse_iso_datetime(doc.get("reviewedAt")),
    )


# Leaves


def encode_step(step: ApprovalStep) -> dict:
    return {
        "approverId": step.approver_id,
        "approverRole": step.approver_role,
        "status": step.status.value,
        "comment": step.comment,
        "actedAt": _datetime(step.acted_at),
    }


def decode_step(doc: dict) -> ApprovalStep:
    return ApprovalStep(
        approver_id=str(doc["approverId"]),
        approver_role=doc.get("approverRole") or "Approver",
        status=StepStatus(doc["status"]),
        comment=doc.get("comment") or "",
        acted_at=parse_iso_datetime(doc.get("actedAt")),
    )


def encode_leave(lv: LeaveRequest) -> dict:
    return {
        "id": lv.leave_id,
        "employeeId": lv.employee_id,
        "leaveType": lv.leave_type.value,
        "dayType": lv.day_type.value,
        "fromDate": _date(lv.from_date),
        "toDate": _date(lv.to_date),
        "reason": lv.reason,
        "leaveDays": lv.leave_days,
        "state": lv.state.value,
        "status": lv.status,
        "approvalFlow": [encode_step(s) for s in lv.approval_flow],
        "currentApprovalIndex": lv.current_approval_index,
        "currentApproverId": lv.current_approver_id,
        "selectedApproverIds": list(lv.selected_approver_ids),
        "adminComment": lv.admin_comment,
        "createdAt": _datetime(lv.created_at),
    }


def decode_leave(doc: dict) -> LeaveRequest:
    index = doc.get("currentApprovalIndex")
    return LeaveRequest(
        leave_id=str(doc["id"]),
        employee_id=str(doc["employeeId"]),
        leave_type=LeaveType(doc["leaveType"]),
        day_type=DayType(doc.get("dayType") or DayType.FULL_DAY.value),
        from_date=parse_iso_date(doc["fromDate"]),
        to_date=parse_iso_date(doc["toDate"]),
        reason=doc.get("reason") or "",
        leave_days=float(doc.get("leaveDays") or 0),
        state=LeaveState(doc["state"]),
        approval_flow=tuple(decode_step(s) for s in doc.get("approvalFlow") or ()),
        current_approval_index=NO_ACTIVE_APPROVER if index is None else int(index),
        selected_approver_ids=tuple(doc.get("selectedApproverIds") or ()),
        admin_comment=doc.get("adminComment") or "",
        created_at=parse_iso_datetime(doc.get("createdAt")),
    )


# Holidays


def encode_holiday(h: Holiday) -> dict:
    return {"id": h.holiday_id, "date": _date(h.date), "name": h.name, "type": h.type}


def decode_holiday(doc: dict) -> Holiday:
    return Holiday(
        holiday_id=str(doc["id"]),
        date=parse_iso_date(doc["date"]),
        name=doc.get("name") or "",
        type=doc.get("type") or "official",
    )


# Salary slips


def encode_slip(slip: SalarySlip) -> dict:
    return {
        "id": slip.slip_id,
        "employeeId": slip.employee_id,
        "companyName": slip.company_name,
        "month": slip.period.label,
        "periodKey": slip.period_key,
        "period": {
            "year": slip.period.year,
            "monthIndex": slip.period.month_index,
            "key": slip.period.key,
            "label": slip.period.label,
        },
        "currency": slip.currency,
        "generatedOn": _datetime(slip.generated_on),
        "revision": slip.revision,
        "employeeProfile": encode_flat(slip.employee_profile),
        "compensation": encode_flat(slip.compensation),
        "attendanceSummary": encode_flat(slip.attendance_summary),
        "earnings": encode_flat(slip.earnings),
        "deductions": encode_flat(slip.deductions),
        "net": slip.net,
        "basic": slip.earnings.basic,
        "allowances": slip.allowances_total,
        "deductionsTotal": slip.deductions.total,
    }


def decode_slip(doc: dict) -> SalarySlip:
    period = doc["period"]
    return SalarySlip(
        slip_id=str(doc["id"]),
        employee_id=str(doc["employeeId"]),
        company_name=doc.get("companyName") or "",
        period=make_period(int(period["year"]), int(period["monthIndex"])),
        currency=doc.get("currency") or CompensationTemplate().currency,
        generated_on=parse_iso_datetime(doc.get("generatedOn")),
        employee_profile=decode_flat(EmployeeProfileSnapshot, doc.get("employeeProfile")),
        compensation=decode_flat(CompensationTemplate, doc.get("compensation")),
        attendance_summary=decode_flat(AttendanceSummary, doc["attendanceSummary"]),
        earnings=decode_flat(Earnings, doc["earnings"]),
        deductions=decode_flat(Deductions, doc["deductions"]),
        net=int(doc["net"]),
        revision=int(doc.get("revision") or 1),
    )


# Whole document


def encode_state(state: HRState) -> dict:
    return {
        "schemaVersion": state.schema_version,
        "employees": [encode_employee(e) for e in state.employees],
        "attendanceSessions": [encode_session(s) for s in state.attendance_sessions],
        "regularizationRequests": [encode_regularization(r) for r in state.regularization_requests],
        "leaves": [encode_leave(lv) for lv in state.leaves],
        "holidays": [encode_holiday(h) for h in state.holidays],
        "salarySlips": [encode_slip(s) for s in state.salary_slips],
    }


def decode_state(doc: dict) -> HRState:
    return HRState(
        schema_version=int(doc.get("schemaVersion", SCHEMA_VERSION)),
        employees=tuple(decode_employee(e) for e in doc.get("employees") or ()),
        attendance_sessions=tuple(decode_session(s) for s in doc.get("attendanceSessions") or ()),
        regularization_requests=tuple(
            decode_regularization(r) for r in doc.get("regularizationRequests") or ()
        ),
        leaves=tuple(decode_leave(lv) for lv in doc.get("leaves") or ()),
        holidays=tuple(decode_holiday(h) for h in doc.get("holidays") or ()),
        salary_slips=tuple(decode_slip(s) for s in doc.get("salarySlips") or ()),
    )


def dumps(state: HRState) -> str:
    return json.dumps(encode_state(state), ensure_ascii=False, sort_keys=True)


def loads(text: str) -> dict:
    return json.loads(text)
