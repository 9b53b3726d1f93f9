"""Versioned schema migrations for the persisted portal document.

Each migration takes a document at version N and returns one at version N+1.
Documents without ``schemaVersion`` are the legacy browser-portal shape
(version 0). All defaulting of missing legacy fields happens here, once, at
load time.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from ..common.datetime_utils import parse_iso_datetime
from ..core.constants import SCHEMA_VERSION
from ..core.enums import DayType, LeaveState, StepStatus
from ..employees.model import infer_title_tags
from ..leaves.workflow import leave_days
from ..periods.calendar_utils import parse_period_key, period_key_from_label

logger = logging.getLogger(__name__)

Migration = Callable[[dict], dict]

DEPARTMENT_RENAMES = {"Engineering": "IT"}

# Legacy numeric template fields where 0 / "" meant "use the default"
LEGACY_DEFAULTED_FIELDS = ("basicPct", "hraPct", "pfRate", "esiRate", "professionalTax")
LEGACY_TEMPLATE_FIELDS = (
    "ctcAnnual",
    "currency",
    "basicPct",
    "hraPct",
    "conveyanceFixed",
    "medicalFixed",
    "specialAllowanceFixed",
    "otherAllowanceFixed",
    "pfRate",
    "esiRate",
    "professionalTax",
    "tds",
    "loanDeduction",
    "pfNumber",
    "esiNumber",
    "firstName",
    "lastName",
)
LEGACY_PROFILE_FIELDS = (
    "firstName",
    "lastName",
    "employeeCode",
    "department",
    "designation",
    "email",
    "pfNumber",
    "esiNumber",
    "accountNumber",
    "ifscCode",
    "bankName",
)
SLIP_AMOUNT_FIELDS = {
    "attendanceSummary": ("workingDays", "paidDays", "lopDays"),
    "earnings": ("basic", "hra", "conveyance", "medical", "specialAllowance", "otherAllowance", "gross"),
    "deductions": ("pf", "esi", "professionalTax", "tds", "loanDeduction", "total"),
}


def detect_version(doc: dict) -> int:
    return int(doc.get("schemaVersion", 0) or 0)


def _naive_iso(value: Optional[str]) -> Optional[str]:
    """Drop the UTC marker from legacy timestamps; office hours are stored as wall-clock time."""
    parsed = parse_iso_datetime(value)
    return parsed.replace(tzinfo=None).isoformat() if parsed else None


def _legacy_template(payroll: dict) -> Optional[dict]:
    if not payroll:
        return None
    template: Dict[str, Any] = {}
    for key in LEGACY_TEMPLATE_FIELDS:
        value = payroll.get(key)
        if value in (None, ""):
            continue
        if key in LEGACY_DEFAULTED_FIELDS and not float(value):
            continue
        template[key] = value if key in ("currency", "pfNumber", "esiNumber", "firstName", "lastName") else float(value)
    return template


def _legacy_employee(user: dict) -> dict:
    personal = user.get("personalDetails") or {}
    payroll = user.get("payrollDetails") or {}
    department = user.get("department") or ""
    bank = {
        "accountNumber": payroll.get("accountNumber") or "",
        "ifscCode": payroll.get("ifscCode") or "",
        "bankName": payroll.get("bankName") or "",
    }
    return {
        "id": user["id"],
        "name": user.get("name") or "",
        "email": user.get("email") or "",
        "department": DEPARTMENT_RENAMES.get(department, department),
        "designation": user.get("designation") or "",
        "role": user.get("role") or "employee",
        "titleTags": sorted(t.value for t in infer_title_tags(user.get("designation"))),
        "managerId": user.get("managerId"),
        "permissions": list(user.get("permissions") or ()),
        "joiningDate": personal.get("joiningDate") or None,
        "employeeCode": payroll.get("employeeCode") or personal.get("employeeCode") or "",
        "bankAccount": bank if any(bank.values()) else None,
        "compensation": _legacy_template(payroll),
    }


def _legacy_state(status: Optional[str]) -> str:
    status = status or ""
    if status.startswith(LeaveState.APPROVED.value):
        return LeaveState.APPROVED.value
    if status.startswith(LeaveState.DENIED.value):
        return LeaveState.DENIED.value
    return LeaveState.PENDING.value


def _legacy_leave(leave: dict) -> dict:
    day_type = leave.get("dayType") or DayType.FULL_DAY.value
    state = _legacy_state(leave.get("status"))
    flow = [
        {
            "approverId": step.get("approverId"),
            "approverRole": step.get("approverRole") or "Approver",
            "status": step.get("status") or StepStatus.AWAITING.value,
            "comment": step.get("comment") or "",
            "actedAt": _naive_iso(step.get("actedAt")),
        }
        for step in leave.get("approvalFlow") or ()
    ]
    index = leave.get("currentApprovalIndex")
    if state != LeaveState.PENDING.value or index is None:
        index = -1
    return {
        "id": leave["id"],
        "employeeId": leave.get("userId"),
        "leaveType": leave.get("type"),
        "dayType": day_type,
        "fromDate": leave.get("fromDate"),
        "toDate": leave.get("toDate"),
        "reason": leave.get("reason") or "",
        "leaveDays": leave.get("leaveDays") or leave_days(leave.get("fromDate"), leave.get("toDate"), day_type),
        "state": state,
        "approvalFlow": flow,
        "currentApprovalIndex": int(index),
        "selectedApproverIds": list(leave.get("selectedApproverIds") or ()),
        "adminComment": leave.get("adminComment") or "",
        "createdAt": _naive_iso(leave.get("createdAt")),
    }


def _legacy_session(session: dict) -> dict:
    return {
        "id": session["id"],
        "employeeId": session.get("userId"),
        "date": session.get("date"),
        "clockIn": _naive_iso(session.get("clockIn")),
        "clockOut": _naive_iso(session.get("clockOut")),
        "workedMinutes": int(session.get("workedMinutes") or 0),
    }


def _legacy_regularization(request: dict) -> dict:
    return {
        "id": request["id"],
        "employeeId": request.get("userId"),
        "date": request.get("date"),
        "reason": request.get("reason") or "",
        "recipientId": request.get("recipientUserId"),
        "status": request.get("status") or "Pending",
        "createdAt": _naive_iso(request.get("createdAt")),
        "reviewedBy": request.get("reviewedBy"),
        "reviewComment": request.get("reviewComment") or "",
        "reviewedAt": _naive_iso(request.get("reviewedAt")),
    }


def _legacy_slip(slip: dict) -> Optional[dict]:
    """Only fully itemised legacy slips survive; summary-only demo rows are dropped."""
    if not isinstance(slip.get("earnings"), dict) or not isinstance(slip.get("deductions"), dict):
        return None
    key = (slip.get("period") or {}).get("key") or period_key_from_label(slip.get("month") or "")
    if not key:
        return None
    period = parse_period_key(key)
    profile = slip.get("employeeProfile") or {}
    return {
        "id": slip.get("id") or f"slip-{slip.get('userId')}-{period.key}",
        "employeeId": slip.get("userId"),
        "companyName": slip.get("companyName") or "",
        "period": {"year": period.year, "monthIndex": period.month_index, "key": period.key, "label": period.label},
        "currency": slip.get("currency"),
        "generatedOn": _naive_iso(slip.get("generatedOn")),
        "revision": 1,
        "employeeProfile": {k: profile.get(k) or "" for k in LEGACY_PROFILE_FIELDS},
        "compensation": _legacy_template(profile),
        **{
            section: {k: (slip.get(section) or {}).get(k) or 0 for k in keys}
            for section, keys in SLIP_AMOUNT_FIELDS.items()
        },
        "net": slip["net"],
    }


def migrate_v0_to_v1(doc: dict) -> dict:
    slips = [_legacy_slip(s) for s in doc.get("salarySlips") or ()]
    dropped = sum(1 for s in slips if s is None)
    if dropped:
        logger.warning("Dropped %s legacy salary slip(s) without an itemised breakdown", dropped)

    return {
        "schemaVersion": 1,
        "employees": [_legacy_employee(u) for u in doc.get("users") or ()],
        "attendanceSessions": [_legacy_session(s) for s in doc.get("attendanceSessions") or ()],
        "regularizationRequests": [_legacy_regularization(r) for r in doc.get("regularizationRequests") or ()],
        "leaves": [_legacy_leave(lv) for lv in doc.get("leaves") or ()],
        "holidays": [dict(h) for h in doc.get("holidays") or ()],
        "salarySlips": [s for s in slips if s is not None],
    }


MIGRATIONS: Dict[int, Migration] = {
    0: migrate_v0_to_v1,
}


def migrate(doc: dict, *, target: int = SCHEMA_VERSION) -> dict:
    version = detect_version(doc)
    if version > target:
        raise ValueError(f"Stored schema version {version} is newer than supported version {target}")
    while version < target:
        step = MIGRATIONS.get(version)
        if step is None:
            raise ValueError(f"No migration registered from schema version {version}")
        logger.info("Migrating stored state from schema v%s to v%s", version, version + 1)
        doc = step(doc)
        version = detect_version(doc)
    return doc
