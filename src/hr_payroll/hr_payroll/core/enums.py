from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class TitleTag(str, Enum):
    """Seniority tags assigned at onboarding; drive approver eligibility and labels."""

    MANAGER = "manager"
    SENIOR = "senior"


class LeaveType(str, Enum):
    PAID = "Paid Leave"
    PUBLIC_HOLIDAY = "PH Leave"
    CASUAL = "Casual Leave"
    SICK = "Sick Leave"
    UNPAID = "Unpaid Leave"


class DayType(str, Enum):
    FULL_DAY = "Full Day"
    HALF_DAY = "Half Day"


class StepStatus(str, Enum):
    """Status of one approver step inside an approval flow."""

    PENDING = "Pending"
    AWAITING = "Awaiting"
    APPROVED = "Approved"
    DENIED = "Denied"


class LeaveState(str, Enum):
    """Overall leave request state; the display label is derived from it."""

    PENDING = "Pending"
    APPROVED = "Approved"
    DENIED = "Denied"


class Decision(str, Enum):
    APPROVED = "Approved"
    DENIED = "Denied"


class RequestStatus(str, Enum):
    """Regularization request review status."""

    PENDING = "Pending"
    APPROVED = "Approved"


class DayStatus(str, Enum):
    """Attendance status an admin may set for a single day."""

    PRESENT = "Present"
    ABSENT = "Absent"
    WFH = "WFH"


class WorkDayType(str, Enum):
    FULL_DAY = "Full Day"
    HALF_DAY = "Half Day"
    NO_SESSION = "No Work Session"
