from __future__ import annotations

import copy

import pytest

LEGACY_DOC = {
    "users": [
        {
            "id": "u1",
            "name": "Ananya Mehta",
            "email": "admin@hrportal.com",
            "role": "admin",
            "department": "HR",
            "designation": "HR Manager",
            "permissions": ["access", "payroll_admin"],
            "personalDetails": {"joiningDate": "2024-01-10"},
        },
        {
            "id": "u2",
            "name": "Rohan Kumar",
            "email": "rohan@hrportal.com",
            "role": "employee",
            "department": "Engineering",
            "designation": "Senior Developer",
            "managerId": "u1",
            "permissions": ["attendance"],
            "payrollDetails": {
                "ctcAnnual": "600000",
                "basicPct": 0,
                "hraPct": "",
                "conveyanceFixed": 1600,
                "pfNumber": "PF123",
                "employeeCode": "ENG-002",
                "accountNumber": "00012345",
                "ifscCode": "HDFC0001",
                "bankName": "HDFC Bank",
            },
        },
    ],
    "attendanceSessions": [
        {
            "id": "s1",
            "userId": "u2",
            "date": "2026-03-02",
            "clockIn": "2026-03-02T09:00:00.000Z",
            "clockOut": "2026-03-02T18:00:00.000Z",
            "workedMinutes": 540,
        },
        {"id": "s2", "userId": "u2", "date": "2026-03-03", "clockIn": "2026-03-03T09:30:00.000Z"},
    ],
    "regularizationRequests": [
        {
            "id": "r1",
            "userId": "u2",
            "date": "2026-03-05",
            "reason": "Forgot to clock in",
            "recipientUserId": "u1",
            "status": "Pending",
            "createdAt": "2026-03-06T04:00:00.000Z",
        }
    ],
    "leaves": [
        {
            "id": "l1",
            "userId": "u2",
            "type": "Sick Leave",
            "fromDate": "2026-03-03",
            "toDate": "2026-03-04",
            "reason": "Flu",
            "status": "Pending with Manager",
            "approvalFlow": [{"approverId": "u1", "approverRole": "Manager", "status": "Pending"}],
            "currentApprovalIndex": 0,
        },
        {
            "id": "l2",
            "userId": "u2",
            "type": "Paid Leave",
            "dayType": "Half Day",
            "fromDate": "2026-02-02",
            "toDate": "2026-02-02",
            "reason": "Errand",
            "status": "Approved",
            "approvalFlow": [
                {
                    "approverId": "u1",
                    "approverRole": "Manager",
                    "status": "Approved",
                    "actedAt": "2026-01-30T10:00:00.000Z",
                }
            ],
            "currentApprovalIndex": 0,
        },
        {
            "id": "l3",
            "userId": "u2",
            "type": "Casual Leave",
            "fromDate": "2026-01-12",
            "toDate": "2026-01-12",
            "reason": "Trip",
            "status": "Denied by Manager",
            "approvalFlow": [],
        },
    ],
    "holidays": [{"id": "h1", "date": "2026-03-10", "name": "Holi", "type": "official"}],
    "salarySlips": [
        {"id": "old-1", "userId": "u2", "month": "January 2026", "basic": 20000, "allowances": 30000, "net": 49800}
    ],
}


@pytest.fixture
def legacy_doc() -> dict:
    """Document in the pre-versioned browser-portal shape."""
    return copy.deepcopy(LEGACY_DOC)
