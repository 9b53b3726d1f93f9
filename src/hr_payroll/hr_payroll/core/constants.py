"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STORAGE_KEY = "hr_portal_state"
SCHEMA_VERSION = 1

COMPANY_NAME = "Ingenious HR Portal Pvt. Ltd."
DEFAULT_CURRENCY = "USD"

# Attendance credit thresholds (minutes worked on one date)
FULL_DAY_MINUTES = 540
HALF_DAY_MINUTES = 300

# Regularized sessions are written as fixed office hours
REGULARIZED_CLOCK_IN = "09:00"
REGULARIZED_CLOCK_OUT = "18:00"
HALF_DAY_CLOCK_OUT = "14:00"

PAID_LEAVE_ACCRUAL_PER_MONTH = 1.5

FALLBACK_MONTHLY_GROSS = 6000
FALLBACK_CONVEYANCE_PCT = 0.10
FALLBACK_MEDICAL_PCT = 0.08
ESI_GROSS_CEILING = 21000

DEFAULT_BASIC_PCT = 40.0
DEFAULT_HRA_PCT = 20.0
DEFAULT_PF_RATE = 12.0
DEFAULT_ESI_RATE = 0.75
DEFAULT_PROFESSIONAL_TAX = 200

NO_ACTIVE_APPROVER = -1

ADMIN_PERMISSIONS = (
    "dashboard",
    "attendance",
    "regularize",
    "profile",
    "leave",
    "salary",
    "payroll_admin",
    "chat",
    "notifications",
    "access",
    "company_posts",
)
EMPLOYEE_PERMISSIONS = ("dashboard", "attendance", "profile", "leave", "salary", "chat", "notifications")
