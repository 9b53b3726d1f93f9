import os

SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"
STORE_KEY = "hr_portal_state_test"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False

COMPANY_NAME = "Ingenious HR Portal Pvt. Ltd."

PAYROLL_RULES = {}
