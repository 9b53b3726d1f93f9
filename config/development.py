import json
import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "memory" keeps state for the life of the process; "mysql" persists it in DB_CONFIG
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")
STORE_KEY = os.getenv("STORE_KEY", "hr_portal_state")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal"),
}

DEBUG = True

# If enabled, the key-value table is created on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

COMPANY_NAME = os.getenv("COMPANY_NAME", "Ingenious HR Portal Pvt. Ltd.")

# Optional JSON object overriding payroll business constants, e.g. {"esi_gross_ceiling": 25000}
PAYROLL_RULES = json.loads(os.getenv("PAYROLL_RULES", "{}"))

# Start from the demo directory when the store is empty
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
