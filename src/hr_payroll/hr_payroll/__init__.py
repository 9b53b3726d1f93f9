"""HR Payroll package.

This package is organized by feature modules (periods, attendance, leaves,
payroll, ...) with a thin Flask controller layer over service functions and a
snapshot-based state store.
"""
