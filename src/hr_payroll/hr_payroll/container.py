from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendance.factory import AttendanceCreditFactory
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, now_local
from .core.constants import COMPANY_NAME, STORAGE_KEY
from .database.bootstrap import ensure_kv_table
from .database.connection import DBConfig, DatabaseConnection
from .employees.service import EmployeeService
from .leaves.service import LeaveService
from .payroll.rules import PayrollRules
from .payroll.service import PayrollService
from .storage.memory_store import InMemoryKeyValueStore
from .storage.mysql_kv_store import MySQLKeyValueStore
from .storage.repository import KeyValueStore
from .storage.seed import demo_state
from .storage.state import HRState
from .storage.state_store import StateStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    kv_store: KeyValueStore
    state_store: StateStore
    rules: PayrollRules

    employee_service: EmployeeService
    leave_service: LeaveService
    attendance_service: AttendanceService
    payroll_service: PayrollService


def build_kv_store(
    *,
    backend: str = "memory",
    db_config: Optional[Mapping[str, Any]] = None,
    auto_init_db: bool = False,
) -> KeyValueStore:
    backend = (backend or "memory").lower()
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "mysql":
        if not db_config:
            raise ValueError("STORE_BACKEND=mysql requires DB_CONFIG")
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
        if auto_init_db:
            ensure_kv_table(conn)
        return MySQLKeyValueStore(conn)
    raise ValueError(f"Unknown store backend: {backend!r} (expected 'memory' or 'mysql')")


def build_container(
    *,
    kv_store: Optional[KeyValueStore] = None,
    store_backend: str = "memory",
    store_key: str = STORAGE_KEY,
    db_config: Optional[Mapping[str, Any]] = None,
    auto_init_db: bool = False,
    company_name: str = COMPANY_NAME,
    payroll_rules: Optional[Mapping[str, Any]] = None,
    clock: Clock = now_local,
    seed: Optional[HRState] = None,
    seed_demo: bool = False,
) -> Container:
    if seed is None and seed_demo:
        seed = demo_state(clock().date())
    kv_store = kv_store or build_kv_store(backend=store_backend, db_config=db_config, auto_init_db=auto_init_db)
    state_store = StateStore(kv_store, key=store_key, seed=seed)
    rules = PayrollRules.from_settings(payroll_rules)

    employee_service = EmployeeService(state_store, clock=clock)
    leave_service = LeaveService(state_store, clock=clock, accrual_per_month=rules.paid_leave_accrual_per_month)
    attendance_service = AttendanceService(
        state_store,
        clock=clock,
        credit_factory=AttendanceCreditFactory(
            full_day_minutes=rules.full_day_minutes,
            half_day_minutes=rules.half_day_minutes,
        ),
    )
    payroll_service = PayrollService(state_store, clock=clock, rules=rules, company_name=company_name)

    logger.debug("Container built (store=%s, key=%s)", type(kv_store).__name__, store_key)
    return Container(
        kv_store=kv_store,
        state_store=state_store,
        rules=rules,
        employee_service=employee_service,
        leave_service=leave_service,
        attendance_service=attendance_service,
        payroll_service=payroll_service,
    )
