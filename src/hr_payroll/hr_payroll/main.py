from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.errors import register_error_handlers
from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["COMPANY_NAME"] = getattr(settings, "COMPANY_NAME")

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    store_backend = getattr(settings, "STORE_BACKEND", "memory")
    db_config = getattr(settings, "DB_CONFIG", None)
    if store_backend == "mysql" and db_config:
        logger.info(
            "settings=%s store=mysql db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
    else:
        logger.info("settings=%s store=%s", settings_module, store_backend)

    if container is None:
        container = build_container(
            store_backend=store_backend,
            store_key=getattr(settings, "STORE_KEY"),
            db_config=db_config,
            auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
            company_name=app.config["COMPANY_NAME"],
            payroll_rules=getattr(settings, "PAYROLL_RULES", None),
            seed_demo=bool(getattr(settings, "AUTO_SEED_DB", False)),
        )
    app.extensions["hr_payroll"] = container

    register_error_handlers(app)
    register_employees(app, container)
    register_leaves(app, container)
    register_attendance(app, container)
    register_payroll(app, container)

    return app
