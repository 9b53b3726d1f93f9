from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hr_payroll.hr_payroll.database.bootstrap import ensure_kv_table, list_tables
from src.hr_payroll.hr_payroll.database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger("init_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_mapping(settings.DB_CONFIG)
    conn = DatabaseConnection.get_instance(config)

    ensure_kv_table(conn)
    logger.info(
        "OK: key-value store ready -> %s@%s:%s/%s (tables=%s)",
        config.user,
        config.host,
        config.port,
        config.database,
        len(list_tables(conn)),
    )


if __name__ == "__main__":
    main()
