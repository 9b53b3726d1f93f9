from __future__ import annotations

import importlib
import logging
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hr_payroll.hr_payroll.container import build_container
from src.hr_payroll.hr_payroll.storage.seed import demo_state

logger = logging.getLogger("seed_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        store_backend="mysql",
        store_key=settings.STORE_KEY,
        db_config=settings.DB_CONFIG,
        auto_init_db=True,
    )

    seed = demo_state(date.today())
    container.state_store.execute(lambda state: (seed, None))
    logger.info("OK: seeded %s employees and %s holidays", len(seed.employees), len(seed.holidays))


if __name__ == "__main__":
    main()
