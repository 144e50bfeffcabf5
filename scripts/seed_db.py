from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.teammate_portal.teammate_portal.database.bootstrap import DEMO_PASSWORD, apply_seed_sql, ensure_demo_logins
from src.teammate_portal.teammate_portal.database.connection import DBConfig

logger = logging.getLogger("scripts.seed_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    updated = ensure_demo_logins(db_config)

    logger.info("Seeded database -> %s", DBConfig.from_dict(db_config).describe())
    if updated:
        logger.info("Set password %r on %d demo login(s)", DEMO_PASSWORD, updated)


if __name__ == "__main__":
    main()
