from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.shift_roster.shift_roster.database.bootstrap import apply_seed_sql

logger = logging.getLogger("shift_roster.scripts.seed_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    logger.info("Seeded stores, shifts and employees into %s", db_config.get("database"))


if __name__ == "__main__":
    main()
