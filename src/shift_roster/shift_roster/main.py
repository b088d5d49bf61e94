from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

from .container import build_container
from .core.constants import DEFAULT_SWEEP_BATCH_SIZE
from .payroll.controller import register as register_payroll
from .schedules.controller import register as register_schedules
from .swaps.controller import register as register_swaps

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["CRON_SECRET"] = getattr(settings, "CRON_SECRET", None)

    logging.basicConfig(level=logging.DEBUG if app.config["DEBUG"] else logging.INFO)
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        logger.info("Demo seed ready")

    container = build_container(
        db_config=db_config,
        default_capacity=getattr(settings, "DEFAULT_SHIFT_CAPACITY", None),
        sweep_batch_size=int(getattr(settings, "SWEEP_BATCH_SIZE", DEFAULT_SWEEP_BATCH_SIZE)),
    )

    register_schedules(app, container)
    register_payroll(app, container)
    register_swaps(app, container)

    return app
