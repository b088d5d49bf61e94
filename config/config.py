import os


def _optional_int(name: str):
    raw = os.environ.get(name, "").strip()
    return int(raw) if raw else None


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "shift-roster-secret"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "shift_roster")

    # Fallback slot capacity when neither the shift nor the store sets one; unset means unlimited.
    DEFAULT_SHIFT_CAPACITY = _optional_int("DEFAULT_SHIFT_CAPACITY")
    SWEEP_BATCH_SIZE = int(os.environ.get("SWEEP_BATCH_SIZE", "500"))
    CRON_SECRET = os.environ.get("CRON_SECRET") or None

    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
    AUTO_SEED_DB = bool(int(os.environ.get("AUTO_SEED_DB", "0")))


SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}

DEBUG = bool(int(os.environ.get("DEBUG", "1")))

DEFAULT_SHIFT_CAPACITY = Config.DEFAULT_SHIFT_CAPACITY
SWEEP_BATCH_SIZE = Config.SWEEP_BATCH_SIZE
CRON_SECRET = Config.CRON_SECRET

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
