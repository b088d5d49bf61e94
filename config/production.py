import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_roster"),
}

DEBUG = False

DEFAULT_SHIFT_CAPACITY = int(os.getenv("DEFAULT_SHIFT_CAPACITY")) if os.getenv("DEFAULT_SHIFT_CAPACITY") else None
SWEEP_BATCH_SIZE = int(os.getenv("SWEEP_BATCH_SIZE", "500"))
# The cron endpoint is open when this is unset.
CRON_SECRET = os.getenv("CRON_SECRET") or None

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
