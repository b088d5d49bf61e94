import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_roster"),
}

DEBUG = True

# Unset: shifts without their own or a store capacity are unlimited.
DEFAULT_SHIFT_CAPACITY = int(os.getenv("DEFAULT_SHIFT_CAPACITY")) if os.getenv("DEFAULT_SHIFT_CAPACITY") else None
SWEEP_BATCH_SIZE = int(os.getenv("SWEEP_BATCH_SIZE", "500"))
CRON_SECRET = os.getenv("CRON_SECRET") or None

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
