"""Run the completion sweep once, e.g. from a nightly cron job."""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.shift_roster.shift_roster.container import build_container
from src.shift_roster.shift_roster.core.constants import DEFAULT_SWEEP_BATCH_SIZE

logger = logging.getLogger("shift_roster.scripts.complete_schedules")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        sweep_batch_size=int(getattr(settings, "SWEEP_BATCH_SIZE", DEFAULT_SWEEP_BATCH_SIZE)),
    )
    result = container.completion_service.run()
    logger.info("Completed %d schedules in %d batches", result.updated, result.batches)


if __name__ == "__main__":
    main()
