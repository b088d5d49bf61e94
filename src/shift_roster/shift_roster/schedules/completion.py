from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from ..common.datetime_utils import today_local
from ..core.constants import DEFAULT_SWEEP_BATCH_SIZE
from ..core.exceptions import ValidationError
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepResult:
    updated: int
    batches: int

    def to_dict(self) -> dict:
        return {"updated": self.updated, "batches": self.batches}


class CompletionSweepService:
    """Moves approved requests dated before today to completed.

    Works in pages of `batch_size`, each committed as one transaction by the
    repository, until no approved past request is left. Re-running is a no-op.
    """

    def __init__(
        self,
        schedules: ScheduleRepository,
        *,
        batch_size: int = DEFAULT_SWEEP_BATCH_SIZE,
        today: Callable[[], date] = today_local,
    ):
        if int(batch_size) <= 0:
            raise ValidationError("Batch size must be positive")
        self._schedules = schedules
        self._batch_size = int(batch_size)
        self._today = today

    def run(self, *, today: Optional[date] = None, store_id: Optional[int] = None) -> SweepResult:
        cutoff = today or self._today()
        updated = 0
        batches = 0

        while True:
            page = self._schedules.list_approved_before(before=cutoff, limit=self._batch_size, store_id=store_id)
            if not page:
                break

            changed = self._schedules.mark_completed(schedule_ids=[s.schedule_id for s in page])
            batches += 1
            updated += changed
            logger.info("Completion sweep batch %d: %d of %d schedules completed", batches, changed, len(page))

            if changed == 0:
                # Nothing moved, so the same page would come back forever.
                logger.warning("Completion sweep made no progress; stopping after %d batches", batches)
                break
            if len(page) < self._batch_size:
                break

        logger.info("Completion sweep before %s finished: %d schedules in %d batches", cutoff, updated, batches)
        return SweepResult(updated=updated, batches=batches)
