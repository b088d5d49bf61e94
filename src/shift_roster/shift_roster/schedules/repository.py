from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import ScheduleStatus
from .model import NewSchedule, ScheduleRequest


class ScheduleRepository(Protocol):
    """Snapshot provider for schedule requests.

    Every read returns a point-in-time list; callers recompute conflicts and
    slots from a fresh snapshot instead of caching.
    """

    def get_by_id(self, schedule_id: int) -> Optional[ScheduleRequest]:
        raise NotImplementedError

    def list_for_store(
        self,
        store_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[ScheduleStatus] = None,
    ) -> Sequence[ScheduleRequest]:
        raise NotImplementedError

    def create(self, new: NewSchedule) -> int:
        """Insert a schedule request. Returns schedule_id."""

        raise NotImplementedError

    def update_request(
        self,
        *,
        schedule_id: int,
        shift_id: int,
        work_date: date,
        custom_start: Optional[time],
        custom_end: Optional[time],
    ) -> bool:
        """Edit a request that is still pending."""

        raise NotImplementedError

    def decide(
        self,
        *,
        schedule_id: int,
        status: ScheduleStatus,
        decided_by: int,
    ) -> bool:
        """Move a pending request to approved/rejected."""

        raise NotImplementedError

    def delete(self, *, schedule_id: int) -> bool:
        raise NotImplementedError

    def list_approved_before(
        self,
        *,
        before: date,
        limit: int,
        store_id: Optional[int] = None,
    ) -> Sequence[ScheduleRequest]:
        raise NotImplementedError

    def mark_completed(self, *, schedule_ids: Sequence[int]) -> int:
        """Atomically complete the given requests that are still approved.

        Returns how many rows changed.
        """

        raise NotImplementedError
