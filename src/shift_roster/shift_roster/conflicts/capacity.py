"""Slot capacity accounting per store, shift and date."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..schedules.model import ACTIVE_STATUSES, ScheduleRequest
from ..shifts.model import ShiftDefinition
from ..stores.model import StorePolicy


@dataclass(frozen=True)
class SlotAvailability:
    shift_id: int
    work_date: date
    store_id: int
    total: Optional[int]
    occupied: int
    available: Optional[int]

    @property
    def is_unlimited(self) -> bool:
        return self.total is None

    @property
    def is_full(self) -> bool:
        return self.available is not None and self.available == 0

    @property
    def percentage(self) -> float:
        if self.total is None:
            return 100.0
        if self.total <= 0:
            return 0.0
        return self.available / self.total * 100

    def to_dict(self) -> dict:
        return {
            "shift_id": self.shift_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "store_id": self.store_id,
            "total": self.total,
            "occupied": self.occupied,
            "available": self.available,
            "is_full": self.is_full,
            "percentage": round(self.percentage, 1),
        }


def resolve_capacity(
    shift: Optional[ShiftDefinition],
    policy: Optional[StorePolicy],
    default_capacity: Optional[int] = None,
) -> Optional[int]:
    """Shift override, then store default, then system default. None = unlimited."""
    if shift is not None and shift.max_employees is not None:
        return int(shift.max_employees)
    if policy is not None and policy.max_employees_per_shift is not None:
        return int(policy.max_employees_per_shift)
    if default_capacity is not None:
        return int(default_capacity)
    return None


def available_slots(
    shift_id: int,
    work_date: date,
    store_id: int,
    shift: Optional[ShiftDefinition],
    policy: Optional[StorePolicy],
    schedules: Iterable[ScheduleRequest],
    *,
    exclude_schedule_id: Optional[int] = None,
    default_capacity: Optional[int] = None,
) -> SlotAvailability:
    total = resolve_capacity(shift, policy, default_capacity)

    occupied = 0
    for s in schedules:
        if exclude_schedule_id is not None and s.schedule_id == exclude_schedule_id:
            continue
        if s.store_id != store_id or s.shift_id != shift_id or s.work_date != work_date:
            continue
        if s.status in ACTIVE_STATUSES:
            occupied += 1

    available = max(0, total - occupied) if total is not None else None
    return SlotAvailability(
        shift_id=shift_id,
        work_date=work_date,
        store_id=store_id,
        total=total,
        occupied=occupied,
        available=available,
    )
