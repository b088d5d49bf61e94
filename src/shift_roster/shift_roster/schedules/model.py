from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Tuple

from ..core.enums import ScheduleStatus
from ..shifts.model import ShiftDefinition

# Requests in these states hold a slot and count towards weekly hours.
ACTIVE_STATUSES = frozenset({ScheduleStatus.PENDING, ScheduleStatus.APPROVED})


@dataclass(frozen=True)
class ScheduleRequest:
    """Domain entity: one employee's request to work a shift on a date."""

    schedule_id: int
    store_id: int
    employee_id: int
    shift_id: int
    work_date: date
    status: ScheduleStatus
    requested_by: int
    created_by: int
    custom_start: Optional[time] = None
    custom_end: Optional[time] = None
    assigned_by: Optional[int] = None
    approved_by: Optional[int] = None
    is_assigned: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    swapped_from: Optional[int] = None
    swap_id: Optional[int] = None
    swapped_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewSchedule:
    store_id: int
    employee_id: int
    shift_id: int
    work_date: date
    status: ScheduleStatus
    requested_by: int
    created_by: int
    custom_start: Optional[time] = None
    custom_end: Optional[time] = None
    assigned_by: Optional[int] = None
    approved_by: Optional[int] = None
    is_assigned: bool = False


def effective_times(
    shift: ShiftDefinition,
    custom_start: Optional[time] = None,
    custom_end: Optional[time] = None,
) -> Tuple[time, time]:
    """Custom times apply only to flexible shifts, and only when both are set."""
    if shift.is_flexible and custom_start is not None and custom_end is not None:
        return custom_start, custom_end
    return shift.start_time, shift.end_time


def schedule_times(schedule: ScheduleRequest, shift: ShiftDefinition) -> Tuple[time, time]:
    return effective_times(shift, schedule.custom_start, schedule.custom_end)
