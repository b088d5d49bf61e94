from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

from ..common.intervals import ClockTime, duration_hours, to_minute_range
from ..core.constants import MINUTES_PER_DAY
from ..core.enums import ConflictRuleId, Severity
from ..common.validators import require_positive_id
from ..core.exceptions import ValidationError
from ..schedules.model import ScheduleRequest, schedule_times
from ..shifts.model import ShiftDefinition
from ..stores.model import StorePolicy


@dataclass(frozen=True)
class Conflict:
    """A business rule violation for a candidate request. Returned, never raised."""

    rule: ConflictRuleId
    severity: Severity
    message: str
    schedule_id: Optional[int] = None

    @property
    def is_blocking(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> dict:
        return {
            "rule": self.rule.value,
            "severity": self.severity.value,
            "message": self.message,
            "schedule_id": self.schedule_id,
        }


def is_blocked(conflicts: Iterable[Conflict]) -> bool:
    return any(c.is_blocking for c in conflicts)


ShiftCatalog = Union[Mapping[int, ShiftDefinition], Sequence[ShiftDefinition]]


@dataclass(frozen=True)
class EvaluationContext:
    """Snapshot the detector evaluates against. Nothing here is mutated."""

    schedules: Sequence[ScheduleRequest]
    shifts: ShiftCatalog
    today: date
    store_policy: Optional[StorePolicy] = None
    custom_start: Optional[ClockTime] = None
    custom_end: Optional[ClockTime] = None
    # Request being edited; it never conflicts with itself.
    exclude_schedule_id: Optional[int] = None
    default_capacity: Optional[int] = None
    _catalog: dict = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        shifts = self.shifts
        catalog = dict(shifts) if isinstance(shifts, Mapping) else {s.shift_id: s for s in shifts}
        object.__setattr__(self, "_catalog", catalog)

    def shift_for(self, shift_id: int) -> ShiftDefinition:
        shift = self._catalog.get(require_positive_id(shift_id, "Shift"))
        if shift is None:
            raise ValidationError(f"Unknown shift: {shift_id}")
        return shift

    def others(self) -> Iterable[ScheduleRequest]:
        for s in self.schedules:
            if self.exclude_schedule_id is not None and s.schedule_id == self.exclude_schedule_id:
                continue
            yield s


@dataclass(frozen=True)
class Candidate:
    """The request under evaluation, with its effective time range resolved."""

    employee_id: int
    store_id: int
    work_date: date
    shift: ShiftDefinition
    start_time: Union[str, time]
    end_time: Union[str, time]

    @property
    def minute_range(self) -> Tuple[int, int]:
        return to_minute_range(self.start_time, self.end_time)

    @property
    def hours(self) -> float:
        return duration_hours(self.start_time, self.end_time)


def absolute_range(schedule: ScheduleRequest, shift: ShiftDefinition, anchor: date) -> Tuple[int, int]:
    """Minute range of `schedule` on an axis where 0 is midnight of `anchor`."""
    start, end = schedule_times(schedule, shift)
    start_min, end_min = to_minute_range(start, end)
    offset = (schedule.work_date - anchor).days * MINUTES_PER_DAY
    return start_min + offset, end_min + offset
