from __future__ import annotations

from ...common.intervals import duration_hours, night_premium_hours
from ...core.constants import NIGHT_PREMIUM_RATE
from ...schedules.model import ScheduleRequest, schedule_times
from ...shifts.model import ShiftDefinition
from .base import PayrollCalculator, WorkedHours


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: effective range hours, plus 30% on 22:30-06:30 hours."""

    def __init__(self, night_premium_rate: float = NIGHT_PREMIUM_RATE):
        self._night_premium_rate = float(night_premium_rate)

    def worked_hours(self, schedule: ScheduleRequest, shift: ShiftDefinition) -> WorkedHours:
        start, end = schedule_times(schedule, shift)
        return WorkedHours(total=duration_hours(start, end), night=night_premium_hours(start, end))

    def night_allowance(self, night_hours: float, hourly_rate: float) -> float:
        return night_hours * hourly_rate * self._night_premium_rate
