from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...schedules.model import ScheduleRequest
from ...shifts.model import ShiftDefinition


@dataclass(frozen=True)
class WorkedHours:
    total: float
    night: float


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_hours(self, schedule: ScheduleRequest, shift: ShiftDefinition) -> WorkedHours:
        raise NotImplementedError

    @abstractmethod
    def night_allowance(self, night_hours: float, hourly_rate: float) -> float:
        raise NotImplementedError
