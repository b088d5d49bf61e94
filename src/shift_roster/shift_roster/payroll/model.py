from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List


@dataclass(frozen=True)
class PayrollLine:
    """Computed pay for one employee over one calendar month."""

    employee_id: int
    employee_name: str
    employee_type: str
    hourly_rate: float
    completed_shifts: int = 0
    total_hours: float = 0.0
    night_shift_hours: float = 0.0
    night_shift_allowance: float = 0.0
    total_salary: float = 0.0

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "employee_type": self.employee_type,
            "hourly_rate": self.hourly_rate,
            "completed_shifts": self.completed_shifts,
            "total_hours": self.total_hours,
            "night_shift_hours": self.night_shift_hours,
            "night_shift_allowance": self.night_shift_allowance,
            "total_salary": self.total_salary,
        }


@dataclass(frozen=True)
class MonthlyPayroll:
    month: date
    lines: List[PayrollLine] = field(default_factory=list)
    total_salary: float = 0.0
    total_hours: float = 0.0
    total_shifts: int = 0
    total_night_allowance: float = 0.0

    def to_dict(self) -> dict:
        return {
            "month": self.month.strftime("%Y-%m"),
            "employees": [line.to_dict() for line in self.lines],
            "total_salary": self.total_salary,
            "total_hours": self.total_hours,
            "total_shifts": self.total_shifts,
            "total_night_allowance": self.total_night_allowance,
        }


@dataclass(frozen=True)
class MonthComparison:
    salary_change: float
    salary_change_percent: float
    hours_change: float
    hours_change_percent: float

    def to_dict(self) -> dict:
        return {
            "salary_change": self.salary_change,
            "salary_change_percent": self.salary_change_percent,
            "hours_change": self.hours_change,
            "hours_change_percent": self.hours_change_percent,
        }
