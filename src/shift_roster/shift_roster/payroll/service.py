from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence, Union

from ..common.datetime_utils import month_bounds, parse_month, previous_month
from ..core.enums import ScheduleStatus
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..schedules.model import ScheduleRequest
from ..schedules.repository import ScheduleRepository
from ..shifts.model import ShiftDefinition
from ..shifts.repository import ShiftRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import MonthComparison, MonthlyPayroll, PayrollLine

ShiftCatalog = Union[Mapping[int, ShiftDefinition], Sequence[ShiftDefinition]]


@dataclass(frozen=True)
class PayrollReport:
    current: MonthlyPayroll
    previous: MonthlyPayroll
    comparison: MonthComparison

    def to_dict(self) -> dict:
        return {
            "current": self.current.to_dict(),
            "previous": self.previous.to_dict(),
            "comparison": self.comparison.to_dict(),
        }


def _catalog(shifts: ShiftCatalog) -> Mapping[int, ShiftDefinition]:
    if isinstance(shifts, Mapping):
        return shifts
    return {s.shift_id: s for s in shifts}


class PayrollService:
    """Monthly payroll from completed schedule requests.

    The compute_* methods are pure and only use their arguments; the
    build_* methods load a store's snapshot through the repositories first.
    """

    def __init__(
        self,
        employees: Optional[EmployeeRepository] = None,
        schedules: Optional[ScheduleRepository] = None,
        shifts: Optional[ShiftRepository] = None,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._employees = employees
        self._schedules = schedules
        self._shifts = shifts
        self._calculator = calculator or StandardPayrollCalculator()

    def compute_employee_payroll(
        self,
        employee: Employee,
        schedules: Iterable[ScheduleRequest],
        shifts: ShiftCatalog,
        month: Union[str, date],
    ) -> PayrollLine:
        month_start, month_end = month_bounds(parse_month(month))
        catalog = _catalog(shifts)
        rate = float(employee.hourly_rate or 0)

        completed = 0
        total_hours = 0.0
        night_hours = 0.0
        for s in schedules:
            if s.employee_id != employee.employee_id or s.status != ScheduleStatus.COMPLETED:
                continue
            if not (month_start <= s.work_date <= month_end):
                continue

            shift = catalog.get(s.shift_id)
            if shift is None:
                raise ValidationError(f"Unknown shift {s.shift_id} on schedule {s.schedule_id}")

            worked = self._calculator.worked_hours(s, shift)
            completed += 1
            total_hours += worked.total
            night_hours += worked.night

        total_hours = round(total_hours, 1)
        night_hours = round(night_hours, 1)
        allowance = self._calculator.night_allowance(night_hours, rate)

        return PayrollLine(
            employee_id=employee.employee_id,
            employee_name=employee.full_name,
            employee_type=employee.employee_type,
            hourly_rate=rate,
            completed_shifts=completed,
            total_hours=total_hours,
            night_shift_hours=night_hours,
            night_shift_allowance=allowance,
            total_salary=total_hours * rate + allowance,
        )

    def compute_monthly_payroll(
        self,
        employees: Iterable[Employee],
        schedules: Sequence[ScheduleRequest],
        shifts: ShiftCatalog,
        month: Union[str, date],
    ) -> MonthlyPayroll:
        month_start = parse_month(month)
        catalog = _catalog(shifts)
        lines = [self.compute_employee_payroll(e, schedules, catalog, month_start) for e in employees]

        return MonthlyPayroll(
            month=month_start,
            lines=lines,
            total_salary=sum(line.total_salary for line in lines),
            total_hours=round(sum(line.total_hours for line in lines), 1),
            total_shifts=sum(line.completed_shifts for line in lines),
            total_night_allowance=sum(line.night_shift_allowance for line in lines),
        )

    @staticmethod
    def compare_months(current: MonthlyPayroll, previous: MonthlyPayroll) -> MonthComparison:
        salary_change = current.total_salary - previous.total_salary
        hours_change = round(current.total_hours - previous.total_hours, 1)
        return MonthComparison(
            salary_change=salary_change,
            salary_change_percent=(salary_change / previous.total_salary * 100) if previous.total_salary > 0 else 0.0,
            hours_change=hours_change,
            hours_change_percent=(hours_change / previous.total_hours * 100) if previous.total_hours > 0 else 0.0,
        )

    def build_monthly_report(self, *, store_id: int, month: Union[str, date]) -> MonthlyPayroll:
        if not (self._employees and self._schedules and self._shifts):
            raise RuntimeError("PayrollService was built without repositories")

        month_start, month_end = month_bounds(parse_month(month))
        # Deactivated employees still get paid for shifts they completed.
        roster = self._employees.list_for_store(int(store_id), active_only=False)
        schedules = self._schedules.list_for_store(
            int(store_id),
            start=month_start,
            end=month_end,
            status=ScheduleStatus.COMPLETED,
        )
        shifts = self._shifts.list_all()

        payroll = self.compute_monthly_payroll(roster, schedules, shifts, month_start)
        lines = sorted(payroll.lines, key=lambda line: line.total_salary, reverse=True)
        return MonthlyPayroll(
            month=payroll.month,
            lines=lines,
            total_salary=payroll.total_salary,
            total_hours=payroll.total_hours,
            total_shifts=payroll.total_shifts,
            total_night_allowance=payroll.total_night_allowance,
        )

    def build_report_with_comparison(self, *, store_id: int, month: Union[str, date]) -> PayrollReport:
        month_start = parse_month(month)
        current = self.build_monthly_report(store_id=store_id, month=month_start)
        previous = self.build_monthly_report(store_id=store_id, month=previous_month(month_start))
        return PayrollReport(current=current, previous=previous, comparison=self.compare_months(current, previous))
