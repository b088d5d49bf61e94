from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, time, timedelta
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..common.datetime_utils import month_bounds, parse_iso_date, today_local
from ..common.intervals import ClockTime, parse_hhmm
from ..common.validators import require_positive_id
from ..conflicts.capacity import SlotAvailability, available_slots
from ..conflicts.detector import ConflictDetector
from ..conflicts.model import Conflict, EvaluationContext, is_blocked
from ..conflicts.rules.capacity_rule import CapacityRule
from ..core.enums import Role, ScheduleStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..shifts.model import ShiftDefinition
from ..shifts.repository import ShiftRepository
from ..stores.repository import StoreRepository
from .model import NewSchedule, ScheduleRequest
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)

MANAGER_ROLES = frozenset({Role.MANAGER, Role.ADMIN})

# Neighbouring days for overlap/rest and the ISO week for weekly hours.
SNAPSHOT_MARGIN = timedelta(days=7)


def snapshot_window(dates: Sequence[date]) -> Tuple[date, date]:
    """Work dates the conflict rules may look at, including whole calendar months."""
    first, last = min(dates), max(dates)
    return (
        min(month_bounds(first)[0], first - SNAPSHOT_MARGIN),
        max(month_bounds(last)[1], last + SNAPSHOT_MARGIN),
    )


@dataclass(frozen=True)
class SubmissionResult:
    schedule_id: Optional[int]
    conflicts: List[Conflict] = field(default_factory=list)

    @property
    def blocked(self) -> bool:
        return is_blocked(self.conflicts)

    def to_dict(self) -> dict:
        return {
            "schedule_id": self.schedule_id,
            "blocked": self.blocked,
            "conflicts": [c.to_dict() for c in self.conflicts],
        }


@dataclass(frozen=True)
class BulkItem:
    shift_id: int
    work_date: Union[str, date]
    custom_start: Optional[ClockTime] = None
    custom_end: Optional[ClockTime] = None


@dataclass(frozen=True)
class BulkResult:
    schedule_ids: List[int]
    conflicts: Dict[int, List[Conflict]]

    @property
    def blocked(self) -> bool:
        return any(is_blocked(c) for c in self.conflicts.values())

    def to_dict(self) -> dict:
        return {
            "schedule_ids": self.schedule_ids,
            "blocked": self.blocked,
            "conflicts": {str(i): [c.to_dict() for c in cs] for i, cs in self.conflicts.items()},
        }


def _to_time(value: Optional[ClockTime]) -> Optional[time]:
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    minutes = parse_hhmm(value)
    return time(hour=minutes // 60, minute=minutes % 60)


class ScheduleService:
    def __init__(
        self,
        schedules: ScheduleRepository,
        shifts: ShiftRepository,
        stores: StoreRepository,
        *,
        detector: Optional[ConflictDetector] = None,
        default_capacity: Optional[int] = None,
        today: Callable[[], date] = today_local,
    ):
        self._schedules = schedules
        self._shifts = shifts
        self._stores = stores
        self._detector = detector or ConflictDetector()
        self._default_capacity = default_capacity
        self._today = today

    def _require_shift(self, shift_id: int) -> ShiftDefinition:
        shift = self._shifts.get_by_id(require_positive_id(shift_id, "Shift"))
        if not shift:
            raise ValidationError(f"Unknown shift: {shift_id}")
        return shift

    def _require_schedule(self, schedule_id: int) -> ScheduleRequest:
        sc = self._schedules.get_by_id(require_positive_id(schedule_id, "Schedule"))
        if not sc:
            raise ValidationError(f"Schedule {schedule_id} does not exist")
        return sc

    def _require_managed_schedule(self, schedule_id: int, store_id: int) -> ScheduleRequest:
        sc = self._require_schedule(schedule_id)
        if sc.store_id != require_positive_id(store_id, "Store"):
            raise AuthorizationError("Request belongs to another store")
        return sc

    def _context(
        self,
        *,
        store_id: int,
        dates: Sequence[date],
        custom_start: Optional[ClockTime] = None,
        custom_end: Optional[ClockTime] = None,
        exclude_schedule_id: Optional[int] = None,
        extra: Sequence[ScheduleRequest] = (),
    ) -> EvaluationContext:
        start, end = snapshot_window(dates)
        snapshot = self._schedules.list_for_store(int(store_id), start=start, end=end)
        return EvaluationContext(
            schedules=list(snapshot) + list(extra),
            shifts=self._shifts.list_all(),
            today=self._today(),
            store_policy=self._stores.get_policy(int(store_id)),
            custom_start=custom_start,
            custom_end=custom_end,
            exclude_schedule_id=exclude_schedule_id,
            default_capacity=self._default_capacity,
        )

    def _custom_times(
        self, shift: ShiftDefinition, custom_start: Optional[ClockTime], custom_end: Optional[ClockTime]
    ) -> tuple[Optional[time], Optional[time]]:
        if not shift.is_flexible:
            return None, None
        return _to_time(custom_start), _to_time(custom_end)

    def evaluate_request(
        self,
        *,
        employee_id: int,
        store_id: int,
        shift_id: int,
        work_date: Union[str, date],
        custom_start: Optional[ClockTime] = None,
        custom_end: Optional[ClockTime] = None,
        exclude_schedule_id: Optional[int] = None,
    ) -> List[Conflict]:
        """Conflict preview for a candidate request. Never writes."""
        employee_id = require_positive_id(employee_id, "Employee")
        store_id = require_positive_id(store_id, "Store")
        day = parse_iso_date(work_date)
        self._require_shift(shift_id)
        context = self._context(
            store_id=store_id,
            dates=[day],
            custom_start=custom_start,
            custom_end=custom_end,
            exclude_schedule_id=exclude_schedule_id,
        )
        return self._detector.evaluate(employee_id, shift_id, day, store_id, context)

    def submit_request(
        self,
        *,
        current_role: Role,
        user_id: int,
        store_id: int,
        shift_id: int,
        work_date: Union[str, date],
        custom_start: Optional[ClockTime] = None,
        custom_end: Optional[ClockTime] = None,
    ) -> SubmissionResult:
        """Employee self-registration; creates a pending request unless blocked."""
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can register for shifts")

        shift = self._require_shift(shift_id)
        if not shift.is_active:
            raise ValidationError(f"Shift {shift.shift_name} is no longer active")

        day = parse_iso_date(work_date)
        conflicts = self.evaluate_request(
            employee_id=user_id,
            store_id=store_id,
            shift_id=shift_id,
            work_date=day,
            custom_start=custom_start,
            custom_end=custom_end,
        )
        if is_blocked(conflicts):
            logger.info(
                "Registration blocked for employee %s on %s: %s",
                user_id,
                day,
                ", ".join(c.rule.value for c in conflicts if c.is_blocking),
            )
            return SubmissionResult(schedule_id=None, conflicts=conflicts)

        start, end = self._custom_times(shift, custom_start, custom_end)
        schedule_id = self._schedules.create(
            NewSchedule(
                store_id=int(store_id),
                employee_id=int(user_id),
                shift_id=shift.shift_id,
                work_date=day,
                status=ScheduleStatus.PENDING,
                requested_by=int(user_id),
                created_by=int(user_id),
                custom_start=start,
                custom_end=end,
            )
        )
        logger.info("Schedule %s requested by employee %s for %s", schedule_id, user_id, day)
        return SubmissionResult(schedule_id=schedule_id, conflicts=conflicts)

    def submit_bulk(
        self,
        *,
        current_role: Role,
        user_id: int,
        store_id: int,
        items: Sequence[BulkItem],
    ) -> BulkResult:
        """Register several days at once. All-or-nothing: one blocked item creates none."""
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can register for shifts")
        if not items:
            raise ValidationError("No shifts selected")

        days = [parse_iso_date(item.work_date) for item in items]
        shifts = [self._require_shift(item.shift_id) for item in items]
        for shift in shifts:
            if not shift.is_active:
                raise ValidationError(f"Shift {shift.shift_name} is no longer active")

        # Earlier items of the batch count as pending requests for later ones.
        staged: List[ScheduleRequest] = []
        conflicts: Dict[int, List[Conflict]] = {}
        for idx, (item, day, shift) in enumerate(zip(items, days, shifts)):
            context = self._context(
                store_id=store_id,
                dates=days,
                custom_start=item.custom_start,
                custom_end=item.custom_end,
                extra=staged,
            )
            found = self._detector.evaluate(int(user_id), shift.shift_id, day, int(store_id), context)
            if found:
                conflicts[idx] = found

            start, end = self._custom_times(shift, item.custom_start, item.custom_end)
            staged.append(
                ScheduleRequest(
                    schedule_id=-(idx + 1),
                    store_id=int(store_id),
                    employee_id=int(user_id),
                    shift_id=shift.shift_id,
                    work_date=day,
                    status=ScheduleStatus.PENDING,
                    requested_by=int(user_id),
                    created_by=int(user_id),
                    custom_start=start,
                    custom_end=end,
                )
            )

        result = BulkResult(schedule_ids=[], conflicts=conflicts)
        if result.blocked:
            logger.info("Bulk registration blocked for employee %s (%d items)", user_id, len(items))
            return result

        ids = [
            self._schedules.create(
                NewSchedule(
                    store_id=s.store_id,
                    employee_id=s.employee_id,
                    shift_id=s.shift_id,
                    work_date=s.work_date,
                    status=ScheduleStatus.PENDING,
                    requested_by=s.requested_by,
                    created_by=s.created_by,
                    custom_start=s.custom_start,
                    custom_end=s.custom_end,
                )
            )
            for s in staged
        ]
        logger.info("Bulk registration for employee %s created %d requests", user_id, len(ids))
        return BulkResult(schedule_ids=ids, conflicts=conflicts)

    def assign_shift(
        self,
        *,
        current_role: Role,
        manager_id: int,
        store_id: int,
        employee_id: int,
        shift_id: int,
        work_date: Union[str, date],
        custom_start: Optional[ClockTime] = None,
        custom_end: Optional[ClockTime] = None,
    ) -> SubmissionResult:
        """Manager assignment; created directly as approved."""
        if current_role not in MANAGER_ROLES:
            raise AuthorizationError("Only managers can assign shifts")

        employee_id = require_positive_id(employee_id, "Employee")
        shift = self._require_shift(shift_id)
        day = parse_iso_date(work_date)
        conflicts = self.evaluate_request(
            employee_id=employee_id,
            store_id=store_id,
            shift_id=shift_id,
            work_date=day,
            custom_start=custom_start,
            custom_end=custom_end,
        )
        if is_blocked(conflicts):
            return SubmissionResult(schedule_id=None, conflicts=conflicts)

        start, end = self._custom_times(shift, custom_start, custom_end)
        schedule_id = self._schedules.create(
            NewSchedule(
                store_id=int(store_id),
                employee_id=employee_id,
                shift_id=shift.shift_id,
                work_date=day,
                status=ScheduleStatus.APPROVED,
                requested_by=employee_id,
                created_by=int(manager_id),
                custom_start=start,
                custom_end=end,
                assigned_by=int(manager_id),
                approved_by=int(manager_id),
                is_assigned=True,
            )
        )
        logger.info("Manager %s assigned schedule %s to employee %s", manager_id, schedule_id, employee_id)
        return SubmissionResult(schedule_id=schedule_id, conflicts=conflicts)

    def edit_request(
        self,
        *,
        current_role: Role,
        user_id: int,
        schedule_id: int,
        shift_id: int,
        work_date: Union[str, date],
        custom_start: Optional[ClockTime] = None,
        custom_end: Optional[ClockTime] = None,
    ) -> SubmissionResult:
        sc = self._require_schedule(schedule_id)
        if current_role != Role.EMPLOYEE or sc.employee_id != int(user_id):
            raise AuthorizationError("You can only edit your own requests")
        if sc.status != ScheduleStatus.PENDING:
            raise ValidationError("Only pending requests can be edited")

        shift = self._require_shift(shift_id)
        if not shift.is_active:
            raise ValidationError(f"Shift {shift.shift_name} is no longer active")

        day = parse_iso_date(work_date)
        conflicts = self.evaluate_request(
            employee_id=sc.employee_id,
            store_id=sc.store_id,
            shift_id=shift_id,
            work_date=day,
            custom_start=custom_start,
            custom_end=custom_end,
            exclude_schedule_id=sc.schedule_id,
        )
        if is_blocked(conflicts):
            return SubmissionResult(schedule_id=None, conflicts=conflicts)

        start, end = self._custom_times(shift, custom_start, custom_end)
        ok = self._schedules.update_request(
            schedule_id=sc.schedule_id,
            shift_id=shift.shift_id,
            work_date=day,
            custom_start=start,
            custom_end=end,
        )
        if not ok:
            raise ValidationError("Updating the request failed")
        return SubmissionResult(schedule_id=sc.schedule_id, conflicts=conflicts)

    def approve(
        self, *, current_role: Role, manager_id: int, store_id: int, schedule_id: int
    ) -> SubmissionResult:
        """Approve a pending request, unless its slot filled up in the meantime."""
        if current_role not in MANAGER_ROLES:
            raise AuthorizationError("Only managers can approve requests")

        sc = self._require_managed_schedule(schedule_id, store_id)
        if sc.status != ScheduleStatus.PENDING:
            raise ValidationError("Request has already been processed")

        detector = ConflictDetector(rules=[CapacityRule()])
        context = self._context(
            store_id=sc.store_id,
            dates=[sc.work_date],
            custom_start=sc.custom_start,
            custom_end=sc.custom_end,
            exclude_schedule_id=sc.schedule_id,
        )
        conflicts = detector.evaluate(sc.employee_id, sc.shift_id, sc.work_date, sc.store_id, context)
        if is_blocked(conflicts):
            return SubmissionResult(schedule_id=None, conflicts=conflicts)

        if not self._schedules.decide(
            schedule_id=sc.schedule_id,
            status=ScheduleStatus.APPROVED,
            decided_by=int(manager_id),
        ):
            raise ValidationError("Approving the request failed")
        logger.info("Schedule %s approved by %s", sc.schedule_id, manager_id)
        return SubmissionResult(schedule_id=sc.schedule_id, conflicts=conflicts)

    def reject(self, *, current_role: Role, manager_id: int, store_id: int, schedule_id: int) -> None:
        if current_role not in MANAGER_ROLES:
            raise AuthorizationError("Only managers can reject requests")

        sc = self._require_managed_schedule(schedule_id, store_id)
        if not self._schedules.decide(
            schedule_id=sc.schedule_id,
            status=ScheduleStatus.REJECTED,
            decided_by=int(manager_id),
        ):
            raise ValidationError("Rejecting the request failed")
        logger.info("Schedule %s rejected by %s", schedule_id, manager_id)

    def cancel(self, *, current_role: Role, user_id: int, schedule_id: int) -> None:
        sc = self._require_schedule(schedule_id)
        if current_role != Role.EMPLOYEE or sc.employee_id != int(user_id):
            raise AuthorizationError("You can only cancel your own requests")
        if sc.status != ScheduleStatus.PENDING:
            raise ValidationError("Only pending requests can be cancelled")

        if not self._schedules.delete(schedule_id=sc.schedule_id):
            raise ValidationError("Cancelling the request failed")

    def slot_grid(self, *, store_id: int, work_date: Union[str, date]) -> List[SlotAvailability]:
        """Availability of every active fixed shift on a date."""
        day = parse_iso_date(work_date)
        policy = self._stores.get_policy(int(store_id))
        snapshot = self._schedules.list_for_store(int(store_id), start=day, end=day)
        return [
            available_slots(
                shift.shift_id,
                day,
                int(store_id),
                shift,
                policy,
                snapshot,
                default_capacity=self._default_capacity,
            )
            for shift in self._shifts.list_all(active_only=True)
            if not shift.is_flexible
        ]
