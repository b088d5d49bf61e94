from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import today_local
from ..common.validators import optional_text, require_positive_id
from ..conflicts.detector import ConflictDetector
from ..conflicts.model import EvaluationContext, is_blocked
from ..core.enums import Role, ScheduleStatus, SwapStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..employees.repository import EmployeeRepository
from ..schedules.model import ScheduleRequest
from ..schedules.repository import ScheduleRepository
from ..schedules.service import MANAGER_ROLES, SubmissionResult, snapshot_window
from ..shifts.repository import ShiftRepository
from ..stores.repository import StoreRepository
from .model import ShiftSwap
from .repository import SwapRepository

logger = logging.getLogger(__name__)


class SwapService:
    def __init__(
        self,
        swaps: SwapRepository,
        schedules: ScheduleRepository,
        shifts: ShiftRepository,
        stores: StoreRepository,
        employees: EmployeeRepository,
        *,
        detector: Optional[ConflictDetector] = None,
        default_capacity: Optional[int] = None,
        today: Callable[[], date] = today_local,
    ):
        self._swaps = swaps
        self._schedules = schedules
        self._shifts = shifts
        self._stores = stores
        self._employees = employees
        self._detector = detector or ConflictDetector()
        self._default_capacity = default_capacity
        self._today = today

    def _require_swap(self, swap_id: int) -> ShiftSwap:
        swap = self._swaps.get_by_id(require_positive_id(swap_id, "Swap"))
        if not swap:
            raise ValidationError(f"Swap {swap_id} does not exist")
        return swap

    def _require_managed_swap(self, swap_id: int, store_id: int) -> tuple[ShiftSwap, ScheduleRequest]:
        swap = self._require_swap(swap_id)
        sc = self._schedules.get_by_id(swap.schedule_id)
        if not sc:
            raise ValidationError("Associated schedule not found")
        if sc.store_id != require_positive_id(store_id, "Store"):
            raise AuthorizationError("Swap belongs to another store")
        return swap, sc

    def request_swap(self, *, current_role: Role, user_id: int, schedule_id: int, to_employee_id: int) -> int:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can offer their shifts")

        sc = self._schedules.get_by_id(require_positive_id(schedule_id, "Schedule"))
        if not sc:
            raise ValidationError(f"Schedule {schedule_id} does not exist")
        if sc.employee_id != int(user_id):
            raise AuthorizationError("You can only offer your own shifts")
        if sc.status != ScheduleStatus.APPROVED:
            raise ValidationError("Only approved shifts can be swapped")
        if sc.work_date < self._today():
            raise ValidationError("Past shifts cannot be swapped")

        to_employee_id = require_positive_id(to_employee_id, "Employee")
        if to_employee_id == sc.employee_id:
            raise ValidationError("Cannot swap a shift with yourself")
        colleague = self._employees.get_by_id(to_employee_id)
        if not colleague or not colleague.is_active or colleague.store_id != sc.store_id:
            raise ValidationError("The colleague does not work at this store")

        swap_id = self._swaps.create(
            schedule_id=sc.schedule_id,
            from_employee_id=sc.employee_id,
            to_employee_id=to_employee_id,
        )
        logger.info("Swap %s requested: schedule %s from %s to %s", swap_id, sc.schedule_id, user_id, to_employee_id)
        return swap_id

    def approve_swap(
        self, *, current_role: Role, manager_id: int, store_id: int, swap_id: int
    ) -> SubmissionResult:
        """Transfer the schedule to the receiving employee unless that would conflict."""
        if current_role not in MANAGER_ROLES:
            raise AuthorizationError("Only managers can approve swaps")

        swap, sc = self._require_managed_swap(swap_id, store_id)
        if swap.status != SwapStatus.PENDING:
            raise ValidationError("Swap request is no longer pending")

        start, end = snapshot_window([sc.work_date])
        context = EvaluationContext(
            schedules=self._schedules.list_for_store(sc.store_id, start=start, end=end),
            shifts=self._shifts.list_all(),
            today=self._today(),
            store_policy=self._stores.get_policy(sc.store_id),
            custom_start=sc.custom_start,
            custom_end=sc.custom_end,
            exclude_schedule_id=sc.schedule_id,
            default_capacity=self._default_capacity,
        )
        conflicts = self._detector.evaluate(swap.to_employee_id, sc.shift_id, sc.work_date, sc.store_id, context)
        if is_blocked(conflicts):
            logger.info("Swap %s blocked for employee %s", swap.swap_id, swap.to_employee_id)
            return SubmissionResult(schedule_id=None, conflicts=conflicts)

        if not self._swaps.apply_swap(swap_id=swap.swap_id, manager_id=int(manager_id)):
            raise ValidationError("Approving the swap failed")
        logger.info("Swap %s approved by %s", swap.swap_id, manager_id)
        return SubmissionResult(schedule_id=sc.schedule_id, conflicts=conflicts)

    def reject_swap(
        self, *, current_role: Role, manager_id: int, store_id: int, swap_id: int, reason: str = ""
    ) -> None:
        if current_role not in MANAGER_ROLES:
            raise AuthorizationError("Only managers can reject swaps")

        swap, _ = self._require_managed_swap(swap_id, store_id)
        if not self._swaps.reject(
            swap_id=swap.swap_id,
            manager_id=int(manager_id),
            reason=optional_text(reason),
        ):
            raise ValidationError("Rejecting the swap failed")
        logger.info("Swap %s rejected by %s", swap_id, manager_id)

    def list_pending(self, *, current_role: Role, store_id: int) -> Sequence[ShiftSwap]:
        if current_role not in MANAGER_ROLES:
            raise AuthorizationError("Only managers can review swaps")
        return self._swaps.list_for_store(int(store_id), status=SwapStatus.PENDING)
