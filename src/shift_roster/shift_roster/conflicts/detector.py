from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence, Union

from ..common.datetime_utils import parse_iso_date
from ..common.intervals import parse_hhmm
from ..common.validators import require_positive_id
from ..core.exceptions import ValidationError
from ..schedules.model import effective_times
from .model import Candidate, Conflict, EvaluationContext
from .rules.base import ConflictRule
from .rules.capacity_rule import CapacityRule
from .rules.days_off_rule import DaysOffRule
from .rules.overlap_rule import OverlapRule
from .rules.past_date_rule import PastDateRule
from .rules.pending_duplicate_rule import PendingDuplicateRule
from .rules.rest_period_rule import RestPeriodRule
from .rules.weekly_hours_rule import WeeklyHoursRule


def default_rules() -> List[ConflictRule]:
    return [
        OverlapRule(),
        RestPeriodRule(),
        WeeklyHoursRule(),
        CapacityRule(),
        PastDateRule(),
        PendingDuplicateRule(),
        DaysOffRule(),
    ]


class ConflictDetector:
    """Runs every rule against a candidate request and unions the results.

    Stateless: the same inputs always give the same conflicts, so it is safe
    to share between threads and to call repeatedly.
    """

    def __init__(self, rules: Optional[Sequence[ConflictRule]] = None):
        self._rules = list(rules) if rules is not None else default_rules()

    def build_candidate(
        self,
        employee_id: int,
        shift_id: int,
        work_date: Union[str, date],
        store_id: int,
        context: EvaluationContext,
    ) -> Candidate:
        shift = context.shift_for(shift_id)
        day = parse_iso_date(work_date)

        has_start = context.custom_start not in (None, "")
        has_end = context.custom_end not in (None, "")
        if has_start != has_end:
            raise ValidationError("Custom start and end times must be given together")

        start, end = effective_times(shift)
        if shift.is_flexible and has_start:
            # Validate eagerly; a malformed custom time is a caller error.
            parse_hhmm(context.custom_start)
            parse_hhmm(context.custom_end)
            start, end = context.custom_start, context.custom_end

        return Candidate(
            employee_id=require_positive_id(employee_id, "Employee"),
            store_id=require_positive_id(store_id, "Store"),
            work_date=day,
            shift=shift,
            start_time=start,
            end_time=end,
        )

    def evaluate(
        self,
        employee_id: int,
        shift_id: int,
        work_date: Union[str, date],
        store_id: int,
        context: EvaluationContext,
    ) -> List[Conflict]:
        candidate = self.build_candidate(employee_id, shift_id, work_date, store_id, context)

        conflicts: List[Conflict] = []
        for rule in self._rules:
            conflicts.extend(rule.check(candidate, context))
        return conflicts
