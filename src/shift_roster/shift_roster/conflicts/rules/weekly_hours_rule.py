from __future__ import annotations

from typing import List

from ...common.datetime_utils import iso_week_bounds
from ...common.intervals import duration_hours
from ...core.constants import WEEKLY_HOURS_WARNING_RATIO
from ...core.enums import ConflictRuleId, Severity
from ...schedules.model import ACTIVE_STATUSES, schedule_times
from ..model import Candidate, Conflict, EvaluationContext
from .base import ConflictRule


class WeeklyHoursRule(ConflictRule):
    """Pending + approved hours in the ISO week, plus the candidate, exceed the cap."""

    rule_id = ConflictRuleId.WEEKLY_HOURS

    def check(self, candidate: Candidate, context: EvaluationContext) -> List[Conflict]:
        policy = context.store_policy
        if policy is None or policy.max_hours_per_week is None:
            return []

        cap = float(policy.max_hours_per_week)
        week_start, week_end = iso_week_bounds(candidate.work_date)

        booked = 0.0
        for s in context.others():
            if s.employee_id != candidate.employee_id or s.status not in ACTIVE_STATUSES:
                continue
            if not (week_start <= s.work_date <= week_end):
                continue
            start, end = schedule_times(s, context.shift_for(s.shift_id))
            booked += duration_hours(start, end)

        total = round(booked + candidate.hours, 1)
        if total > cap:
            return [
                Conflict(
                    rule=self.rule_id,
                    severity=Severity.ERROR,
                    message=f"Exceeds weekly hours ({total:g}/{cap:g}h per week)",
                )
            ]
        if total > cap * WEEKLY_HOURS_WARNING_RATIO:
            return [
                Conflict(
                    rule=self.rule_id,
                    severity=Severity.WARNING,
                    message=f"Close to weekly hours limit ({total:g}/{cap:g}h per week)",
                )
            ]
        return []
