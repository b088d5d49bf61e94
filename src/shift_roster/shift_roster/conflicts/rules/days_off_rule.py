from __future__ import annotations

from typing import List

from ...common.datetime_utils import month_bounds
from ...core.enums import ConflictRuleId, Severity
from ...schedules.model import ACTIVE_STATUSES
from ..model import Candidate, Conflict, EvaluationContext
from .base import ConflictRule


class DaysOffRule(ConflictRule):
    """Working the candidate date leaves fewer free days in the month than the store guarantees.

    Only ever warns; the manager decides whether to give the extra day.
    """

    rule_id = ConflictRuleId.DAYS_OFF

    def check(self, candidate: Candidate, context: EvaluationContext) -> List[Conflict]:
        policy = context.store_policy
        if policy is None or policy.min_days_off_per_month is None:
            return []

        first, last = month_bounds(candidate.work_date)
        worked = {
            s.work_date
            for s in context.others()
            if s.employee_id == candidate.employee_id
            and s.status in ACTIVE_STATUSES
            and first <= s.work_date <= last
        }
        worked.add(candidate.work_date)

        days_off = (last - first).days + 1 - len(worked)
        minimum = int(policy.min_days_off_per_month)
        if days_off >= minimum:
            return []
        return [
            Conflict(
                rule=self.rule_id,
                severity=Severity.WARNING,
                message=f"Only {days_off} days off left this month (minimum {minimum})",
            )
        ]
