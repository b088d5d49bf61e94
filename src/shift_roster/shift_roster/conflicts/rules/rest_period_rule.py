from __future__ import annotations

from typing import List

from ...core.enums import ConflictRuleId, ScheduleStatus, Severity
from ..model import Candidate, Conflict, EvaluationContext, absolute_range
from .base import ConflictRule


class RestPeriodRule(ConflictRule):
    """Gap between the candidate and a neighbouring shift is below the store minimum."""

    rule_id = ConflictRuleId.REST_PERIOD

    def check(self, candidate: Candidate, context: EvaluationContext) -> List[Conflict]:
        policy = context.store_policy
        if policy is None or policy.min_rest_hours is None:
            return []

        min_rest = float(policy.min_rest_hours) * 60
        severity = Severity.ERROR if policy.rest_violation_blocks else Severity.WARNING
        start, end = candidate.minute_range
        out: List[Conflict] = []

        for s in context.others():
            if s.employee_id != candidate.employee_id or s.status == ScheduleStatus.REJECTED:
                continue
            if abs((s.work_date - candidate.work_date).days) > 2:
                continue

            other_start, other_end = absolute_range(s, context.shift_for(s.shift_id), candidate.work_date)
            if other_start >= end:
                gap = other_start - end
            elif other_end <= start:
                gap = start - other_end
            else:
                # Overlapping ranges are reported by the overlap rule.
                continue

            if gap < min_rest:
                out.append(
                    Conflict(
                        rule=self.rule_id,
                        severity=severity,
                        message=(
                            f"Only {gap / 60:.1f}h rest next to the shift on {s.work_date:%Y-%m-%d} "
                            f"(minimum {policy.min_rest_hours:g}h)"
                        ),
                        schedule_id=s.schedule_id,
                    )
                )
        return out
