from __future__ import annotations

from typing import List

from ...common.intervals import format_hhmm, ranges_overlap
from ...core.enums import ConflictRuleId, ScheduleStatus, Severity
from ..model import Candidate, Conflict, EvaluationContext, absolute_range
from .base import ConflictRule


class OverlapRule(ConflictRule):
    """Same employee already works a time range overlapping the candidate.

    Neighbouring days are included so an overnight shift collides with an
    early shift on the following morning.
    """

    rule_id = ConflictRuleId.OVERLAP

    def check(self, candidate: Candidate, context: EvaluationContext) -> List[Conflict]:
        start, end = candidate.minute_range
        out: List[Conflict] = []

        for s in context.others():
            if s.employee_id != candidate.employee_id or s.status == ScheduleStatus.REJECTED:
                continue
            if abs((s.work_date - candidate.work_date).days) > 1:
                continue

            shift = context.shift_for(s.shift_id)
            other_start, other_end = absolute_range(s, shift, candidate.work_date)
            if ranges_overlap(start, end, other_start, other_end):
                out.append(
                    Conflict(
                        rule=self.rule_id,
                        severity=Severity.ERROR,
                        message=(
                            f"Overlaps another shift on {s.work_date:%Y-%m-%d} "
                            f"({shift.shift_name}: {format_hhmm(other_start)}-{format_hhmm(other_end)})"
                        ),
                        schedule_id=s.schedule_id,
                    )
                )
        return out
