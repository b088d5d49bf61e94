from __future__ import annotations

from typing import List

from ...core.enums import ConflictRuleId, ScheduleStatus, Severity
from ..model import Candidate, Conflict, EvaluationContext
from .base import ConflictRule


class PendingDuplicateRule(ConflictRule):
    """One pending request per employee per day; edit it instead of adding another.

    Independent of time overlap: non-overlapping part-time requests on the
    same day are refused too.
    """

    rule_id = ConflictRuleId.PENDING_DUPLICATE

    def check(self, candidate: Candidate, context: EvaluationContext) -> List[Conflict]:
        for s in context.others():
            if (
                s.employee_id == candidate.employee_id
                and s.work_date == candidate.work_date
                and s.status == ScheduleStatus.PENDING
            ):
                return [
                    Conflict(
                        rule=self.rule_id,
                        severity=Severity.ERROR,
                        message=(
                            f"A pending request already exists on {candidate.work_date:%Y-%m-%d}; "
                            "edit it instead of registering again"
                        ),
                        schedule_id=s.schedule_id,
                    )
                ]
        return []
