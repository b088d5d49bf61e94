from __future__ import annotations

from typing import List

from ...core.enums import ConflictRuleId, Severity
from ..model import Candidate, Conflict, EvaluationContext
from .base import ConflictRule


class PastDateRule(ConflictRule):
    rule_id = ConflictRuleId.PAST_DATE

    def check(self, candidate: Candidate, context: EvaluationContext) -> List[Conflict]:
        if candidate.work_date < context.today:
            return [
                Conflict(
                    rule=self.rule_id,
                    severity=Severity.ERROR,
                    message=f"Cannot register for a past date ({candidate.work_date:%Y-%m-%d})",
                )
            ]
        return []
