from __future__ import annotations

from typing import List

from ...core.constants import CAPACITY_WARNING_RATIO
from ...core.enums import ConflictRuleId, Severity
from ..capacity import available_slots
from ..model import Candidate, Conflict, EvaluationContext
from .base import ConflictRule


class CapacityRule(ConflictRule):
    """Fixed shift has no free slot left. Flexible shifts are capacity-exempt."""

    rule_id = ConflictRuleId.CAPACITY

    def check(self, candidate: Candidate, context: EvaluationContext) -> List[Conflict]:
        if candidate.shift.is_flexible:
            return []

        slots = available_slots(
            candidate.shift.shift_id,
            candidate.work_date,
            candidate.store_id,
            candidate.shift,
            context.store_policy,
            context.schedules,
            exclude_schedule_id=context.exclude_schedule_id,
            default_capacity=context.default_capacity,
        )
        if slots.is_unlimited:
            return []

        if slots.is_full:
            return [
                Conflict(
                    rule=self.rule_id,
                    severity=Severity.ERROR,
                    message=f"Shift is full ({slots.occupied}/{slots.total})",
                )
            ]
        if slots.available <= slots.total * CAPACITY_WARNING_RATIO:
            return [
                Conflict(
                    rule=self.rule_id,
                    severity=Severity.WARNING,
                    message=f"Shift is almost full ({slots.occupied}/{slots.total})",
                )
            ]
        return []
