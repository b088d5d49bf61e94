from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ...core.enums import ConflictRuleId
from ..model import Candidate, Conflict, EvaluationContext


class ConflictRule(ABC):
    """Strategy Pattern: one independent scheduling rule.

    Rules never raise for business violations; they return conflicts. They
    may raise ValidationError for malformed snapshot data.
    """

    rule_id: ConflictRuleId

    @abstractmethod
    def check(self, candidate: Candidate, context: EvaluationContext) -> List[Conflict]:
        raise NotImplementedError
