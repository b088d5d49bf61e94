from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.enums import ShiftCategory


@dataclass(frozen=True)
class ShiftDefinition:
    """Domain entity: a shift of the store catalog.

    Immutable once referenced by a schedule. Part-time shifts accept custom
    start/end times per request and do not compete for fixed slots.
    """

    shift_id: int
    shift_name: str
    start_time: time
    end_time: time
    duration_hours: float = 0.0
    category: ShiftCategory = ShiftCategory.FULLTIME
    is_active: bool = True
    max_employees: Optional[int] = None

    @property
    def is_flexible(self) -> bool:
        return self.category == ShiftCategory.PARTTIME
