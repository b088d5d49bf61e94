from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StorePolicy:
    """Per-store scheduling caps. Every cap is optional; unset means no limit."""

    store_id: int
    store_name: str = ""
    max_employees_per_shift: Optional[int] = None
    max_hours_per_week: Optional[float] = None
    min_days_off_per_month: Optional[int] = None
    min_rest_hours: Optional[float] = None
    # Rest-period violations block submission instead of only warning.
    rest_violation_blocks: bool = False
