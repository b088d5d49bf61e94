from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import SwapStatus


@dataclass(frozen=True)
class ShiftSwap:
    """An approved schedule offered by its owner to a colleague."""

    swap_id: int
    schedule_id: int
    from_employee_id: int
    to_employee_id: int
    status: SwapStatus
    created_at: Optional[datetime] = None
    approved_by: Optional[int] = None
    rejection_reason: Optional[str] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "swap_id": self.swap_id,
            "schedule_id": self.schedule_id,
            "from_employee_id": self.from_employee_id,
            "to_employee_id": self.to_employee_id,
            "status": self.status.value,
            "approved_by": self.approved_by,
            "rejection_reason": self.rejection_reason,
        }
