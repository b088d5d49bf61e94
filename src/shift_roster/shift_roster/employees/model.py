from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Read model of a store employee, as needed for payroll."""

    employee_id: int
    full_name: str
    store_id: Optional[int] = None
    employee_type: str = "fulltime"
    hourly_rate: float = 0.0
    is_active: bool = True
