from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import SwapStatus
from .model import ShiftSwap


class SwapRepository(Protocol):
    def get_by_id(self, swap_id: int) -> Optional[ShiftSwap]:
        raise NotImplementedError

    def create(self, *, schedule_id: int, from_employee_id: int, to_employee_id: int) -> int:
        raise NotImplementedError

    def list_for_store(self, store_id: int, *, status: Optional[SwapStatus] = None) -> Sequence[ShiftSwap]:
        raise NotImplementedError

    def apply_swap(self, *, swap_id: int, manager_id: int) -> bool:
        """Approve the swap and transfer its schedule in one transaction.

        Returns False (and changes nothing) when the swap is no longer pending.
        """

        raise NotImplementedError

    def reject(self, *, swap_id: int, manager_id: int, reason: Optional[str] = None) -> bool:
        raise NotImplementedError
