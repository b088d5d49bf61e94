from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ShiftDefinition


class ShiftRepository(Protocol):
    def list_all(self, *, active_only: bool = False) -> Sequence[ShiftDefinition]:
        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[ShiftDefinition]:
        raise NotImplementedError
