from __future__ import annotations

from typing import Optional, Protocol

from .model import StorePolicy


class StoreRepository(Protocol):
    def get_policy(self, store_id: int) -> Optional[StorePolicy]:
        raise NotImplementedError
