from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import ShiftCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import clock_time, db_cursor, fetchall, fetchone
from .model import ShiftDefinition
from .repository import ShiftRepository

_COLUMNS = "shift_id, shift_name, start_time, end_time, duration_hours, category, is_active, max_employees"


def _to_shift(r: Dict[str, Any]) -> ShiftDefinition:
    return ShiftDefinition(
        shift_id=int(r["shift_id"]),
        shift_name=r["shift_name"],
        start_time=clock_time(r["start_time"]),
        end_time=clock_time(r["end_time"]),
        duration_hours=float(r.get("duration_hours") or 0),
        category=ShiftCategory(r.get("category") or ShiftCategory.FULLTIME.value),
        is_active=bool(r.get("is_active", 1)),
        max_employees=int(r["max_employees"]) if r.get("max_employees") is not None else None,
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, active_only: bool = False) -> Sequence[ShiftDefinition]:
        where = "WHERE is_active=1" if active_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts {where} ORDER BY start_time, shift_id")
            return [_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[ShiftDefinition]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_shift(r) if r else None
