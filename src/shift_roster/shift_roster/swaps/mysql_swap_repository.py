from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import SwapStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, opt_int
from .model import ShiftSwap
from .repository import SwapRepository

_COLUMNS = """
    sw.swap_id, sw.schedule_id, sw.from_employee_id, sw.to_employee_id, sw.status,
    sw.created_at, sw.approved_by, sw.rejection_reason, sw.updated_at
"""


def _to_swap(r: Dict[str, Any]) -> ShiftSwap:
    return ShiftSwap(
        swap_id=int(r["swap_id"]),
        schedule_id=int(r["schedule_id"]),
        from_employee_id=int(r["from_employee_id"]),
        to_employee_id=int(r["to_employee_id"]),
        status=SwapStatus(r["status"]),
        created_at=r.get("created_at"),
        approved_by=opt_int(r.get("approved_by")),
        rejection_reason=r.get("rejection_reason"),
        updated_at=r.get("updated_at"),
    )


class MySQLSwapRepository(SwapRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, swap_id: int) -> Optional[ShiftSwap]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shift_swaps sw WHERE sw.swap_id=%s", (int(swap_id),))
            r = fetchone(cur)
            return _to_swap(r) if r else None

    def create(self, *, schedule_id: int, from_employee_id: int, to_employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_swaps(schedule_id, from_employee_id, to_employee_id, status)
                VALUES(%s,%s,%s,%s)
                """,
                (int(schedule_id), int(from_employee_id), int(to_employee_id), SwapStatus.PENDING.value),
            )
            return int(cur.lastrowid or 0)

    def list_for_store(self, store_id: int, *, status: Optional[SwapStatus] = None) -> Sequence[ShiftSwap]:
        clauses = ["sc.store_id=%s"]
        params: list[object] = [int(store_id)]
        if status is not None:
            clauses.append("sw.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shift_swaps sw
                JOIN schedules sc ON sc.schedule_id = sw.schedule_id
                WHERE {" AND ".join(clauses)}
                ORDER BY sw.created_at DESC, sw.swap_id DESC
                """,
                tuple(params),
            )
            return [_to_swap(r) for r in fetchall(cur)]

    def apply_swap(self, *, swap_id: int, manager_id: int) -> bool:
        with db_cursor(self._conn_factory) as (conn, cur):
            cur.execute(
                """
                SELECT swap_id, schedule_id, from_employee_id, to_employee_id
                FROM shift_swaps
                WHERE swap_id=%s AND status=%s
                FOR UPDATE
                """,
                (int(swap_id), SwapStatus.PENDING.value),
            )
            swap = fetchone(cur)
            if not swap:
                return False

            cur.execute(
                """
                UPDATE shift_swaps
                SET status=%s, approved_by=%s, updated_at=NOW()
                WHERE swap_id=%s
                """,
                (SwapStatus.APPROVED.value, int(manager_id), int(swap_id)),
            )
            cur.execute(
                """
                UPDATE schedules
                SET employee_id=%s, assigned_by=%s, swapped_from=%s, swap_id=%s,
                    swapped_at=NOW(), updated_at=NOW()
                WHERE schedule_id=%s
                """,
                (
                    int(swap["to_employee_id"]),
                    int(manager_id),
                    int(swap["from_employee_id"]),
                    int(swap_id),
                    int(swap["schedule_id"]),
                ),
            )
            if cur.rowcount == 0:
                # Schedule vanished; undo the swap status change.
                conn.rollback()
                return False
            return True

    def reject(self, *, swap_id: int, manager_id: int, reason: Optional[str] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shift_swaps
                SET status=%s, approved_by=%s, rejection_reason=%s, updated_at=NOW()
                WHERE swap_id=%s AND status=%s
                """,
                (SwapStatus.REJECTED.value, int(manager_id), reason, int(swap_id), SwapStatus.PENDING.value),
            )
            return cur.rowcount > 0
