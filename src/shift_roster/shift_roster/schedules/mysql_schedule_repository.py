from __future__ import annotations

from datetime import date, time
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ScheduleStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import clock_time, db_cursor, fetchall, fetchone, in_placeholders, opt_int
from .model import NewSchedule, ScheduleRequest
from .repository import ScheduleRepository

_COLUMNS = """
    schedule_id, store_id, employee_id, shift_id, work_date, status,
    custom_start, custom_end, requested_by, created_by, assigned_by, approved_by,
    is_assigned, created_at, updated_at, swapped_from, swap_id, swapped_at
"""


def _to_schedule(r: Dict[str, Any]) -> ScheduleRequest:
    return ScheduleRequest(
        schedule_id=int(r["schedule_id"]),
        store_id=int(r["store_id"]),
        employee_id=int(r["employee_id"]),
        shift_id=int(r["shift_id"]),
        work_date=r["work_date"],
        status=ScheduleStatus(r["status"]),
        requested_by=int(r["requested_by"]),
        created_by=int(r["created_by"]),
        custom_start=clock_time(r.get("custom_start")),
        custom_end=clock_time(r.get("custom_end")),
        assigned_by=opt_int(r.get("assigned_by")),
        approved_by=opt_int(r.get("approved_by")),
        is_assigned=bool(r.get("is_assigned") or 0),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        swapped_from=opt_int(r.get("swapped_from")),
        swap_id=opt_int(r.get("swap_id")),
        swapped_at=r.get("swapped_at"),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, schedule_id: int) -> Optional[ScheduleRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM schedules WHERE schedule_id=%s", (int(schedule_id),))
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def list_for_store(
        self,
        store_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[ScheduleStatus] = None,
    ) -> Sequence[ScheduleRequest]:
        clauses = ["store_id=%s"]
        params: list[object] = [int(store_id)]
        if start is not None:
            clauses.append("work_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("work_date <= %s")
            params.append(end)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM schedules WHERE {where} ORDER BY work_date ASC, schedule_id ASC",
                tuple(params),
            )
            return [_to_schedule(r) for r in fetchall(cur)]

    def create(self, new: NewSchedule) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedules(
                    store_id, employee_id, shift_id, work_date, status, custom_start, custom_end,
                    requested_by, created_by, assigned_by, approved_by, is_assigned
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(new.store_id),
                    int(new.employee_id),
                    int(new.shift_id),
                    new.work_date,
                    new.status.value,
                    new.custom_start,
                    new.custom_end,
                    int(new.requested_by),
                    int(new.created_by),
                    new.assigned_by,
                    new.approved_by,
                    int(new.is_assigned),
                ),
            )
            return int(cur.lastrowid or 0)

    def update_request(
        self,
        *,
        schedule_id: int,
        shift_id: int,
        work_date: date,
        custom_start: Optional[time],
        custom_end: Optional[time],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE schedules
                SET shift_id=%s, work_date=%s, custom_start=%s, custom_end=%s, updated_at=NOW()
                WHERE schedule_id=%s AND status=%s
                """,
                (int(shift_id), work_date, custom_start, custom_end, int(schedule_id), ScheduleStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def decide(self, *, schedule_id: int, status: ScheduleStatus, decided_by: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE schedules
                SET status=%s, approved_by=%s, updated_at=NOW()
                WHERE schedule_id=%s AND status=%s
                """,
                (status.value, int(decided_by), int(schedule_id), ScheduleStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def delete(self, *, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedules WHERE schedule_id=%s", (int(schedule_id),))
            return cur.rowcount > 0

    def list_approved_before(
        self,
        *,
        before: date,
        limit: int,
        store_id: Optional[int] = None,
    ) -> Sequence[ScheduleRequest]:
        clauses = ["status=%s", "work_date < %s"]
        params: list[object] = [ScheduleStatus.APPROVED.value, before]
        if store_id is not None:
            clauses.append("store_id=%s")
            params.append(int(store_id))
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM schedules
                WHERE {" AND ".join(clauses)}
                ORDER BY work_date ASC, schedule_id ASC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_schedule(r) for r in fetchall(cur)]

    def mark_completed(self, *, schedule_ids: Sequence[int]) -> int:
        ids = [int(i) for i in schedule_ids]
        if not ids:
            return 0

        placeholders = in_placeholders(ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE schedules
                SET status=%s, updated_at=NOW()
                WHERE status=%s AND schedule_id IN ({placeholders})
                """,
                (ScheduleStatus.COMPLETED.value, ScheduleStatus.APPROVED.value, *ids),
            )
            return cur.rowcount
