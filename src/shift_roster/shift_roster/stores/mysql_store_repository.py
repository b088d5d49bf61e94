from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, opt_float, opt_int
from .model import StorePolicy
from .repository import StoreRepository


class MySQLStoreRepository(StoreRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_policy(self, store_id: int) -> Optional[StorePolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT store_id, store_name, max_employees_per_shift, max_hours_per_week,
                       min_days_off, min_rest_hours, rest_violation_blocks
                FROM stores
                WHERE store_id=%s AND is_active=1
                """,
                (int(store_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return StorePolicy(
                store_id=int(r["store_id"]),
                store_name=r["store_name"],
                max_employees_per_shift=opt_int(r.get("max_employees_per_shift")),
                max_hours_per_week=opt_float(r.get("max_hours_per_week")),
                min_days_off_per_month=opt_int(r.get("min_days_off")),
                min_rest_hours=opt_float(r.get("min_rest_hours")),
                rest_violation_blocks=bool(r.get("rest_violation_blocks") or 0),
            )
