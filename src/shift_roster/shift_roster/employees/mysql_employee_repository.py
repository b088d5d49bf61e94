from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, opt_int
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        full_name=r["full_name"],
        store_id=opt_int(r.get("store_id")),
        employee_type=r.get("employee_type") or "fulltime",
        hourly_rate=float(r.get("hourly_rate") or 0),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, store_id, employee_type, hourly_rate, is_active
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_for_store(self, store_id: int, *, active_only: bool = True) -> Sequence[Employee]:
        clauses = ["store_id=%s"]
        if active_only:
            clauses.append("is_active=1")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, full_name, store_id, employee_type, hourly_rate, is_active
                FROM employees
                WHERE {" AND ".join(clauses)}
                ORDER BY full_name
                """,
                (int(store_id),),
            )
            return [_to_employee(r) for r in fetchall(cur)]
