from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    """Yield (connection, cursor) inside a single transaction.

    Repository writes either all land or none do: the transaction is
    committed when the block exits cleanly and rolled back otherwise.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        except Exception:
            logger.debug("Rolling back transaction", exc_info=True)
            conn.rollback()
            raise
        finally:
            cur.close()
    finally:
        conn.close()


def fetchone(cur) -> Optional[Row]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Row]:
    return list(cur.fetchall() or [])


def opt_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def opt_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def in_placeholders(values: Sequence[Any]) -> str:
    """`%s, %s, ...` for an ``IN (...)`` clause; callers skip the query when empty."""
    if not values:
        raise ValueError("IN clause needs at least one value")
    return ", ".join(["%s"] * len(values))


def clock_time(value: Any) -> Optional[time]:
    """Convert a TIME column to a wall-clock ``time``.

    The C extension of mysql-connector hands TIME back as ``timedelta``,
    the pure-Python one can give ``time`` or ``'HH:MM:SS'`` strings.
    Shift boundaries are minute-precise, so seconds are dropped, and
    values of 24h or more wrap onto the next day's clock.
    """
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        minutes = int(value.total_seconds()) // 60 % (24 * 60)
        return time(minutes // 60, minutes % 60)
    if isinstance(value, str):
        hh, sep, rest = value.strip().partition(":")
        if not sep or not hh.isdigit() or not rest[:2].isdigit():
            raise ValueError(f"Invalid TIME value: {value!r}")
        return time(int(hh) % 24, int(rest[:2]))
    raise TypeError(f"Unsupported TIME value: {type(value).__name__}")
