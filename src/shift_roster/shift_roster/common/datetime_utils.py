from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Tuple, Union

from ..core.exceptions import ValidationError


def parse_iso_date(value: Union[str, date]) -> date:
    """Parse YYYY-MM-DD string into date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_month(value: Union[str, date]) -> date:
    """Parse YYYY-MM (or any date) into the first day of that month."""
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.replace(day=1)
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid month (YYYY-MM): {value!r}")


def month_bounds(month: date) -> Tuple[date, date]:
    """First and last day of the calendar month containing `month`."""
    last_day = calendar.monthrange(month.year, month.month)[1]
    return month.replace(day=1), month.replace(day=last_day)


def previous_month(month: date) -> date:
    return month.replace(day=1) - timedelta(days=1)


def iso_week_bounds(day: date) -> Tuple[date, date]:
    """Monday and Sunday of the ISO week containing `day`."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()
