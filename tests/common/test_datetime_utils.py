from datetime import date, datetime

import pytest

from src.shift_roster.shift_roster.common.datetime_utils import (
    iso_week_bounds,
    month_bounds,
    parse_iso_date,
    parse_month,
    previous_month,
)
from src.shift_roster.shift_roster.core.exceptions import ValidationError


def test_parse_iso_date():
    assert parse_iso_date("2026-03-10") == date(2026, 3, 10)
    assert parse_iso_date(datetime(2026, 3, 10, 8, 0)) == date(2026, 3, 10)
    with pytest.raises(ValidationError):
        parse_iso_date("10/03/2026")


def test_parse_month_and_bounds():
    assert parse_month("2026-02") == date(2026, 2, 1)
    assert parse_month(date(2026, 2, 17)) == date(2026, 2, 1)
    assert month_bounds(date(2024, 2, 1)) == (date(2024, 2, 1), date(2024, 2, 29))
    with pytest.raises(ValidationError):
        parse_month("2026-13")


def test_previous_month_crosses_year():
    assert parse_month(previous_month(date(2026, 1, 1))) == date(2025, 12, 1)


def test_iso_week_bounds_monday_to_sunday():
    # 2026-03-11 is a Wednesday.
    assert iso_week_bounds(date(2026, 3, 11)) == (date(2026, 3, 9), date(2026, 3, 15))
