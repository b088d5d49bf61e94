"""Clock-time interval arithmetic shared by conflict detection and payroll.

Times are `HH:MM` 24-hour strings (or `datetime.time` values coming from the
database). A range whose end is numerically before its start crosses
midnight; multi-day spans are not representable.
"""

from __future__ import annotations

import math
import re
from datetime import time
from typing import Tuple, Union

from ..core.constants import MINUTES_PER_DAY, NIGHT_WINDOWS
from ..core.exceptions import ValidationError

ClockTime = Union[str, time]

_HHMM_RE = re.compile(r"^([0-9]{2}):([0-9]{2})$")


def parse_hhmm(value: ClockTime) -> int:
    """Parse a clock time into minutes since midnight."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if not isinstance(value, str):
        raise ValidationError(f"Invalid time value: {value!r}")

    m = _HHMM_RE.match(value.strip())
    if not m:
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise ValidationError(f"Time out of range: {value!r}")
    return hours * 60 + minutes


def format_hhmm(minutes: int) -> str:
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def to_minute_range(start: ClockTime, end: ClockTime) -> Tuple[int, int]:
    """Return (start, end) minutes, extending end past midnight when needed."""
    start_min = parse_hhmm(start)
    end_min = parse_hhmm(end)
    if end_min < start_min:
        end_min += MINUTES_PER_DAY
    return start_min, end_min


def overlap_minutes(a: int, b: int, c: int, d: int) -> int:
    """Length of the intersection of [a, b] and [c, d]."""
    return max(0, min(b, d) - max(a, c))


def ranges_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Strict overlap: ranges that only touch at an endpoint do not overlap."""
    return a_start < b_end and b_start < a_end


def round_hours(minutes: float) -> float:
    """Minutes to hours, rounded half-up to one decimal."""
    return math.floor(minutes / 6 + 0.5) / 10


def duration_minutes(start: ClockTime, end: ClockTime) -> int:
    start_min, end_min = to_minute_range(start, end)
    return end_min - start_min


def duration_hours(start: ClockTime, end: ClockTime) -> float:
    return round_hours(duration_minutes(start, end))


def night_premium_minutes(start: ClockTime, end: ClockTime) -> int:
    start_min, end_min = to_minute_range(start, end)
    return sum(overlap_minutes(start_min, end_min, lo, hi) for lo, hi in NIGHT_WINDOWS)


def night_premium_hours(start: ClockTime, end: ClockTime) -> float:
    """Hours of [start, end] falling inside the 22:30-06:30 night window."""
    return round_hours(night_premium_minutes(start, end))
