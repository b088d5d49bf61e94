from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller role used for authorization checks."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class ScheduleStatus(str, Enum):
    """Lifecycle of a schedule request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


class ShiftCategory(str, Enum):
    """Full-time shifts have fixed times; part-time shifts accept custom times."""

    FULLTIME = "fulltime"
    PARTTIME = "parttime"


class SwapStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Severity(str, Enum):
    """Only ERROR blocks a submission."""

    ERROR = "error"
    WARNING = "warning"


class ConflictRuleId(str, Enum):
    OVERLAP = "overlap"
    REST_PERIOD = "rest_period"
    WEEKLY_HOURS = "weekly_hours"
    CAPACITY = "capacity"
    PAST_DATE = "past_date"
    PENDING_DUPLICATE = "pending_duplicate"
    DAYS_OFF = "days_off"
