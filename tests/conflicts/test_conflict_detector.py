from __future__ import annotations

from datetime import date

import pytest

from src.shift_roster.shift_roster.conflicts.detector import ConflictDetector, default_rules
from src.shift_roster.shift_roster.conflicts.model import EvaluationContext, is_blocked
from src.shift_roster.shift_roster.core.enums import ConflictRuleId, ScheduleStatus, Severity
from src.shift_roster.shift_roster.core.exceptions import ValidationError

from tests.fakes import AFTERNOON, MORNING, PART_TIME, POLICY, SHIFTS, make_schedule

TODAY = date(2026, 3, 1)
TUESDAY = date(2026, 3, 10)


def _context(schedules=(), **kwargs):
    kwargs.setdefault("store_policy", POLICY)
    return EvaluationContext(schedules=list(schedules), shifts=SHIFTS, today=TODAY, **kwargs)


def _rules(conflicts):
    return {c.rule for c in conflicts}


def test_default_rules_cover_every_rule_id():
    assert {r.rule_id for r in default_rules()} == set(ConflictRuleId)


def test_clean_request_has_no_conflicts():
    assert ConflictDetector().evaluate(7, MORNING.shift_id, TUESDAY, 1, _context()) == []


def test_overlapping_shift_is_reported_as_overlap_only():
    ctx = _context([make_schedule(1, 7, MORNING.shift_id, TUESDAY)])

    conflicts = ConflictDetector().evaluate(7, PART_TIME.shift_id, TUESDAY, 1, ctx)

    assert _rules(conflicts) == {ConflictRuleId.OVERLAP}
    assert is_blocked(conflicts)


def test_second_pending_request_on_same_day_is_refused_without_overlap():
    ctx = _context(
        [make_schedule(1, 7, PART_TIME.shift_id, TUESDAY, ScheduleStatus.PENDING)],
    )

    conflicts = ConflictDetector().evaluate(7, AFTERNOON.shift_id, TUESDAY, 1, ctx)

    assert ConflictRuleId.PENDING_DUPLICATE in _rules(conflicts)
    assert ConflictRuleId.OVERLAP not in _rules(conflicts)
    assert is_blocked(conflicts)


def test_editing_a_pending_request_does_not_conflict_with_itself():
    ctx = _context(
        [make_schedule(1, 7, MORNING.shift_id, TUESDAY, ScheduleStatus.PENDING)],
        exclude_schedule_id=1,
    )
    assert ConflictDetector().evaluate(7, MORNING.shift_id, TUESDAY, 1, ctx) == []


def test_past_date_is_blocked():
    conflicts = ConflictDetector().evaluate(7, MORNING.shift_id, date(2026, 2, 28), 1, _context())
    assert [(c.rule, c.severity) for c in conflicts] == [(ConflictRuleId.PAST_DATE, Severity.ERROR)]


def test_missing_store_policy_skips_rest_and_weekly_rules():
    booked = [make_schedule(i, 7, MORNING.shift_id, date(2026, 3, 9 + i)) for i in range(0, 6)]
    ctx = _context(booked, store_policy=None)

    # Sunday after six mornings: 56h, but no cap is configured.
    assert ConflictDetector().evaluate(7, AFTERNOON.shift_id, date(2026, 3, 15), 1, ctx) == []


def test_evaluation_is_repeatable_and_does_not_mutate_the_snapshot():
    schedules = [make_schedule(1, 7, MORNING.shift_id, TUESDAY)]
    ctx = _context(schedules)
    detector = ConflictDetector()

    first = detector.evaluate(7, PART_TIME.shift_id, TUESDAY, 1, ctx)
    second = detector.evaluate(7, PART_TIME.shift_id, TUESDAY, 1, ctx)

    assert first == second
    assert ctx.schedules == schedules


def test_fixed_shift_ignores_custom_times():
    ctx = _context(
        [make_schedule(1, 7, PART_TIME.shift_id, TUESDAY)],
        custom_start="20:00",
        custom_end="21:00",
    )
    conflicts = ConflictDetector().evaluate(7, MORNING.shift_id, TUESDAY, 1, ctx)
    assert ConflictRuleId.OVERLAP in _rules(conflicts)


def test_flexible_shift_uses_custom_times():
    ctx = _context(
        [make_schedule(1, 7, MORNING.shift_id, TUESDAY)],
        custom_start="18:00",
        custom_end="21:00",
    )
    conflicts = ConflictDetector().evaluate(7, PART_TIME.shift_id, TUESDAY, 1, ctx)
    assert ConflictRuleId.OVERLAP not in _rules(conflicts)


def test_unknown_shift_raises():
    with pytest.raises(ValidationError):
        ConflictDetector().evaluate(7, 99, TUESDAY, 1, _context())


@pytest.mark.parametrize(
    "employee_id,shift_id,store_id",
    [(7, "abc", 1), ("abc", MORNING.shift_id, 1), (None, MORNING.shift_id, 1), (7, MORNING.shift_id, "x1")],
)
def test_non_numeric_ids_raise_validation_error(employee_id, shift_id, store_id):
    with pytest.raises(ValidationError):
        ConflictDetector().evaluate(employee_id, shift_id, TUESDAY, store_id, _context())


def test_unknown_shift_in_snapshot_raises():
    ctx = _context([make_schedule(1, 7, 99, TUESDAY)])
    with pytest.raises(ValidationError):
        ConflictDetector().evaluate(7, MORNING.shift_id, TUESDAY, 1, ctx)


@pytest.mark.parametrize(
    "start,end",
    [("08:00", None), (None, "12:00"), ("8h", "12:00"), ("08:00", "25:00")],
)
def test_malformed_custom_times_raise(start, end):
    with pytest.raises(ValidationError):
        ConflictDetector().evaluate(7, PART_TIME.shift_id, TUESDAY, 1, _context(custom_start=start, custom_end=end))
