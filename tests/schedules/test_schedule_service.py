from __future__ import annotations

from datetime import date, time

import pytest

from src.shift_roster.shift_roster.core.enums import ConflictRuleId, Role, ScheduleStatus
from src.shift_roster.shift_roster.core.exceptions import AuthorizationError, ValidationError
from src.shift_roster.shift_roster.schedules.service import BulkItem, ScheduleService, snapshot_window

from tests.fakes import (
    AFTERNOON,
    MORNING,
    NIGHT,
    PART_TIME,
    FakeSchedulesRepo,
    FakeShiftsRepo,
    FakeStoresRepo,
    fixed_today,
    make_schedule,
)

TUESDAY = date(2026, 3, 10)


def _service(schedules=()):
    repo = FakeSchedulesRepo(schedules)
    service = ScheduleService(repo, FakeShiftsRepo(), FakeStoresRepo(), today=fixed_today(date(2026, 3, 1)))
    return service, repo


def test_employee_submission_creates_pending_request():
    service, repo = _service()

    result = service.submit_request(
        current_role=Role.EMPLOYEE, user_id=7, store_id=1, shift_id=MORNING.shift_id, work_date="2026-03-10"
    )

    assert not result.blocked
    sc = repo.get_by_id(result.schedule_id)
    assert sc.status == ScheduleStatus.PENDING
    assert sc.employee_id == 7
    assert sc.requested_by == 7
    assert sc.work_date == TUESDAY


def test_part_time_submission_stores_custom_times():
    service, repo = _service()

    result = service.submit_request(
        current_role=Role.EMPLOYEE,
        user_id=7,
        store_id=1,
        shift_id=PART_TIME.shift_id,
        work_date=TUESDAY,
        custom_start="17:00",
        custom_end="21:00",
    )

    sc = repo.get_by_id(result.schedule_id)
    assert (sc.custom_start, sc.custom_end) == (time(17, 0), time(21, 0))


def test_blocked_submission_writes_nothing():
    service, repo = _service([make_schedule(1, 7, MORNING.shift_id, TUESDAY)])

    result = service.submit_request(
        current_role=Role.EMPLOYEE, user_id=7, store_id=1, shift_id=PART_TIME.shift_id, work_date=TUESDAY
    )

    assert result.blocked
    assert result.schedule_id is None
    assert result.to_dict()["conflicts"][0]["rule"] == "overlap"
    assert len(repo.rows) == 1


def test_only_employees_submit():
    service, _ = _service()
    with pytest.raises(AuthorizationError):
        service.submit_request(
            current_role=Role.MANAGER, user_id=2, store_id=1, shift_id=MORNING.shift_id, work_date=TUESDAY
        )


def test_unknown_shift_and_bad_date_are_validation_errors():
    service, _ = _service()
    with pytest.raises(ValidationError):
        service.submit_request(current_role=Role.EMPLOYEE, user_id=7, store_id=1, shift_id=99, work_date=TUESDAY)
    with pytest.raises(ValidationError):
        service.submit_request(
            current_role=Role.EMPLOYEE, user_id=7, store_id=1, shift_id=MORNING.shift_id, work_date="10-03-2026"
        )


def test_evaluate_request_never_writes():
    service, repo = _service([make_schedule(1, 7, NIGHT.shift_id, TUESDAY)])

    conflicts = service.evaluate_request(
        employee_id=7, store_id=1, shift_id=MORNING.shift_id, work_date=date(2026, 3, 11)
    )

    assert [c.rule for c in conflicts] == [ConflictRuleId.REST_PERIOD]
    assert len(repo.rows) == 1


def test_bulk_submission_is_all_or_nothing():
    service, repo = _service()

    blocked = service.submit_bulk(
        current_role=Role.EMPLOYEE,
        user_id=7,
        store_id=1,
        items=[BulkItem(MORNING.shift_id, "2026-03-10"), BulkItem(AFTERNOON.shift_id, "2026-03-10")],
    )
    assert blocked.blocked
    assert blocked.schedule_ids == []
    assert ConflictRuleId.PENDING_DUPLICATE in {c.rule for c in blocked.conflicts[1]}
    assert repo.rows == {}

    ok = service.submit_bulk(
        current_role=Role.EMPLOYEE,
        user_id=7,
        store_id=1,
        items=[BulkItem(MORNING.shift_id, "2026-03-10"), BulkItem(MORNING.shift_id, "2026-03-11")],
    )
    assert not ok.blocked
    assert len(ok.schedule_ids) == 2
    assert all(repo.get_by_id(i).status == ScheduleStatus.PENDING for i in ok.schedule_ids)


def test_bulk_submission_requires_items():
    service, _ = _service()
    with pytest.raises(ValidationError):
        service.submit_bulk(current_role=Role.EMPLOYEE, user_id=7, store_id=1, items=[])


def test_manager_assignment_is_approved_immediately():
    service, repo = _service()

    result = service.assign_shift(
        current_role=Role.MANAGER,
        manager_id=2,
        store_id=1,
        employee_id=7,
        shift_id=MORNING.shift_id,
        work_date=TUESDAY,
    )

    sc = repo.get_by_id(result.schedule_id)
    assert sc.status == ScheduleStatus.APPROVED
    assert sc.is_assigned
    assert (sc.assigned_by, sc.approved_by, sc.created_by) == (2, 2, 2)

    with pytest.raises(AuthorizationError):
        service.assign_shift(
            current_role=Role.EMPLOYEE,
            manager_id=7,
            store_id=1,
            employee_id=7,
            shift_id=MORNING.shift_id,
            work_date=TUESDAY,
        )


def test_approve_moves_pending_to_approved():
    service, repo = _service([make_schedule(1, 7, MORNING.shift_id, TUESDAY, ScheduleStatus.PENDING)])

    result = service.approve(current_role=Role.MANAGER, manager_id=2, store_id=1, schedule_id=1)

    assert not result.blocked
    assert repo.get_by_id(1).status == ScheduleStatus.APPROVED
    assert repo.get_by_id(1).approved_by == 2

    with pytest.raises(ValidationError):
        service.approve(current_role=Role.MANAGER, manager_id=2, store_id=1, schedule_id=1)


def test_approve_is_blocked_when_slot_filled_up():
    rows = [make_schedule(i, 100 + i, MORNING.shift_id, TUESDAY) for i in range(1, 6)]
    rows.append(make_schedule(6, 7, MORNING.shift_id, TUESDAY, ScheduleStatus.PENDING))
    service, repo = _service(rows)

    result = service.approve(current_role=Role.ADMIN, manager_id=2, store_id=1, schedule_id=6)

    assert result.blocked
    assert [c.rule for c in result.conflicts] == [ConflictRuleId.CAPACITY]
    assert repo.get_by_id(6).status == ScheduleStatus.PENDING


def test_reject_and_permissions():
    service, repo = _service([make_schedule(1, 7, MORNING.shift_id, TUESDAY, ScheduleStatus.PENDING)])

    with pytest.raises(AuthorizationError):
        service.reject(current_role=Role.EMPLOYEE, manager_id=7, store_id=1, schedule_id=1)

    service.reject(current_role=Role.MANAGER, manager_id=2, store_id=1, schedule_id=1)
    assert repo.get_by_id(1).status == ScheduleStatus.REJECTED

    with pytest.raises(ValidationError):
        service.reject(current_role=Role.MANAGER, manager_id=2, store_id=1, schedule_id=1)


def test_manager_cannot_decide_requests_of_another_store():
    service, repo = _service([make_schedule(1, 7, MORNING.shift_id, TUESDAY, ScheduleStatus.PENDING)])

    with pytest.raises(AuthorizationError):
        service.approve(current_role=Role.MANAGER, manager_id=2, store_id=2, schedule_id=1)
    with pytest.raises(AuthorizationError):
        service.reject(current_role=Role.MANAGER, manager_id=2, store_id=2, schedule_id=1)

    assert repo.get_by_id(1).status == ScheduleStatus.PENDING


def test_preview_rejects_non_numeric_employee():
    service, _ = _service()

    with pytest.raises(ValidationError):
        service.evaluate_request(employee_id="abc", store_id=1, shift_id=MORNING.shift_id, work_date=TUESDAY)


def test_edit_pending_request_moves_it_without_self_conflict():
    service, repo = _service([make_schedule(1, 7, MORNING.shift_id, TUESDAY, ScheduleStatus.PENDING)])

    result = service.edit_request(
        current_role=Role.EMPLOYEE, user_id=7, schedule_id=1, shift_id=AFTERNOON.shift_id, work_date=TUESDAY
    )

    assert not result.blocked
    assert repo.get_by_id(1).shift_id == AFTERNOON.shift_id

    with pytest.raises(AuthorizationError):
        service.edit_request(
            current_role=Role.EMPLOYEE, user_id=8, schedule_id=1, shift_id=MORNING.shift_id, work_date=TUESDAY
        )


def test_cancel_only_pending_own_requests():
    service, repo = _service(
        [
            make_schedule(1, 7, MORNING.shift_id, TUESDAY, ScheduleStatus.PENDING),
            make_schedule(2, 7, MORNING.shift_id, date(2026, 3, 11)),
        ]
    )

    with pytest.raises(AuthorizationError):
        service.cancel(current_role=Role.EMPLOYEE, user_id=8, schedule_id=1)
    with pytest.raises(ValidationError):
        service.cancel(current_role=Role.EMPLOYEE, user_id=7, schedule_id=2)

    service.cancel(current_role=Role.EMPLOYEE, user_id=7, schedule_id=1)
    assert repo.get_by_id(1) is None


def test_slot_grid_lists_fixed_shifts_only():
    service, _ = _service(
        [
            make_schedule(1, 7, MORNING.shift_id, TUESDAY),
            make_schedule(2, 8, MORNING.shift_id, TUESDAY, ScheduleStatus.PENDING),
            make_schedule(3, 9, MORNING.shift_id, TUESDAY, ScheduleStatus.REJECTED),
        ]
    )

    grid = {s.shift_id: s for s in service.slot_grid(store_id=1, work_date="2026-03-10")}

    assert set(grid) == {MORNING.shift_id, AFTERNOON.shift_id, NIGHT.shift_id}
    assert grid[MORNING.shift_id].occupied == 2
    assert grid[MORNING.shift_id].available == 3
    assert grid[NIGHT.shift_id].available == 5


def test_snapshot_window_spans_whole_months_and_neighbouring_days():
    assert snapshot_window([TUESDAY]) == (date(2026, 3, 1), date(2026, 3, 31))
    assert snapshot_window([date(2026, 3, 28), date(2026, 3, 2)]) == (date(2026, 2, 23), date(2026, 4, 4))
