from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import pytest
from flask import Flask

from src.shift_roster.shift_roster.payroll.controller import register as register_payroll
from src.shift_roster.shift_roster.payroll.service import PayrollService
from src.shift_roster.shift_roster.schedules.completion import CompletionSweepService
from src.shift_roster.shift_roster.schedules.controller import register as register_schedules
from src.shift_roster.shift_roster.schedules.service import ScheduleService
from src.shift_roster.shift_roster.swaps.controller import register as register_swaps
from src.shift_roster.shift_roster.swaps.service import SwapService

from tests.fakes import (
    MORNING,
    PART_TIME,
    FakeEmployeesRepo,
    FakeSchedulesRepo,
    FakeShiftsRepo,
    FakeStoresRepo,
    FakeSwapsRepo,
    employee,
    fixed_today,
    make_schedule,
)

TODAY = fixed_today(date(2026, 3, 1))


@pytest.fixture()
def repo():
    return FakeSchedulesRepo([make_schedule(1, 7, MORNING.shift_id, date(2026, 2, 20))])


@pytest.fixture()
def client(repo):
    shifts, stores = FakeShiftsRepo(), FakeStoresRepo()
    employees = FakeEmployeesRepo([employee(7), employee(8)])
    container = SimpleNamespace(
        schedule_service=ScheduleService(repo, shifts, stores, today=TODAY),
        completion_service=CompletionSweepService(repo, today=fixed_today(date(2026, 3, 1))),
        payroll_service=PayrollService(employees, repo, shifts),
        swap_service=SwapService(FakeSwapsRepo(repo), repo, shifts, stores, employees, today=TODAY),
    )

    app = Flask(__name__)
    app.secret_key = "test"
    app.config["CRON_SECRET"] = "s3cret"
    register_schedules(app, container)
    register_payroll(app, container)
    register_swaps(app, container)
    return app.test_client()


def _login(client, user_id, role, store_id=1):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role
        sess["store_id"] = store_id


def test_requires_session(client):
    assert client.post("/api/schedules", json={}).status_code == 401


def test_employee_submits_and_gets_conflicts_on_duplicate(client):
    _login(client, 7, "employee")

    created = client.post("/api/schedules", json={"shift_id": MORNING.shift_id, "date": "2026-03-10"})
    assert created.status_code == 201
    assert created.get_json()["schedule_id"] == 2

    again = client.post(
        "/api/schedules",
        json={"shift_id": PART_TIME.shift_id, "date": "2026-03-10", "start_time": "18:00", "end_time": "20:00"},
    )
    assert again.status_code == 409
    assert again.get_json()["blocked"] is True
    assert "pending_duplicate" in {c["rule"] for c in again.get_json()["conflicts"]}


def test_check_endpoint_previews_without_writing(client, repo):
    _login(client, 7, "employee")

    resp = client.post("/api/schedules/check", json={"shift_id": MORNING.shift_id, "date": "2026-02-25"})

    assert resp.status_code == 200
    assert resp.get_json()["blocked"] is True
    assert len(repo.rows) == 1


def test_validation_and_authorization_errors_are_mapped(client):
    _login(client, 7, "employee")
    assert client.post("/api/schedules", json={"shift_id": MORNING.shift_id, "date": "03/10/2026"}).status_code == 400
    assert client.post("/api/schedules/1/approve").status_code == 403

    _login(client, 2, "manager")
    assert client.post("/api/schedules", json={"shift_id": MORNING.shift_id, "date": "2026-03-10"}).status_code == 403


def test_manager_approves_pending_request(client, repo):
    _login(client, 7, "employee")
    schedule_id = client.post("/api/schedules", json={"shift_id": MORNING.shift_id, "date": "2026-03-10"}).get_json()[
        "schedule_id"
    ]

    _login(client, 2, "manager")
    resp = client.post(f"/api/schedules/{schedule_id}/approve")

    assert resp.status_code == 200
    assert repo.get_by_id(schedule_id).status.value == "approved"


def test_slot_grid(client):
    _login(client, 7, "employee")
    resp = client.get("/api/slots?date=2026-03-10")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["date"] == "2026-03-10"
    assert {s["shift_id"] for s in body["slots"]} == {1, 2, 3}


def test_payroll_is_manager_only(client):
    _login(client, 7, "employee")
    assert client.get("/api/payroll?month=2026-02").status_code == 403

    _login(client, 2, "manager")
    resp = client.get("/api/payroll?month=2026-02")
    assert resp.status_code == 200
    assert resp.get_json()["current"]["month"] == "2026-02"


def test_cron_sweep_checks_secret(client, repo):
    assert client.post("/api/cron/complete-schedules").status_code == 403

    resp = client.post("/api/cron/complete-schedules", headers={"X-Cron-Secret": "s3cret"})

    assert resp.status_code == 200
    assert resp.get_json() == {"updated": 1, "batches": 1}
    assert repo.get_by_id(1).status.value == "completed"


def test_swap_round_trip(client, repo):
    _login(client, 2, "manager")
    assigned = client.post(
        "/api/schedules/assign", json={"employee_id": 7, "shift_id": MORNING.shift_id, "date": "2026-03-12"}
    )
    assert assigned.status_code == 201
    schedule_id = assigned.get_json()["schedule_id"]

    _login(client, 7, "employee")
    created = client.post("/api/swaps", json={"schedule_id": schedule_id, "to_employee_id": 8})
    assert created.status_code == 201

    _login(client, 2, "manager")
    assert len(client.get("/api/swaps").get_json()["swaps"]) == 1
    approved = client.post(f"/api/swaps/{created.get_json()['swap_id']}/approve")
    assert approved.status_code == 200
    assert repo.get_by_id(schedule_id).employee_id == 8


def test_check_endpoint_validates_and_scopes_employee_override(client):
    _login(client, 7, "employee")
    body = {"shift_id": MORNING.shift_id, "date": "2026-03-10"}

    assert client.post("/api/schedules/check", json={**body, "employee_id": "abc"}).status_code == 400
    assert client.post("/api/schedules/check", json={**body, "employee_id": 8}).status_code == 403
    assert client.post("/api/schedules/check", json={**body, "employee_id": 7}).status_code == 200

    _login(client, 2, "manager")
    assert client.post("/api/schedules/check", json={**body, "employee_id": 8}).status_code == 200


def test_manager_of_another_store_cannot_approve(client, repo):
    _login(client, 7, "employee")
    schedule_id = client.post("/api/schedules", json={"shift_id": MORNING.shift_id, "date": "2026-03-10"}).get_json()[
        "schedule_id"
    ]

    _login(client, 3, "manager", store_id=2)
    assert client.post(f"/api/schedules/{schedule_id}/approve").status_code == 403
    assert client.post(f"/api/schedules/{schedule_id}/reject").status_code == 403
    assert repo.get_by_id(schedule_id).status.value == "pending"
