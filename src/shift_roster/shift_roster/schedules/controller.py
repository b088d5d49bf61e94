from __future__ import annotations

import hmac
import logging

from flask import Flask, current_app, jsonify, request

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.validators import require_positive_id
from ..common.web import current_identity, json_body, json_view, require_store
from ..container import Container
from ..core.exceptions import AuthorizationError, ValidationError
from .service import MANAGER_ROLES, BulkItem

logger = logging.getLogger(__name__)


def _status_for(result) -> int:
    return 409 if result.blocked else 200


def register(app: Flask, container: Container) -> None:
    @app.route("/api/schedules/check", methods=["POST"], endpoint="api_schedules_check")
    @json_view
    def check_schedule():
        me = current_identity()
        data = json_body()
        employee_id = me.user_id
        if data.get("employee_id"):
            employee_id = require_positive_id(data["employee_id"], "Employee")
            if employee_id != me.user_id and me.role not in MANAGER_ROLES:
                raise AuthorizationError("You can only check your own requests")
        conflicts = container.schedule_service.evaluate_request(
            employee_id=employee_id,
            store_id=require_store(me),
            shift_id=data.get("shift_id"),
            work_date=data.get("date"),
            custom_start=data.get("start_time"),
            custom_end=data.get("end_time"),
            exclude_schedule_id=require_positive_id(data["schedule_id"], "Schedule") if data.get("schedule_id") else None,
        )
        return jsonify(
            {
                "blocked": any(c.is_blocking for c in conflicts),
                "conflicts": [c.to_dict() for c in conflicts],
            }
        )

    @app.route("/api/schedules", methods=["POST"], endpoint="api_schedules_submit")
    @json_view
    def submit_schedule():
        me = current_identity()
        data = json_body()
        result = container.schedule_service.submit_request(
            current_role=me.role,
            user_id=me.user_id,
            store_id=require_store(me),
            shift_id=data.get("shift_id"),
            work_date=data.get("date"),
            custom_start=data.get("start_time"),
            custom_end=data.get("end_time"),
        )
        return jsonify(result.to_dict()), (409 if result.blocked else 201)

    @app.route("/api/schedules/bulk", methods=["POST"], endpoint="api_schedules_bulk")
    @json_view
    def submit_bulk():
        me = current_identity()
        raw_items = json_body().get("items") or []
        if not isinstance(raw_items, list):
            raise ValidationError("items must be a list")
        items = [
            BulkItem(
                shift_id=it.get("shift_id"),
                work_date=it.get("date"),
                custom_start=it.get("start_time"),
                custom_end=it.get("end_time"),
            )
            for it in raw_items
            if isinstance(it, dict)
        ]
        result = container.schedule_service.submit_bulk(
            current_role=me.role,
            user_id=me.user_id,
            store_id=require_store(me),
            items=items,
        )
        return jsonify(result.to_dict()), (409 if result.blocked else 201)

    @app.route("/api/schedules/assign", methods=["POST"], endpoint="api_schedules_assign")
    @json_view
    def assign_schedule():
        me = current_identity()
        data = json_body()
        result = container.schedule_service.assign_shift(
            current_role=me.role,
            manager_id=me.user_id,
            store_id=require_store(me),
            employee_id=data.get("employee_id"),
            shift_id=data.get("shift_id"),
            work_date=data.get("date"),
            custom_start=data.get("start_time"),
            custom_end=data.get("end_time"),
        )
        return jsonify(result.to_dict()), (409 if result.blocked else 201)

    @app.route("/api/schedules/<int:schedule_id>", methods=["PUT"], endpoint="api_schedules_edit")
    @json_view
    def edit_schedule(schedule_id: int):
        me = current_identity()
        data = json_body()
        result = container.schedule_service.edit_request(
            current_role=me.role,
            user_id=me.user_id,
            schedule_id=schedule_id,
            shift_id=data.get("shift_id"),
            work_date=data.get("date"),
            custom_start=data.get("start_time"),
            custom_end=data.get("end_time"),
        )
        return jsonify(result.to_dict()), _status_for(result)

    @app.route("/api/schedules/<int:schedule_id>", methods=["DELETE"], endpoint="api_schedules_cancel")
    @json_view
    def cancel_schedule(schedule_id: int):
        me = current_identity()
        container.schedule_service.cancel(current_role=me.role, user_id=me.user_id, schedule_id=schedule_id)
        return jsonify({"schedule_id": schedule_id, "cancelled": True})

    @app.route("/api/schedules/<int:schedule_id>/approve", methods=["POST"], endpoint="api_schedules_approve")
    @json_view
    def approve_schedule(schedule_id: int):
        me = current_identity()
        result = container.schedule_service.approve(
            current_role=me.role, manager_id=me.user_id, store_id=require_store(me), schedule_id=schedule_id
        )
        return jsonify(result.to_dict()), _status_for(result)

    @app.route("/api/schedules/<int:schedule_id>/reject", methods=["POST"], endpoint="api_schedules_reject")
    @json_view
    def reject_schedule(schedule_id: int):
        me = current_identity()
        container.schedule_service.reject(
            current_role=me.role, manager_id=me.user_id, store_id=require_store(me), schedule_id=schedule_id
        )
        return jsonify({"schedule_id": schedule_id, "status": "rejected"})

    @app.route("/api/slots", methods=["GET"], endpoint="api_slots")
    @json_view
    def slot_grid():
        me = current_identity()
        day = parse_iso_date(request.args.get("date") or today_local())
        slots = container.schedule_service.slot_grid(store_id=require_store(me), work_date=day)
        return jsonify({"date": day.strftime("%Y-%m-%d"), "slots": [s.to_dict() for s in slots]})

    @app.route("/api/cron/complete-schedules", methods=["POST"], endpoint="api_cron_complete")
    def complete_schedules():
        secret = current_app.config.get("CRON_SECRET")
        if secret and not hmac.compare_digest(request.headers.get("X-Cron-Secret", ""), secret):
            return jsonify({"error": "Forbidden"}), 403
        try:
            result = container.completion_service.run()
        except Exception:
            logger.exception("Completion sweep failed")
            return jsonify({"error": "Internal server error"}), 500
        return jsonify(result.to_dict())
