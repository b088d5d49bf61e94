from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_month, today_local
from ..common.web import current_identity, json_view, require_store
from ..container import Container
from ..core.exceptions import AuthorizationError
from ..schedules.service import MANAGER_ROLES


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll", methods=["GET"], endpoint="api_payroll")
    @json_view
    def monthly_payroll():
        me = current_identity()
        if me.role not in MANAGER_ROLES:
            raise AuthorizationError("Only managers can view payroll")

        month = parse_month(request.args.get("month") or today_local())
        report = container.payroll_service.build_report_with_comparison(store_id=require_store(me), month=month)
        return jsonify(report.to_dict())
