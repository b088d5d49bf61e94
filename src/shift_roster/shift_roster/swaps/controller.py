from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_identity, json_body, json_view, require_store
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/swaps", methods=["GET"], endpoint="api_swaps_list")
    @json_view
    def list_swaps():
        me = current_identity()
        swaps = container.swap_service.list_pending(current_role=me.role, store_id=require_store(me))
        return jsonify({"swaps": [s.to_dict() for s in swaps]})

    @app.route("/api/swaps", methods=["POST"], endpoint="api_swaps_request")
    @json_view
    def request_swap():
        me = current_identity()
        data = json_body()
        swap_id = container.swap_service.request_swap(
            current_role=me.role,
            user_id=me.user_id,
            schedule_id=data.get("schedule_id"),
            to_employee_id=data.get("to_employee_id"),
        )
        return jsonify({"swap_id": swap_id, "status": "pending"}), 201

    @app.route("/api/swaps/<int:swap_id>/approve", methods=["POST"], endpoint="api_swaps_approve")
    @json_view
    def approve_swap(swap_id: int):
        me = current_identity()
        result = container.swap_service.approve_swap(
            current_role=me.role, manager_id=me.user_id, store_id=require_store(me), swap_id=swap_id
        )
        return jsonify(result.to_dict()), (409 if result.blocked else 200)

    @app.route("/api/swaps/<int:swap_id>/reject", methods=["POST"], endpoint="api_swaps_reject")
    @json_view
    def reject_swap(swap_id: int):
        me = current_identity()
        container.swap_service.reject_swap(
            current_role=me.role,
            manager_id=me.user_id,
            store_id=require_store(me),
            swap_id=swap_id,
            reason=json_body().get("reason") or "",
        )
        return jsonify({"swap_id": swap_id, "status": "rejected"})
