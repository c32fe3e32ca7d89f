from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, current_principal, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    resolver = container.schedule_resolver

    @app.route("/api/work-schedules", methods=["GET"], endpoint="work_schedules_list")
    @admin_required
    def list_schedules():
        schedules = resolver.list_active(current_role=current_principal().role)
        return jsonify({"count": len(schedules), "schedules": list(schedules)})

    @app.route("/api/work-schedules/<int:user_id>", methods=["GET"], endpoint="work_schedules_get")
    @admin_required
    def get_schedule(user_id: int):
        return jsonify({"schedule": resolver.get_for_display(user_id).to_dict()})

    @app.route("/api/work-schedules/<int:user_id>", methods=["POST", "PUT"], endpoint="work_schedules_upsert")
    @admin_required
    def upsert_schedule(user_id: int):
        body = json_body()
        schedule = resolver.upsert(
            current_role=current_principal().role,
            employee_id=user_id,
            check_in_time=body.get("checkInTime"),
            check_out_time=body.get("checkOutTime"),
            grace_period_minutes=body.get("gracePeriodMinutes"),
        )
        return jsonify({"message": "Work schedule saved", "schedule": schedule.to_dict()})

    @app.route("/api/work-schedules/<int:user_id>", methods=["DELETE"], endpoint="work_schedules_delete")
    @admin_required
    def delete_schedule(user_id: int):
        resolver.deactivate(current_role=current_principal().role, employee_id=user_id)
        return jsonify({"message": "Work schedule deactivated"})
