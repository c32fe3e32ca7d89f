from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date, parse_optional_date, parse_optional_datetime
from ..common.http import admin_required, current_principal, json_body, login_required
from ..container import Container
from ..network.client_ip import resolve_client_ip


def register(app: Flask, container: Container) -> None:
    engine = container.attendance_engine

    def _date_range():
        return (
            parse_optional_date(request.args.get("startDate")),
            parse_optional_date(request.args.get("endDate")),
        )

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    @login_required
    def checkin():
        principal = current_principal()
        result = engine.check_in(
            principal.user_id,
            resolve_client_ip(request),
            client_time=parse_optional_datetime(json_body().get("clientTime")),
        )
        return jsonify({"message": "Check-in successful", **result.to_dict()}), 201

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="attendance_checkout")
    @login_required
    def checkout():
        principal = current_principal()
        record = engine.check_out(
            principal.user_id,
            resolve_client_ip(request),
            client_time=parse_optional_datetime(json_body().get("clientTime")),
        )
        return jsonify({"message": "Check-out successful", "attendance": record.to_dict()})

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def today():
        record = engine.get_today(current_principal().user_id)
        return jsonify(
            {
                "attendance": record.to_dict() if record else None,
                "hasCheckedIn": bool(record and record.check_in_time),
                "hasCheckedOut": bool(record and record.check_out_time),
            }
        )

    @app.route("/api/attendance/me", methods=["GET"], endpoint="attendance_history")
    @login_required
    def my_history():
        start_date, end_date = _date_range()
        records = engine.history(current_principal().user_id, start_date, end_date)
        return jsonify({"count": len(records), "attendance": [r.to_dict() for r in records]})

    @app.route("/api/attendance/me/stats", methods=["GET"], endpoint="attendance_my_stats")
    @login_required
    def my_stats():
        start_date, end_date = _date_range()
        stats = container.dashboard.employee_stats(current_principal().user_id, start_date, end_date)
        return jsonify(stats.to_dict())

    @app.route("/api/attendance/user/<int:user_id>", methods=["GET"], endpoint="attendance_user_history")
    @admin_required
    def user_history(user_id: int):
        start_date, end_date = _date_range()
        records = engine.history(user_id, start_date, end_date)
        return jsonify({"count": len(records), "attendance": [r.to_dict() for r in records]})

    @app.route("/api/attendance/<int:record_id>/status", methods=["PUT"], endpoint="attendance_update_status")
    @admin_required
    def update_status(record_id: int):
        body = json_body()
        record = engine.update_status(
            current_role=current_principal().role,
            record_id=record_id,
            status=body.get("status"),
            notes=body.get("notes"),
        )
        return jsonify({"message": "Attendance status updated", "attendance": record.to_dict()})

    @app.route("/api/attendance/<int:user_id>/absent", methods=["POST"], endpoint="attendance_mark_absent")
    @admin_required
    def mark_absent(user_id: int):
        body = json_body()
        work_date = parse_iso_date(body["date"]) if body.get("date") else None
        record = engine.mark_absent(
            current_role=current_principal().role,
            employee_id=user_id,
            work_date=work_date or now_local().date(),
            notes=body.get("notes"),
        )
        return jsonify({"message": "Employee marked absent", "attendance": record.to_dict()})

    @app.route("/api/attendance/admin/checkin/<int:user_id>", methods=["POST"], endpoint="attendance_admin_checkin")
    @admin_required
    def admin_checkin(user_id: int):
        principal = current_principal()
        result = engine.admin_check_in(current_role=principal.role, admin_id=principal.user_id, employee_id=user_id)
        return jsonify({"message": "Employee checked in by admin", **result.to_dict()}), 201

    @app.route("/api/attendance/admin/checkout/<int:user_id>", methods=["POST"], endpoint="attendance_admin_checkout")
    @admin_required
    def admin_checkout(user_id: int):
        principal = current_principal()
        record = engine.admin_check_out(current_role=principal.role, admin_id=principal.user_id, employee_id=user_id)
        return jsonify({"message": "Employee checked out by admin", "attendance": record.to_dict()})
