from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.http import admin_required, current_principal
from ..container import Container


def register(app: Flask, container: Container) -> None:
    dashboard = container.dashboard

    @app.route("/api/dashboard/who-is-in-office", methods=["GET"], endpoint="dashboard_in_office")
    @admin_required
    def who_is_in_office():
        employees = dashboard.who_is_in_office(current_role=current_principal().role)
        return jsonify({"message": "Employees currently in office", "count": len(employees), "employees": employees})

    @app.route("/api/dashboard/today-summary", methods=["GET"], endpoint="dashboard_today_summary")
    @admin_required
    def today_summary():
        summary = dashboard.today_summary(current_role=current_principal().role)
        return jsonify({"message": "Today's attendance summary", **summary.to_dict()})

    @app.route("/api/dashboard/statistics", methods=["GET"], endpoint="dashboard_statistics")
    @admin_required
    def statistics():
        stats = dashboard.range_statistics(
            current_role=current_principal().role,
            start_date=parse_optional_date(request.args.get("startDate")),
            end_date=parse_optional_date(request.args.get("endDate")),
        )
        return jsonify({"message": "Attendance statistics", **stats.to_dict()})
