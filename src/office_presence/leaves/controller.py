from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_optional_date
from ..common.http import admin_required, current_principal, json_body, login_required
from ..common.validators import require_non_empty
from ..container import Container


def register(app: Flask, container: Container) -> None:
    leaves = container.leave_lifecycle

    def _filters():
        return {
            "status": request.args.get("status") or None,
            "start_date": parse_optional_date(request.args.get("startDate")),
            "end_date": parse_optional_date(request.args.get("endDate")),
        }

    @app.route("/api/leaves", methods=["POST"], endpoint="leaves_create")
    @login_required
    def create_leave():
        body = json_body()
        leave = leaves.create(
            employee_id=current_principal().user_id,
            leave_type=require_non_empty(body.get("leaveType"), "leaveType"),
            start_date=parse_iso_date(require_non_empty(body.get("startDate"), "startDate")),
            end_date=parse_iso_date(require_non_empty(body.get("endDate"), "endDate")),
            reason=body.get("reason"),
        )
        return jsonify({"message": "Leave request submitted", "leave": leave.to_dict()}), 201

    @app.route("/api/leaves/mine", methods=["GET"], endpoint="leaves_mine")
    @login_required
    def my_leaves():
        items = leaves.list_for_employee(current_principal().user_id, **_filters())
        return jsonify({"count": len(items), "leaves": [lv.to_dict() for lv in items]})

    @app.route("/api/leaves/mine/stats", methods=["GET"], endpoint="leaves_my_stats")
    @login_required
    def my_stats():
        return jsonify({"statistics": leaves.employee_stats(current_principal().user_id).to_dict()})

    @app.route("/api/leaves/mine/<int:leave_id>", methods=["GET"], endpoint="leaves_mine_get")
    @login_required
    def my_leave(leave_id: int):
        leave = leaves.get(leave_id, employee_id=current_principal().user_id)
        return jsonify({"leave": leave.to_dict()})

    @app.route("/api/leaves/mine/<int:leave_id>", methods=["DELETE"], endpoint="leaves_mine_delete")
    @login_required
    def delete_leave(leave_id: int):
        leaves.delete(leave_id=leave_id, employee_id=current_principal().user_id)
        return jsonify({"message": "Leave request deleted successfully"})

    @app.route("/api/leaves", methods=["GET"], endpoint="leaves_all")
    @admin_required
    def all_leaves():
        user_id = request.args.get("userId", type=int)
        items = leaves.list_all(current_role=current_principal().role, employee_id=user_id, **_filters())
        return jsonify({"count": len(items), "leaves": [lv.to_dict() for lv in items]})

    @app.route("/api/leaves/pending", methods=["GET"], endpoint="leaves_pending")
    @admin_required
    def pending_leaves():
        items = leaves.list_pending(current_role=current_principal().role)
        return jsonify({"count": len(items), "leaves": [lv.to_dict() for lv in items]})

    @app.route("/api/leaves/statistics", methods=["GET"], endpoint="leaves_statistics")
    @admin_required
    def statistics():
        return jsonify({"statistics": leaves.global_stats(current_role=current_principal().role).to_dict()})

    @app.route("/api/leaves/<int:leave_id>", methods=["GET"], endpoint="leaves_get")
    @admin_required
    def get_leave(leave_id: int):
        return jsonify({"leave": leaves.get(leave_id).to_dict()})

    @app.route("/api/leaves/<int:leave_id>/status", methods=["PUT"], endpoint="leaves_review")
    @admin_required
    def review_leave(leave_id: int):
        principal = current_principal()
        body = json_body()
        leave = leaves.review(
            current_role=principal.role,
            leave_id=leave_id,
            admin_id=principal.user_id,
            status=body.get("status"),
            admin_notes=body.get("adminNotes"),
        )
        return jsonify({"message": f"Leave request {leave.status.value.lower()}", "leave": leave.to_dict()})
