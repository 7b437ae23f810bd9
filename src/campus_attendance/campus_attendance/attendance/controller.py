from __future__ import annotations

from dataclasses import asdict

from flask import Flask, g, jsonify, request

from ..common.http import actor_required
from ..common.validators import require_non_empty
from ..container import Container
from ..core.enums import AttendanceStatus, PunchMethod
from ..core.exceptions import ValidationError
from .model import AttendanceRecord


def _record_json(record: AttendanceRecord) -> dict:
    return {
        "id": record.record_id,
        "user_id": record.user_id,
        "date": record.work_date,
        "status": record.status.value if record.status else None,
        "clock_in": record.clock_in,
        "clock_out": record.clock_out,
        "location": record.location,
        "method": record.method.value,
    }


def register(app: Flask, container: Container) -> None:
    # Punch endpoints return the new record; storing it is the sync layer's job.

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="api_checkin")
    @actor_required
    def api_checkin():
        record = container.attendance_service.check_in(g.actor_id)
        return jsonify({"success": True, "action": "checkin", "record": _record_json(record)})

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="api_checkout")
    @actor_required
    def api_checkout():
        record = container.attendance_service.check_out(g.actor_id)
        return jsonify({"success": True, "action": "checkout", "record": _record_json(record)})

    @app.route("/api/attendance/punch", methods=["POST"], endpoint="api_punch")
    @actor_required
    def api_punch():
        """Terminal punch: auto-detects check-in vs check-out from today's record."""
        record = container.attendance_service.punch(g.actor_id)
        action = "checkout" if record.clock_out else "checkin"
        return jsonify({"success": True, "action": action, "record": _record_json(record)})

    @app.route("/api/attendance/manual", methods=["POST"], endpoint="api_manual_entry")
    @actor_required
    def api_manual_entry():
        data = request.get_json(silent=True) or {}
        status = AttendanceStatus.parse(data.get("status"))
        if status is None:
            raise ValidationError("Unknown attendance status")
        method = PunchMethod.PROXY if data.get("method") == PunchMethod.PROXY.value else PunchMethod.MANUAL

        record = container.attendance_service.record_manual(
            actor_id=g.actor_id,
            user_id=require_non_empty(str(data.get("user_id") or ""), "user_id"),
            work_date=data.get("date") or "",
            status=status,
            clock_in=data.get("clock_in") or None,
            clock_out=data.get("clock_out") or None,
            method=method,
        )
        return jsonify({"success": True, "record": _record_json(record)})

    @app.route("/api/attendance/<record_id>/review", methods=["GET"], endpoint="api_review")
    @actor_required
    def api_review(record_id: str):
        review = container.attendance_service.review(record_id, actor_id=g.actor_id)
        return jsonify({"success": True, "record_id": record_id, **asdict(review), "worked_hours": review.worked_hours})
