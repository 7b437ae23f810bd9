from __future__ import annotations

from datetime import date

from flask import Flask, g, jsonify, request

from ..common.http import actor_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/ledger", methods=["GET"], endpoint="api_ledger")
    @actor_required
    def api_ledger():
        today = date.today()
        start = request.args.get("start") or today.replace(day=1).isoformat()
        end = request.args.get("end") or today.isoformat()
        rows = container.ledger_service.build_ledger(
            actor_id=g.actor_id,
            start=start,
            end=end,
            user_id=request.args.get("user_id") or None,
        )
        return jsonify({"success": True, "start": start, "end": end, "rows": rows})

    @app.route("/api/roster", methods=["GET"], endpoint="api_roster")
    @actor_required
    def api_roster():
        week_of = request.args.get("week_of") or date.today().isoformat()
        roster = container.ledger_service.weekly_roster(actor_id=g.actor_id, week_of=week_of)
        return jsonify({"success": True, **roster})

    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    @actor_required
    def api_dashboard():
        stats = container.dashboard_service.stats(actor_id=g.actor_id)
        return jsonify({"success": True, "stats": stats})

    @app.route("/api/shifts/resolve", methods=["GET"], endpoint="api_shift_resolve")
    @actor_required
    def api_shift_resolve():
        user_id = request.args.get("user_id") or g.actor_id
        work_date = request.args.get("date") or date.today().isoformat()

        shift = container.ledger_service.shift_for(actor_id=g.actor_id, user_id=user_id, work_date=work_date)
        if not shift:
            return jsonify({"success": True, "user_id": user_id, "date": work_date, "shift": None})
        return jsonify(
            {
                "success": True,
                "user_id": user_id,
                "date": work_date,
                "shift": {
                    "id": shift.shift_id,
                    "label": shift.label,
                    "start_time": shift.start_time,
                    "end_time": shift.end_time,
                    "grace_period_minutes": shift.grace_period_minutes,
                    "early_mark_minutes": shift.early_mark_minutes,
                },
            }
        )
