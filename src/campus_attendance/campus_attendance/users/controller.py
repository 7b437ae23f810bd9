from __future__ import annotations

from dataclasses import asdict

from flask import Flask, g, jsonify, request

from ..common.http import actor_required
from ..common.validators import require_non_empty
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/directory", methods=["GET"], endpoint="api_directory")
    @actor_required
    def api_directory():
        rows = container.directory_service.list_visible(
            actor_id=g.actor_id,
            role=request.args.get("role") or None,
        )
        return jsonify({"success": True, "rows": rows})

    @app.route("/api/access", methods=["GET"], endpoint="api_access")
    @actor_required
    def api_access():
        target_id = require_non_empty(request.args.get("target_id"), "target_id")
        decision = container.directory_service.access_for(actor_id=g.actor_id, target_id=target_id)
        return jsonify({"success": True, "target_id": target_id, **asdict(decision)})
