from __future__ import annotations

from functools import wraps

from flask import g, jsonify, request


def actor_required(view):
    """The trusted upstream passes the acting identity as actor_id or X-Actor-Id."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        actor_id = request.args.get("actor_id") or request.headers.get("X-Actor-Id")
        if not actor_id:
            return jsonify({"success": False, "message": "actor_id is required"}), 401
        g.actor_id = actor_id.strip()
        return view(*args, **kwargs)

    return wrapper
