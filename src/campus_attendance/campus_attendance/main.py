from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .core.exceptions import AuthorizationError, SnapshotError, ValidationError
from .ledger.controller import register as register_ledger
from .snapshots.repository import SnapshotRepository
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(*, snapshot_repo: Optional[SnapshotRepository] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    snapshot_path = getattr(settings, "SNAPSHOT_PATH", None)
    logger.info("settings=%s snapshot=%s", settings_module, snapshot_path if snapshot_repo is None else "<injected>")

    container = build_container(
        snapshot_path=snapshot_path,
        snapshot_repo=snapshot_repo,
        half_day_threshold_minutes=int(getattr(settings, "DEFAULT_HALF_DAY_THRESHOLD_MINUTES", 240)),
    )

    @app.errorhandler(ValidationError)
    def _validation_error(e):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(AuthorizationError)
    def _authorization_error(e):
        return jsonify({"success": False, "message": str(e)}), 403

    @app.errorhandler(SnapshotError)
    def _snapshot_error(e):
        logger.error("Snapshot unavailable: %s", e)
        return jsonify({"success": False, "message": "Directory snapshot unavailable"}), 503

    register_users(app, container)
    register_ledger(app, container)
    register_attendance(app, container)

    return app
