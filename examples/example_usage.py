"""Example: use the service layer directly, without Flask.

Controllers stay thin; everything below goes through the same container the
HTTP surface uses.
"""

import importlib

from config import get_settings_module

from src.campus_attendance.campus_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(snapshot_path=settings.SNAPSHOT_PATH)

    for row in container.ledger_service.build_ledger(actor_id="SA1", start="2026-02-01", end="2026-02-28"):
        print(row["date"], row["user_name"], row["status"], row["shift_label"], row["worked_hours"])

    print(container.dashboard_service.stats(actor_id="T1"))


if __name__ == "__main__":
    main()
