from __future__ import annotations

import importlib
import logging
import sys
from datetime import date, timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.campus_attendance.campus_attendance.org.jurisdiction import identity_cluster
from src.campus_attendance.campus_attendance.shifts.resolver import ShiftResolver
from src.campus_attendance.campus_attendance.snapshots.repository import JsonSnapshotRepository


def main(month: str) -> None:
    """Resolve every identity's shift for each day of month (YYYY-MM).

    Overlapping assignments are reported by the resolver's warnings; identities
    whose assignment text does not resolve to a cluster are listed at the end.
    """
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(message)s")

    snapshot = JsonSnapshotRepository(settings.SNAPSHOT_PATH).load()
    resolver = ShiftResolver(snapshot.shifts)

    first = date.fromisoformat(f"{month}-01")
    day = first
    bound = 0
    while day.month == first.month:
        for identity in snapshot.identities:
            if resolver.resolve_for(identity, day) is not None:
                bound += 1
        day += timedelta(days=1)

    unresolved = [
        i.identity_id for i in snapshot.identities if not identity_cluster(i, snapshot.org).verified
    ]
    print(f"OK: {bound} identity-days bound to a shift in {month}")
    print(f"Unresolved jurisdiction: {', '.join(unresolved) or '-'}")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else date.today().strftime("%Y-%m"))
