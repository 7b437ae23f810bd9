from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .attendance.factory import AttendanceStrategyFactory
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_HALF_DAY_THRESHOLD_MINUTES
from .ledger.dashboard import DashboardService
from .ledger.service import AttendanceLedgerService
from .snapshots.repository import JsonSnapshotRepository, SnapshotRepository
from .users.service import DirectoryService


@dataclass(frozen=True)
class Container:
    snapshot_repo: SnapshotRepository

    attendance_service: AttendanceService
    ledger_service: AttendanceLedgerService
    dashboard_service: DashboardService
    directory_service: DirectoryService


def build_container(
    *,
    snapshot_path: Optional[Union[str, Path]] = None,
    snapshot_repo: Optional[SnapshotRepository] = None,
    half_day_threshold_minutes: int = DEFAULT_HALF_DAY_THRESHOLD_MINUTES,
) -> Container:
    if snapshot_repo is None:
        if not snapshot_path:
            raise ValueError("snapshot_path or snapshot_repo is required")
        snapshot_repo = JsonSnapshotRepository(snapshot_path)

    attendance_service = AttendanceService(
        snapshot_repo,
        strategy_factory=AttendanceStrategyFactory(),
        half_day_threshold_minutes=half_day_threshold_minutes,
    )

    return Container(
        snapshot_repo=snapshot_repo,
        attendance_service=attendance_service,
        ledger_service=AttendanceLedgerService(snapshot_repo),
        dashboard_service=DashboardService(snapshot_repo),
        directory_service=DirectoryService(snapshot_repo),
    )
