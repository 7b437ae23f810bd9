from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..org.model import OrgDirectory
from ..shifts.catalog import ShiftCatalog
from ..users.model import Identity


@dataclass(frozen=True)
class Snapshot:
    """Everything the engine reads, captured at one point in time."""

    identities: Sequence[Identity] = ()
    org: OrgDirectory = field(default_factory=OrgDirectory)
    shifts: ShiftCatalog = field(default_factory=ShiftCatalog)
    attendance: Sequence[AttendanceRecord] = ()

    def get_identity(self, identity_id: Optional[str]) -> Optional[Identity]:
        if not identity_id:
            return None
        return next((i for i in self.identities if i.identity_id == identity_id), None)

    def record_for(self, user_id: str, work_date: str) -> Optional[AttendanceRecord]:
        return next((r for r in self.attendance if r.user_id == user_id and r.work_date == work_date), None)

    def records_between(self, start: str, end: str) -> list[AttendanceRecord]:
        return [r for r in self.attendance if start <= r.work_date <= end]
