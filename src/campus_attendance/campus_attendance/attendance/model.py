from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceStatus, PunchMethod


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one identity's attendance for one day.

    ``status`` is the point-in-time classification stored at punch time (None
    when the source held a status the engine does not know). Clock values are
    "HH:MM" strings or None.
    """

    record_id: str
    user_id: str
    work_date: str
    status: Optional[AttendanceStatus]
    clock_in: Optional[str] = None
    clock_out: Optional[str] = None
    location: str = ""
    method: PunchMethod = PunchMethod.MANUAL
