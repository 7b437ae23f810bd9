from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import Shift
from .base import AttendanceStrategy, StatusDecision


class EarlyStrategy(AttendanceStrategy):
    """Arrival inside the early-mark window before shift start."""

    def decide_checkin(self, *, diff_minutes: Optional[float], shift: Optional[Shift]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.EARLY)

    def decide_checkout(self, *, duration_minutes: int, threshold_minutes: float, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
