from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import Shift
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, diff_minutes: Optional[float], shift: Optional[Shift]) -> StatusDecision:
        if diff_minutes is None or shift is None:
            return StatusDecision(status=AttendanceStatus.LATE)
        return StatusDecision(
            status=AttendanceStatus.LATE,
            note=f"{diff_minutes:.0f} min after start (grace {shift.grace_period_minutes})",
        )

    def decide_checkout(self, *, duration_minutes: int, threshold_minutes: float, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
