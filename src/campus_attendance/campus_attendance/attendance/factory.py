from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..shifts.model import Shift
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, diff_minutes: Optional[float], shift: Optional[Shift]) -> AttendanceStrategy:
        if not shift or diff_minutes is None:
            return NormalStrategy()

        if diff_minutes < 0 and -diff_minutes <= shift.early_mark_minutes:
            return EarlyStrategy()
        if diff_minutes > shift.grace_period_minutes:
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(self, *, duration_minutes: int, threshold_minutes: float) -> AttendanceStrategy:
        if duration_minutes < threshold_minutes:
            return HalfDayStrategy()
        return NormalStrategy()
