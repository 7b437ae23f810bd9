"""Compliance classification of attendance punches.

Two computations coexist on purpose. ``classify_live`` runs once at punch
time and produces the status stored on the record. ``classify_historical``
recomputes lateness and half-day flags from the clock values against the
shift bound today, so it can disagree with a stored status written under an
older shift or threshold.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import ClockValue, to_minutes, worked_minutes
from ..core.constants import DEFAULT_HALF_DAY_THRESHOLD_MINUTES, MINUTES_PER_DAY
from ..core.enums import AttendanceStatus
from ..shifts.model import Shift
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .strategies.base import StatusDecision

_default_factory = AttendanceStrategyFactory()


@dataclass(frozen=True)
class ComplianceReview:
    is_late: bool
    is_half_day: bool
    worked_minutes: int

    @property
    def worked_hours(self) -> float:
        return round(self.worked_minutes / 60, 1)


def classify_live(
    now: ClockValue,
    shift: Optional[Shift],
    *,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> StatusDecision:
    """Status for a punch at ``now`` against the shift bound for the day.

    Inside the early-mark window before start -> Early; more than the grace
    period after start -> Late; otherwise (including no shift) -> Present.
    """
    factory = factory or _default_factory
    diff = None
    if shift is not None:
        now_minutes = to_minutes(now)
        start = shift.start_minutes
        if now_minutes is not None and start is not None:
            diff = now_minutes - start

    strategy = factory.for_checkin(diff_minutes=diff, shift=shift)
    return strategy.decide_checkin(diff_minutes=diff, shift=shift)


def classify_historical(record: AttendanceRecord, shift: Optional[Shift]) -> ComplianceReview:
    worked = worked_minutes(record.clock_in, record.clock_out)

    is_late = False
    clock_in = to_minutes(record.clock_in)
    if shift is not None and clock_in is not None and shift.start_minutes is not None:
        is_late = clock_in > shift.start_minutes + shift.grace_period_minutes

    duration = shift.duration_minutes if shift is not None else 0
    is_half_day = worked > 0 and duration > 0 and worked < duration / 2

    return ComplianceReview(is_late=is_late, is_half_day=is_half_day, worked_minutes=worked)


def half_day_threshold(
    shift: Optional[Shift],
    *,
    default_minutes: float = DEFAULT_HALF_DAY_THRESHOLD_MINUTES,
) -> float:
    """Half of the shift's span (overnight shifts wrap once), or the default."""
    if shift is None or shift.start_minutes is None or shift.end_minutes is None:
        return default_minutes
    total = shift.end_minutes - shift.start_minutes
    if total < 0:
        total += MINUTES_PER_DAY
    return total / 2


def classify_clock_out(
    clock_in: ClockValue,
    clock_out: ClockValue,
    shift: Optional[Shift],
    *,
    current: AttendanceStatus = AttendanceStatus.PRESENT,
    default_threshold_minutes: float = DEFAULT_HALF_DAY_THRESHOLD_MINUTES,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> StatusDecision:
    """Terminal clock-out rule: below half the shift worked -> Half Day.

    Otherwise the status stored at clock-in is kept.
    """
    if to_minutes(clock_in) is None or to_minutes(clock_out) is None:
        return StatusDecision(status=current)

    factory = factory or _default_factory
    duration = worked_minutes(clock_in, clock_out)
    threshold = half_day_threshold(shift, default_minutes=default_threshold_minutes)

    strategy = factory.for_checkout(duration_minutes=duration, threshold_minutes=threshold)
    return strategy.decide_checkout(duration_minutes=duration, threshold_minutes=threshold, current=current)
