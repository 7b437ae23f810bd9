from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import span_days, to_minutes
from ..core.enums import AssignmentTarget


@dataclass(frozen=True)
class Shift:
    """Domain entity: a work-time template."""

    shift_id: str
    label: str
    start_time: str
    end_time: str
    grace_period_minutes: int = 0
    early_mark_minutes: int = 0

    @property
    def start_minutes(self) -> Optional[int]:
        return to_minutes(self.start_time)

    @property
    def end_minutes(self) -> Optional[int]:
        return to_minutes(self.end_time)

    @property
    def duration_minutes(self) -> int:
        """Nominal duration end - start; 0 when unknown or not positive."""
        start, end = self.start_minutes, self.end_minutes
        if start is None or end is None:
            return 0
        return max(end - start, 0)


@dataclass(frozen=True)
class ShiftAssignment:
    """Binding of a shift to one identity or to a class label, for a day or a range."""

    assignment_id: str
    target_type: AssignmentTarget
    shift_id: str
    target_id: Optional[str] = None
    target_name: Optional[str] = None
    assigned_date: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @property
    def span_days(self) -> int:
        """Days this assignment covers; used to rank overlapping assignments."""
        days = span_days(self.start_date, self.end_date)
        if days is None:
            return 1
        return days
