from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.enums import AssignmentTarget
from .model import Shift, ShiftAssignment


@dataclass(frozen=True)
class ShiftCatalog:
    """Read-only snapshot of shift templates and their assignments."""

    shifts: Sequence[Shift] = ()
    assignments: Sequence[ShiftAssignment] = ()

    def get_shift(self, shift_id: Optional[str]) -> Optional[Shift]:
        if not shift_id:
            return None
        return next((s for s in self.shifts if s.shift_id == shift_id), None)

    def class_assignments(self) -> list[ShiftAssignment]:
        return [a for a in self.assignments if a.target_type == AssignmentTarget.CLASS]
