from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Union

from ..common.datetime_utils import is_date_covered
from ..core.enums import AssignmentTarget
from ..users.model import Identity
from .catalog import ShiftCatalog
from .model import Shift, ShiftAssignment

logger = logging.getLogger(__name__)


class ShiftResolver:
    """Find the shift that governs an identity on a given day.

    Individual assignments always win over class assignments. When several
    assignments of the same kind cover the day, the one with the narrowest
    date range wins and ties go to the earliest row of the snapshot.
    """

    def __init__(self, catalog: ShiftCatalog):
        self._catalog = catalog

        individual: dict[str, list[ShiftAssignment]] = {}
        for a in catalog.assignments:
            if a.target_type == AssignmentTarget.INDIVIDUAL and a.target_id:
                individual.setdefault(a.target_id, []).append(a)
        self._individual = {k: tuple(v) for k, v in individual.items()}
        self._class = tuple(catalog.class_assignments())

    @property
    def catalog(self) -> ShiftCatalog:
        return self._catalog

    def resolve(
        self,
        user_id: str,
        work_date: Union[str, date],
        designation: Optional[str] = None,
        *,
        class_id: Optional[str] = None,
        grade_id: Optional[str] = None,
    ) -> Optional[Shift]:
        assignment = self.resolve_assignment(user_id, work_date, designation, class_id=class_id, grade_id=grade_id)
        if assignment is None:
            return None
        return self._catalog.get_shift(assignment.shift_id)

    def resolve_for(self, identity: Identity, work_date: Union[str, date]) -> Optional[Shift]:
        return self.resolve(
            identity.identity_id,
            work_date,
            identity.designation or None,
            class_id=identity.class_id,
            grade_id=identity.grade_id,
        )

    def resolve_assignment(
        self,
        user_id: str,
        work_date: Union[str, date],
        designation: Optional[str] = None,
        *,
        class_id: Optional[str] = None,
        grade_id: Optional[str] = None,
    ) -> Optional[ShiftAssignment]:
        individual = self._pick(
            self._individual.get(user_id, ()),
            work_date,
            subject=f"identity {user_id}",
        )
        if individual is not None:
            return individual

        if not designation and not class_id and not grade_id:
            return None

        matching = (a for a in self._class if _class_matches(a, designation, class_id, grade_id))
        return self._pick(matching, work_date, subject=f"class of identity {user_id}")

    def _pick(
        self,
        assignments: Iterable[ShiftAssignment],
        work_date: Union[str, date],
        *,
        subject: str,
    ) -> Optional[ShiftAssignment]:
        candidates = []
        for a in assignments:
            if not is_date_covered(
                work_date,
                assigned_date=a.assigned_date,
                start_date=a.start_date,
                end_date=a.end_date,
            ):
                continue
            if self._catalog.get_shift(a.shift_id) is None:
                logger.warning("Assignment %s points at unknown shift %s, ignored", a.assignment_id, a.shift_id)
                continue
            candidates.append(a)

        if not candidates:
            return None
        if len(candidates) > 1:
            logger.warning(
                "Overlapping shift assignments for %s on %s: %s",
                subject,
                work_date,
                ", ".join(a.assignment_id for a in candidates),
            )

        # min() keeps the first of equal keys, so snapshot order breaks ties.
        return min(candidates, key=lambda a: a.span_days)


def _class_matches(
    assignment: ShiftAssignment,
    designation: Optional[str],
    class_id: Optional[str],
    grade_id: Optional[str] = None,
) -> bool:
    # A class binding may name the class itself or the whole grade.
    if (class_id or grade_id) and assignment.target_id:
        return assignment.target_id in (class_id, grade_id)
    if not designation or not assignment.target_name:
        return False
    return assignment.target_name in designation


def resolve_shift(
    catalog: ShiftCatalog,
    user_id: str,
    work_date: Union[str, date],
    designation: Optional[str] = None,
) -> Optional[Shift]:
    """Functional entry point; see ShiftResolver.resolve."""
    return ShiftResolver(catalog).resolve(user_id, work_date, designation)
