"""Build a Snapshot from the JSON payload the dashboard sync layer produces.

Rows use the sync layer's camelCase keys (``clusterName``, ``gracePeriod``,
``targetType``); snake_case keys are accepted as well. Rows without an id are
skipped with a warning. Unknown role or status strings are kept as None so the
engine denies or ignores them instead of guessing.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import iso_date_key
from ..core.enums import AssignmentTarget, AttendanceStatus, JurisdictionKind, PunchMethod, Role
from ..core.exceptions import ValidationError
from ..org.model import Campus, Cluster, Jurisdiction, OrgDirectory, School
from ..shifts.catalog import ShiftCatalog
from ..shifts.model import Shift, ShiftAssignment
from ..users.model import Identity
from .model import Snapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _get(row: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = row.get(key)
        if value is not None and value != "":
            return value
    return default


def _text(row: Mapping[str, Any], *keys: str) -> Optional[str]:
    value = _get(row, *keys)
    return str(value).strip() if value is not None else None


def _minutes(row: Mapping[str, Any], *keys: str) -> int:
    value = _get(row, *keys, default=0)
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def _rows(payload: Mapping[str, Any], *keys: str) -> list[Mapping[str, Any]]:
    rows = _get(payload, *keys, default=[])
    if not isinstance(rows, list):
        raise ValidationError(f"{keys[0]} must be a list")
    return [r for r in rows if isinstance(r, Mapping)]


def _build_all(kind: str, rows: Iterable[Mapping[str, Any]], build: Callable[[Mapping[str, Any]], Optional[T]]) -> tuple:
    out = []
    for row in rows:
        item = build(row)
        if item is None:
            logger.warning("Skipping unusable %s row: %r", kind, row)
            continue
        out.append(item)
    return tuple(out)


def _jurisdiction(row: Mapping[str, Any]) -> Optional[Jurisdiction]:
    raw = row.get("jurisdiction")
    if not isinstance(raw, Mapping):
        return None
    name = _text(raw, "name")
    kind = _text(raw, "kind")
    if not name or not kind:
        return None
    try:
        return Jurisdiction(kind=JurisdictionKind(kind.title()), name=name)
    except ValueError:
        return None


def identity_from_row(row: Mapping[str, Any]) -> Optional[Identity]:
    identity_id = _text(row, "id", "identity_id")
    if not identity_id:
        return None
    return Identity(
        identity_id=identity_id,
        name=_text(row, "name") or identity_id,
        role=Role.parse(row.get("role")),
        assignment=_text(row, "assignment") or "",
        school=_text(row, "school"),
        cluster=_text(row, "cluster"),
        designation=_text(row, "designation") or "",
        jurisdiction=_jurisdiction(row),
        class_id=_text(row, "classId", "class_id"),
        grade_id=_text(row, "gradeId", "grade_id"),
    )


def campus_from_row(row: Mapping[str, Any]) -> Optional[Campus]:
    campus_id = _text(row, "id", "campus_id")
    if not campus_id:
        return None
    return Campus(campus_id=campus_id, name=_text(row, "name") or campus_id)


def cluster_from_row(row: Mapping[str, Any]) -> Optional[Cluster]:
    cluster_id = _text(row, "id", "cluster_id")
    if not cluster_id:
        return None
    return Cluster(
        cluster_id=cluster_id,
        name=_text(row, "name") or cluster_id,
        campus_id=_text(row, "campusId", "campus_id", "parentId"),
    )


def school_from_row(row: Mapping[str, Any]) -> Optional[School]:
    school_id = _text(row, "id", "school_id")
    if not school_id:
        return None
    return School(
        school_id=school_id,
        name=_text(row, "name") or school_id,
        cluster_id=_text(row, "clusterId", "cluster_id", "parentId"),
        cluster_name=_text(row, "clusterName", "cluster_name"),
        campus_id=_text(row, "campusId", "campus_id"),
    )


def shift_from_row(row: Mapping[str, Any]) -> Optional[Shift]:
    shift_id = _text(row, "id", "shift_id")
    if not shift_id:
        return None
    return Shift(
        shift_id=shift_id,
        label=_text(row, "label", "name") or shift_id,
        start_time=_text(row, "startTime", "start_time") or "",
        end_time=_text(row, "endTime", "end_time") or "",
        grace_period_minutes=_minutes(row, "gracePeriod", "gracePeriodMinutes", "grace_period_minutes"),
        early_mark_minutes=_minutes(row, "earlyMarkMinutes", "early_mark_minutes"),
    )


def assignment_from_row(row: Mapping[str, Any]) -> Optional[ShiftAssignment]:
    assignment_id = _text(row, "id", "assignment_id")
    if not assignment_id:
        return None
    try:
        target_type = AssignmentTarget((_text(row, "targetType", "target_type") or "").title())
    except ValueError:
        logger.warning("Assignment %s has unknown target type, skipped", assignment_id)
        return None
    return ShiftAssignment(
        assignment_id=assignment_id,
        target_type=target_type,
        shift_id=_text(row, "shiftId", "shift_id") or "",
        target_id=_text(row, "targetId", "target_id"),
        target_name=_text(row, "targetName", "target_name"),
        assigned_date=iso_date_key(_text(row, "assignedDate", "assigned_date")),
        start_date=iso_date_key(_text(row, "startDate", "start_date")),
        end_date=iso_date_key(_text(row, "endDate", "end_date")),
    )


def record_from_row(row: Mapping[str, Any]) -> Optional[AttendanceRecord]:
    record_id = _text(row, "id", "record_id")
    user_id = _text(row, "userId", "user_id")
    work_date = iso_date_key(_text(row, "date", "work_date"))
    if not record_id or not user_id or not work_date:
        return None
    try:
        method = PunchMethod((_text(row, "method") or PunchMethod.MANUAL.value).title())
    except ValueError:
        method = PunchMethod.MANUAL
    return AttendanceRecord(
        record_id=record_id,
        user_id=user_id,
        work_date=work_date,
        status=AttendanceStatus.parse(row.get("status")),
        clock_in=_text(row, "clockIn", "clock_in"),
        clock_out=_text(row, "clockOut", "clock_out"),
        location=_text(row, "location") or "",
        method=method,
    )


def load_snapshot(payload: Mapping[str, Any]) -> Snapshot:
    if not isinstance(payload, Mapping):
        raise ValidationError("Snapshot payload must be an object")

    org = OrgDirectory(
        campuses=_build_all("campus", _rows(payload, "campuses"), campus_from_row),
        clusters=_build_all("cluster", _rows(payload, "clusters"), cluster_from_row),
        schools=_build_all("school", _rows(payload, "schools"), school_from_row),
    )
    shifts = ShiftCatalog(
        shifts=_build_all("shift", _rows(payload, "shifts"), shift_from_row),
        assignments=_build_all(
            "shift assignment",
            _rows(payload, "shift_assignments", "shiftAssignments"),
            assignment_from_row,
        ),
    )
    return Snapshot(
        identities=_build_all("identity", _rows(payload, "users", "identities"), identity_from_row),
        org=org,
        shifts=shifts,
        attendance=_build_all("attendance", _rows(payload, "attendance"), record_from_row),
    )
