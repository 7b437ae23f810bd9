from __future__ import annotations

import calendar
from datetime import date
from typing import Optional

from ..common.validators import same_token
from ..core.constants import UNASSIGNED_SHIFT_SHORT_LABEL
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ValidationError
from ..org.jurisdiction import identity_cluster, identity_school, in_cluster
from ..shifts.resolver import ShiftResolver
from ..snapshots.model import Snapshot
from ..snapshots.repository import SnapshotRepository
from ..users.model import Identity

ATTENDED = frozenset(
    {AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.EARLY, AttendanceStatus.HALF_DAY}
)
AWAY = frozenset({AttendanceStatus.ABSENT, AttendanceStatus.ON_LEAVE})


class DashboardService:
    """Role-specific headline numbers for the landing dashboard."""

    def __init__(self, snapshots: SnapshotRepository):
        self._snapshots = snapshots

    def stats(self, *, actor_id: str, today: Optional[date] = None) -> dict:
        today = today or date.today()
        snapshot = self._snapshots.load()
        actor = snapshot.get_identity(actor_id)
        if not actor:
            raise ValidationError("Actor does not exist")

        if actor.role == Role.TEACHER:
            return self._teacher_stats(snapshot, actor, today)
        if actor.role == Role.RESOURCE_PERSON:
            return self._cluster_stats(snapshot, actor)
        if actor.role == Role.SCHOOL_ADMIN:
            return self._school_stats(snapshot, actor, today)
        if actor.role is None:
            return {}
        return {
            "campuses": len(snapshot.org.campuses),
            "clusters": len(snapshot.org.clusters),
            "schools": len(snapshot.org.schools),
            "users": len(snapshot.identities),
        }

    def _teacher_stats(self, snapshot: Snapshot, actor: Identity, today: date) -> dict:
        month_prefix = today.strftime("%Y-%m-")
        days_in_month = calendar.monthrange(today.year, today.month)[1]

        mine = [r for r in snapshot.attendance if r.user_id == actor.identity_id and r.work_date.startswith(month_prefix)]
        attended = sum(1 for r in mine if r.status in ATTENDED)
        leaves = sum(1 for r in mine if r.status in AWAY)

        shift = ShiftResolver(snapshot.shifts).resolve_for(actor, today)
        return {
            "monthly_attendance": f"{attended}/{days_in_month}",
            "monthly_leaves": leaves,
            "today_shift": shift.label if shift else UNASSIGNED_SHIFT_SHORT_LABEL,
        }

    def _cluster_stats(self, snapshot: Snapshot, actor: Identity) -> dict:
        scope = identity_cluster(actor, snapshot.org)
        if not scope.verified:
            return {"cluster": None, "schools": 0, "faculty": 0, "students": 0}

        members = [i for i in snapshot.identities if in_cluster(i, scope.cluster_name, snapshot.org)]
        return {
            "cluster": scope.cluster_name,
            "schools": len(snapshot.org.schools_in_cluster(scope.cluster_name)),
            "faculty": sum(1 for i in members if i.role == Role.TEACHER),
            "students": sum(1 for i in members if i.role == Role.STUDENT),
        }

    def _school_stats(self, snapshot: Snapshot, actor: Identity, today: date) -> dict:
        school = identity_school(actor)
        school_users = [
            u
            for u in snapshot.identities
            if school and (same_token(u.assignment, school) or same_token(u.school, school))
        ]
        student_ids = {u.identity_id for u in school_users if u.role == Role.STUDENT}
        staff_ids = {u.identity_id for u in school_users if u.role != Role.STUDENT}

        todays = [r for r in snapshot.attendance if r.work_date == today.isoformat()]

        def _count(ids: set, statuses: frozenset) -> int:
            return sum(1 for r in todays if r.user_id in ids and r.status in statuses)

        return {
            "school": school or None,
            "total_students": len(student_ids),
            "total_staff": len(staff_ids),
            "student_present": _count(student_ids, ATTENDED),
            "student_leaves": _count(student_ids, AWAY),
            "staff_present": _count(staff_ids, ATTENDED),
            "staff_leaves": _count(staff_ids, AWAY),
        }
