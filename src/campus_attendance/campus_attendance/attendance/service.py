from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..access.policy import AccessPolicy
from ..common.datetime_utils import format_clock, iso_date_key, now_local, to_minutes
from ..core.constants import DEFAULT_HALF_DAY_THRESHOLD_MINUTES
from ..core.enums import AttendanceStatus, PunchMethod
from ..core.exceptions import AuthorizationError, ValidationError
from ..org.jurisdiction import identity_school
from ..shifts.resolver import ShiftResolver
from ..snapshots.model import Snapshot
from ..snapshots.repository import SnapshotRepository
from ..users.model import Identity
from .compliance import ComplianceReview, classify_clock_out, classify_historical, classify_live
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord


class AttendanceService:
    """Punch flow over the current snapshot.

    The service never writes: every method returns the new or updated record
    and the caller hands it to the attendance store.
    """

    def __init__(
        self,
        snapshots: SnapshotRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        half_day_threshold_minutes: int = DEFAULT_HALF_DAY_THRESHOLD_MINUTES,
    ):
        self._snapshots = snapshots
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._half_day_threshold = int(half_day_threshold_minutes)

    def _identity(self, snapshot: Snapshot, user_id: str) -> Identity:
        identity = snapshot.get_identity(user_id)
        if not identity:
            raise ValidationError("Identity does not exist")
        return identity

    def check_in(
        self,
        user_id: str,
        *,
        now: datetime | None = None,
        method: PunchMethod = PunchMethod.TERMINAL,
    ) -> AttendanceRecord:
        now = now or now_local()
        today = now.date().isoformat()

        snapshot = self._snapshots.load()
        identity = self._identity(snapshot, user_id)
        if snapshot.record_for(user_id, today):
            raise ValidationError("Already clocked in today")

        shift = ShiftResolver(snapshot.shifts).resolve_for(identity, today)
        decision = classify_live(now, shift, factory=self._factory)

        return AttendanceRecord(
            record_id=f"ATT-{user_id}-{today}",
            user_id=user_id,
            work_date=today,
            status=decision.status,
            clock_in=format_clock(now),
            clock_out=None,
            location=identity_school(identity) or identity.assignment,
            method=method,
        )

    def check_out(self, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date().isoformat()

        snapshot = self._snapshots.load()
        identity = self._identity(snapshot, user_id)
        record = snapshot.record_for(user_id, today)
        if not record or not record.clock_in:
            raise ValidationError("Not clocked in today")
        if record.clock_out is not None:
            raise ValidationError("Already clocked out today")

        shift = ShiftResolver(snapshot.shifts).resolve_for(identity, today)
        decision = classify_clock_out(
            record.clock_in,
            now,
            shift,
            current=record.status or AttendanceStatus.PRESENT,
            default_threshold_minutes=self._half_day_threshold,
            factory=self._factory,
        )
        return replace(record, clock_out=format_clock(now), status=decision.status)

    def punch(
        self,
        user_id: str,
        *,
        now: datetime | None = None,
        method: PunchMethod = PunchMethod.TERMINAL,
    ) -> AttendanceRecord:
        """Single-button terminal punch: clocks out an open record, otherwise clocks in."""
        now = now or now_local()
        snapshot = self._snapshots.load()
        record = snapshot.record_for(user_id, now.date().isoformat())
        if record and record.clock_in and not record.clock_out:
            return self.check_out(user_id, now=now)
        return self.check_in(user_id, now=now, method=method)

    def record_manual(
        self,
        *,
        actor_id: str,
        user_id: str,
        work_date: str,
        status: AttendanceStatus,
        clock_in: Optional[str] = None,
        clock_out: Optional[str] = None,
        method: PunchMethod = PunchMethod.MANUAL,
    ) -> AttendanceRecord:
        """Manual or proxy entry; the actor must be allowed to edit the identity."""
        day = iso_date_key(work_date)
        if day is None:
            raise ValidationError("Date must be YYYY-MM-DD")
        for label, value in (("Clock-in", clock_in), ("Clock-out", clock_out)):
            if value and to_minutes(value) is None:
                raise ValidationError(f"{label} must be HH:MM")

        snapshot = self._snapshots.load()
        actor = self._identity(snapshot, actor_id)
        target = self._identity(snapshot, user_id)
        AccessPolicy(snapshot.org).require_edit(actor, target)

        existing = snapshot.record_for(user_id, day)
        return AttendanceRecord(
            record_id=existing.record_id if existing else f"ATT-{user_id}-{day}",
            user_id=user_id,
            work_date=day,
            status=status,
            clock_in=format_clock(clock_in) if clock_in else None,
            clock_out=format_clock(clock_out) if clock_out else None,
            location=existing.location if existing else (identity_school(target) or target.assignment),
            method=method,
        )

    def review(self, record_id: str, *, actor_id: Optional[str] = None) -> ComplianceReview:
        """Recompute compliance flags of a stored record against today's shift bindings.

        With actor_id, the actor must be allowed to view the record's owner.
        """
        snapshot = self._snapshots.load()
        record = next((r for r in snapshot.attendance if r.record_id == record_id), None)
        if not record:
            raise ValidationError("Attendance record does not exist")

        identity = snapshot.get_identity(record.user_id)
        if actor_id is not None:
            actor = self._identity(snapshot, actor_id)
            if identity is None:
                raise AuthorizationError("Not allowed to view this identity")
            AccessPolicy(snapshot.org).require_view(actor, identity)

        resolver = ShiftResolver(snapshot.shifts)
        if identity:
            shift = resolver.resolve_for(identity, record.work_date)
        else:
            shift = resolver.resolve(record.user_id, record.work_date)
        return classify_historical(record, shift)
