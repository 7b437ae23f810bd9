from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Union

from ..access.policy import AccessPolicy
from ..attendance.compliance import classify_historical
from ..common.datetime_utils import format_clock, iso_date_key, parse_iso_date
from ..core.constants import UNASSIGNED_SHIFT_LABEL
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..shifts.model import Shift
from ..shifts.resolver import ShiftResolver
from ..snapshots.repository import SnapshotRepository


def _require_date(value: Union[str, date], field_name: str) -> str:
    key = iso_date_key(value)
    if key is None:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")
    return key


class AttendanceLedgerService:
    """Presence ledger and weekly roster, limited to what the actor may see."""

    def __init__(self, snapshots: SnapshotRepository):
        self._snapshots = snapshots

    def build_ledger(
        self,
        *,
        actor_id: str,
        start: Union[str, date],
        end: Union[str, date],
        user_id: Optional[str] = None,
    ) -> list[dict]:
        start_key = _require_date(start, "start")
        end_key = _require_date(end, "end")
        if end_key < start_key:
            raise ValidationError("end must not be before start")

        snapshot = self._snapshots.load()
        actor = snapshot.get_identity(actor_id)
        if not actor:
            raise ValidationError("Actor does not exist")

        policy = AccessPolicy(snapshot.org)
        resolver = ShiftResolver(snapshot.shifts)

        rows = []
        for r in snapshot.records_between(start_key, end_key):
            if user_id and r.user_id != user_id:
                continue
            owner = snapshot.get_identity(r.user_id)
            if not owner or not policy.can_view(actor, owner):
                continue

            shift = resolver.resolve_for(owner, r.work_date)
            review = classify_historical(r, shift)
            rows.append(
                {
                    "record_id": r.record_id,
                    "user_id": r.user_id,
                    "user_name": owner.name,
                    "date": r.work_date,
                    "clock_in": format_clock(r.clock_in),
                    "clock_out": format_clock(r.clock_out),
                    "status": r.status.value if r.status else "Unknown",
                    "method": r.method.value,
                    "location": r.location or "-",
                    "shift_label": shift.label if shift else UNASSIGNED_SHIFT_LABEL,
                    "is_late": review.is_late,
                    "is_half_day": review.is_half_day,
                    "worked_minutes": review.worked_minutes,
                    "worked_hours": f"{review.worked_hours:.1f}",
                }
            )

        rows.sort(key=lambda x: x["user_name"])
        rows.sort(key=lambda x: x["date"], reverse=True)
        return rows

    def weekly_roster(self, *, actor_id: str, week_of: Union[str, date]) -> dict:
        """Shift label per visible staff identity for the Monday-Sunday week containing week_of."""
        anchor = parse_iso_date(_require_date(week_of, "week_of"))
        monday = anchor - timedelta(days=anchor.weekday())
        days = [(monday + timedelta(days=i)).isoformat() for i in range(7)]

        snapshot = self._snapshots.load()
        actor = snapshot.get_identity(actor_id)
        if not actor:
            raise ValidationError("Actor does not exist")

        policy = AccessPolicy(snapshot.org)
        resolver = ShiftResolver(snapshot.shifts)

        rows = []
        for identity in policy.filter_visible(actor, snapshot.identities):
            # Roster covers faculty and staff only.
            if identity.role == Role.STUDENT:
                continue
            cells = []
            for day in days:
                shift = resolver.resolve_for(identity, day)
                cells.append(
                    {
                        "date": day,
                        "shift_id": shift.shift_id if shift else None,
                        "shift_label": shift.label if shift else None,
                    }
                )
            rows.append(
                {
                    "id": identity.identity_id,
                    "name": identity.name,
                    "role": identity.role.value if identity.role else None,
                    "days": cells,
                }
            )

        return {"week_start": days[0], "week_end": days[-1], "days": days, "rows": rows}

    def shift_for(self, *, actor_id: str, user_id: str, work_date: Union[str, date]) -> Optional[Shift]:
        """Shift governing user_id on work_date, if the actor may see that identity."""
        day = _require_date(work_date, "date")

        snapshot = self._snapshots.load()
        actor = snapshot.get_identity(actor_id)
        if not actor:
            raise ValidationError("Actor does not exist")
        target = snapshot.get_identity(user_id)
        if not target:
            raise ValidationError("Identity does not exist")

        AccessPolicy(snapshot.org).require_view(actor, target)
        return ShiftResolver(snapshot.shifts).resolve_for(target, day)
