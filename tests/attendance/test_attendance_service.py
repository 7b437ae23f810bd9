from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from src.campus_attendance.campus_attendance.attendance.compliance import classify_historical
from src.campus_attendance.campus_attendance.attendance.service import AttendanceService
from src.campus_attendance.campus_attendance.core.enums import AttendanceStatus, PunchMethod
from src.campus_attendance.campus_attendance.core.exceptions import AuthorizationError, ValidationError
from src.campus_attendance.campus_attendance.snapshots.repository import InMemorySnapshotRepository


def _service(snapshot):
    return AttendanceService(InMemorySnapshotRepository(snapshot))


def test_assigned_shift_makes_checkin_late(snapshot):
    # T1 is bound to the 09:00 day shift (grace 15) through February.
    record = _service(snapshot).check_in("T1", now=datetime(2026, 2, 12, 9, 16))

    assert record.status == AttendanceStatus.LATE
    assert record.clock_in == "09:16"
    assert record.work_date == "2026-02-12"
    assert record.location == "Thibyan Central High"
    assert record.method == PunchMethod.TERMINAL


def test_checkin_inside_early_window_is_early(snapshot):
    record = _service(snapshot).check_in("T1", now=datetime(2026, 2, 12, 8, 52))
    assert record.status == AttendanceStatus.EARLY


def test_checkin_without_shift_is_present(snapshot):
    record = _service(snapshot).check_in("T2", now=datetime(2026, 2, 12, 11, 45))
    assert record.status == AttendanceStatus.PRESENT


def test_double_checkin_is_rejected(snapshot):
    with pytest.raises(ValidationError):
        _service(snapshot).check_in("T1", now=datetime(2026, 2, 10, 9, 0))


def test_unknown_identity_is_rejected(snapshot):
    with pytest.raises(ValidationError):
        _service(snapshot).check_in("NOPE", now=datetime(2026, 2, 10, 9, 0))


def test_checkout_before_half_shift_is_half_day(snapshot):
    svc = _service(snapshot)
    opened = svc.check_in("T1", now=datetime(2026, 2, 12, 9, 0))
    svc = _service(replace(snapshot, attendance=tuple(snapshot.attendance) + (opened,)))

    closed = svc.check_out("T1", now=datetime(2026, 2, 12, 12, 0))

    assert closed.clock_out == "12:00"
    assert closed.status == AttendanceStatus.HALF_DAY
    assert closed.record_id == opened.record_id


def test_checkout_requires_open_record(snapshot):
    svc = _service(snapshot)
    with pytest.raises(ValidationError):
        svc.check_out("T1", now=datetime(2026, 2, 12, 17, 0))
    with pytest.raises(ValidationError):
        svc.check_out("T1", now=datetime(2026, 2, 10, 18, 0))


def test_manual_entry_by_school_admin_for_teacher(snapshot):
    record = _service(snapshot).record_manual(
        actor_id="SCA1",
        user_id="T1",
        work_date="2026-02-10",
        status=AttendanceStatus.ON_LEAVE,
    )
    assert record.record_id == "R1"
    assert record.status == AttendanceStatus.ON_LEAVE
    assert record.method == PunchMethod.MANUAL


def test_manual_entry_for_protected_role_is_denied(snapshot):
    with pytest.raises(AuthorizationError):
        _service(snapshot).record_manual(
            actor_id="T1",
            user_id="SCA1",
            work_date="2026-02-10",
            status=AttendanceStatus.PRESENT,
            clock_in="09:00",
        )


def test_manual_entry_validates_clock_values(snapshot):
    with pytest.raises(ValidationError):
        _service(snapshot).record_manual(
            actor_id="SA1",
            user_id="T1",
            work_date="2026-02-10",
            status=AttendanceStatus.PRESENT,
            clock_in="25:00",
        )


def test_review_recomputes_flags_against_current_shift(snapshot):
    review = _service(snapshot).review("R1")
    # Stored as Present, but 09:20 is past the 15 minute grace of the day shift.
    assert review.is_late is True
    assert review.worked_minutes == 460


def test_review_of_unparseable_record(snapshot):
    review = _service(snapshot).review("R4")
    assert (review.is_late, review.is_half_day, review.worked_minutes) == (False, False, 0)


def test_punch_opens_then_closes_the_day(snapshot):
    opened = _service(snapshot).punch("T1", now=datetime(2026, 2, 12, 9, 5))
    assert opened.clock_out is None
    assert opened.status == AttendanceStatus.PRESENT

    later = replace(snapshot, attendance=tuple(snapshot.attendance) + (opened,))
    closed = _service(later).punch("T1", now=datetime(2026, 2, 12, 17, 1))

    assert closed.clock_out == "17:01"
    assert closed.status == AttendanceStatus.PRESENT


def test_punch_after_closed_day_is_rejected(snapshot):
    with pytest.raises(ValidationError):
        _service(snapshot).punch("T1", now=datetime(2026, 2, 10, 18, 0))


def test_review_checks_actor_visibility(snapshot):
    svc = _service(snapshot)
    assert svc.review("R1", actor_id="SCA1").is_late is True
    with pytest.raises(AuthorizationError):
        svc.review("R3", actor_id="T1")


@pytest.mark.parametrize(
    "punched_at, expected",
    [
        (datetime(2026, 2, 12, 9, 15, 30), AttendanceStatus.PRESENT),
        (datetime(2026, 2, 12, 9, 16, 10), AttendanceStatus.LATE),
    ],
)
def test_stored_status_agrees_with_review_of_same_record(snapshot, punched_at, expected):
    record = _service(snapshot).check_in("T1", now=punched_at)
    review = classify_historical(record, snapshot.shifts.get_shift("SH-DAY"))

    assert record.status == expected
    assert review.is_late == (expected == AttendanceStatus.LATE)


def test_checkout_of_record_without_clock_in_is_rejected(snapshot):
    # R3 is an On Leave row with no punches.
    with pytest.raises(ValidationError):
        _service(snapshot).check_out("T2", now=datetime(2026, 2, 10, 17, 0))
