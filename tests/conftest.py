from __future__ import annotations

import pytest

from src.campus_attendance.campus_attendance.attendance.model import AttendanceRecord
from src.campus_attendance.campus_attendance.core.enums import (
    AssignmentTarget,
    AttendanceStatus,
    PunchMethod,
    Role,
)
from src.campus_attendance.campus_attendance.org.model import Campus, Cluster, OrgDirectory, School
from src.campus_attendance.campus_attendance.shifts.catalog import ShiftCatalog
from src.campus_attendance.campus_attendance.shifts.model import Shift, ShiftAssignment
from src.campus_attendance.campus_attendance.snapshots.model import Snapshot
from src.campus_attendance.campus_attendance.users.model import Identity


@pytest.fixture
def org() -> OrgDirectory:
    return OrgDirectory(
        campuses=(Campus(campus_id="CMP-1", name="Malappuram Campus"),),
        clusters=(
            Cluster(cluster_id="CL-1", name="TIRUR CLUSTER", campus_id="CMP-1"),
            Cluster(cluster_id="CL-2", name="PONNANI CLUSTER", campus_id="CMP-1"),
        ),
        schools=(
            School(school_id="SCH-1", name="Thibyan Central High", cluster_id="CL-1", cluster_name="TIRUR CLUSTER"),
            School(school_id="SCH-2", name="Ponnani Model School", cluster_id="CL-2", cluster_name="PONNANI CLUSTER"),
            School(school_id="SCH-3", name="Orphan School", cluster_name="GHOST CLUSTER"),
        ),
    )


@pytest.fixture
def people() -> dict[str, Identity]:
    rows = [
        Identity(identity_id="SA1", name="Root Admin", role=Role.SUPER_ADMIN, assignment="ROOT"),
        Identity(identity_id="A1", name="Asha", role=Role.ADMIN, assignment="ROOT"),
        Identity(identity_id="CH1", name="Campus Head", role=Role.CAMPUS_HEAD, assignment="Malappuram Campus"),
        Identity(identity_id="SCA1", name="School Admin", role=Role.SCHOOL_ADMIN, assignment="Thibyan Central High"),
        Identity(identity_id="RP1", name="Rafeeq", role=Role.RESOURCE_PERSON, assignment="Thibyan Central High"),
        Identity(identity_id="RP2", name="Ponnani RP", role=Role.RESOURCE_PERSON, assignment="ponnani  cluster"),
        Identity(identity_id="RP3", name="Lost RP", role=Role.RESOURCE_PERSON, assignment="Nowhere"),
        Identity(
            identity_id="T1",
            name="Teacher One",
            role=Role.TEACHER,
            assignment="Thibyan Central High",
            school="Thibyan Central High",
            designation="Grade 10 A",
        ),
        Identity(identity_id="T2", name="Teacher Two", role=Role.TEACHER, assignment="Ponnani Model School"),
        Identity(
            identity_id="ST1",
            name="Student One",
            role=Role.STUDENT,
            school="thibyan central high",
            designation="Grade 10 A",
        ),
        Identity(identity_id="ST2", name="Student Two", role=Role.STUDENT, cluster="PONNANI CLUSTER"),
        Identity(identity_id="X1", name="Mystery", role=None, assignment="Thibyan Central High"),
    ]
    return {p.identity_id: p for p in rows}


@pytest.fixture
def shifts() -> ShiftCatalog:
    return ShiftCatalog(
        shifts=(
            Shift(
                shift_id="SH-DAY",
                label="Day Shift",
                start_time="09:00",
                end_time="17:00",
                grace_period_minutes=15,
                early_mark_minutes=10,
            ),
            Shift(shift_id="SH-MORN", label="Morning Shift", start_time="08:00", end_time="13:00", grace_period_minutes=5),
        ),
        assignments=(
            ShiftAssignment(
                assignment_id="AS-1",
                target_type=AssignmentTarget.INDIVIDUAL,
                target_id="T1",
                shift_id="SH-DAY",
                start_date="2026-02-01",
                end_date="2026-02-28",
            ),
            ShiftAssignment(
                assignment_id="AS-2",
                target_type=AssignmentTarget.CLASS,
                target_name="Grade 10",
                shift_id="SH-MORN",
                start_date="2026-02-01",
                end_date="2026-02-28",
            ),
        ),
    )


@pytest.fixture
def snapshot(org, people, shifts) -> Snapshot:
    return Snapshot(
        identities=tuple(people.values()),
        org=org,
        shifts=shifts,
        attendance=(
            AttendanceRecord(
                record_id="R1",
                user_id="T1",
                work_date="2026-02-10",
                status=AttendanceStatus.PRESENT,
                clock_in="09:20",
                clock_out="17:00",
                method=PunchMethod.TERMINAL,
            ),
            AttendanceRecord(
                record_id="R2",
                user_id="ST1",
                work_date="2026-02-10",
                status=AttendanceStatus.PRESENT,
                clock_in="08:00",
                clock_out="09:30",
            ),
            AttendanceRecord(
                record_id="R3",
                user_id="T2",
                work_date="2026-02-10",
                status=AttendanceStatus.ON_LEAVE,
            ),
            AttendanceRecord(
                record_id="R4",
                user_id="T1",
                work_date="2026-02-11",
                status=AttendanceStatus.LATE,
                clock_in="9:x",
            ),
        ),
    )
