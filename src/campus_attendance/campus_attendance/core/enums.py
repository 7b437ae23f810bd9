from __future__ import annotations

import re
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Organisational role tiers, highest authority first."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    CAMPUS_HEAD = "CAMPUS_HEAD"
    SCHOOL_ADMIN = "SCHOOL_ADMIN"
    RESOURCE_PERSON = "RESOURCE_PERSON"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"

    @classmethod
    def parse(cls, value) -> Optional["Role"]:
        """Map a raw role value to a Role, or None when it is not recognised.

        Accepts enum members, canonical values, the spaced labels the
        dashboard shows ("Resource Person", "school admin") and CamelCase
        names ("SchoolAdmin").
        """
        if isinstance(value, Role):
            return value
        if not isinstance(value, str):
            return None
        split = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", value.strip())
        key = "_".join(split.upper().replace("-", " ").split())
        try:
            return cls(key)
        except ValueError:
            return None


class AttendanceStatus(str, Enum):
    """Stored attendance status of a record."""

    PRESENT = "Present"
    EARLY = "Early"
    LATE = "Late"
    HALF_DAY = "Half Day"
    ABSENT = "Absent"
    ON_LEAVE = "On Leave"

    @classmethod
    def parse(cls, value) -> Optional["AttendanceStatus"]:
        if isinstance(value, AttendanceStatus):
            return value
        if not isinstance(value, str):
            return None
        wanted = " ".join(value.replace("_", " ").split()).lower()
        for status in cls:
            if status.value.lower() == wanted or status.value.replace(" ", "").lower() == wanted.replace(" ", ""):
                return status
        return None


class PunchMethod(str, Enum):
    TERMINAL = "Terminal"
    PROXY = "Proxy"
    MANUAL = "Manual"


class AssignmentTarget(str, Enum):
    """Who a shift assignment binds to."""

    INDIVIDUAL = "Individual"
    CLASS = "Class"


class JurisdictionKind(str, Enum):
    SCHOOL = "School"
    CLUSTER = "Cluster"
    ROOT = "Root"
