from __future__ import annotations

from enum import Enum


class PersonRole(str, Enum):
    """Role stored on persons; only students are matched by verification."""

    STUDENT = "student"
    TEACHER = "teacher"


class AttendanceStatus(str, Enum):
    """Status label reported for a recognized scan."""

    PRESENT = "Present"
