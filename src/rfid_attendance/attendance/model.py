from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model for attendance history (event joined with person, section, room)."""

    attendance_id: int
    timestamp: datetime
    person_id: int
    name: str
    id_number: Optional[str]
    rfid_tag: str
    section_name: Optional[str]
    classroom_id: int
    room_number: Optional[str]


@dataclass(frozen=True)
class VerifiedStudent:
    person_id: int
    name: str
    section: str
    rfid_tag: str
    id_number: Optional[str]
    status: AttendanceStatus = AttendanceStatus.PRESENT


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of one scanned batch.

    ``len(verified) + len(unrecognized) + duplicate_scans == total_scans``.
    """

    total_scans: int
    classroom_id: int
    verified: list[VerifiedStudent] = field(default_factory=list)
    unrecognized: list[str] = field(default_factory=list)
    duplicate_scans: int = 0

    @property
    def message(self) -> str:
        return f"{len(self.verified)} students verified, {len(self.unrecognized)} unrecognized tags"
