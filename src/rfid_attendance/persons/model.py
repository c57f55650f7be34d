from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StudentRow:
    """Read-model: a student joined with (at most) one of their sections."""

    person_id: int
    name: str
    rfid_tag: str
    id_number: Optional[str]
    section_name: Optional[str] = None


@dataclass(frozen=True)
class EnrolledStudent:
    """Result of a successful enrollment, echoing the validated input."""

    person_id: int
    name: str
    rfid_tag: str
    section: str
    id_number: str
