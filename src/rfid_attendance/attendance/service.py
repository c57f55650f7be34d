from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_positive_int, optional_text, require_token_list
from ..core.constants import DEFAULT_LOCATION_ID, UNKNOWN_SECTION_LABEL
from ..core.exceptions import LocationNotFoundError, ValidationError
from ..persons.model import StudentRow
from ..persons.repository import PersonRepository
from .model import AttendanceRow, VerificationResult, VerifiedStudent
from .repository import AttendanceRepository


class VerificationService:
    """Use case: reconcile a batch of scanned RFID tags against the roster.

    Each matched student gets exactly one attendance event per call, however
    many times their tag appears in the batch. Events are inserted one by one,
    so a storage failure mid-batch can leave the earlier events recorded.
    Without an explicit ``now`` the database clock stamps each event.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        persons: PersonRepository,
        *,
        default_location_id: int = DEFAULT_LOCATION_ID,
    ):
        self._attendance = attendance
        self._persons = persons
        self._default_location_id = int(default_location_id)

    def verify(self, tokens: Any, *, location_id: Any = None, now: datetime | None = None) -> VerificationResult:
        tags = require_token_list(tokens)
        classroom_id = optional_positive_int(location_id, "classroom_id") or self._default_location_id

        if not tags:
            return VerificationResult(total_scans=0, classroom_id=classroom_id)

        if not self._attendance.location_exists(classroom_id):
            raise LocationNotFoundError(classroom_id)

        distinct_tags = list(dict.fromkeys(tags))
        by_tag: dict[str, StudentRow] = {}
        for row in self._persons.find_students_by_tags(distinct_tags):
            # Rows come ordered by section name; first one wins for multi-section students.
            by_tag.setdefault(row.rfid_tag, row)

        verified = [self._to_verified(by_tag[tag]) for tag in distinct_tags if tag in by_tag]
        unrecognized = [tag for tag in tags if tag not in by_tag]

        for student in verified:
            self._attendance.record_presence(person_id=student.person_id, classroom_id=classroom_id, timestamp=now)

        return VerificationResult(
            total_scans=len(tags),
            classroom_id=classroom_id,
            verified=verified,
            unrecognized=unrecognized,
            duplicate_scans=len(tags) - len(verified) - len(unrecognized),
        )

    @staticmethod
    def _to_verified(row: StudentRow) -> VerifiedStudent:
        return VerifiedStudent(
            person_id=row.person_id,
            name=row.name,
            section=row.section_name or UNKNOWN_SECTION_LABEL,
            rfid_tag=row.rfid_tag,
            id_number=row.id_number,
        )


class AttendanceHistoryService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def list_records(
        self,
        *,
        date: Optional[Any] = None,
        section_name: Optional[Any] = None,
        location_id: Optional[Any] = None,
    ) -> Sequence[AttendanceRow]:
        on_date = None
        date_text = optional_text(date)
        if date_text is not None:
            try:
                on_date = parse_iso_date(date_text)
            except ValueError:
                raise ValidationError("Invalid date, expected YYYY-MM-DD")

        return self._attendance.list_records(
            on_date=on_date,
            section_name=optional_text(section_name),
            classroom_id=optional_positive_int(location_id, "classroom_id"),
        )
