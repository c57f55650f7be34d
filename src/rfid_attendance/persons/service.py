from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.validators import optional_text, require_fields, require_max_length
from ..core.constants import (
    MAX_ID_NUMBER_LENGTH,
    MAX_NAME_LENGTH,
    MAX_RFID_TAG_LENGTH,
    MAX_SECTION_NAME_LENGTH,
)
from ..core.enums import PersonRole
from ..core.exceptions import DuplicateIdentifierError, DuplicateTagError
from .model import EnrolledStudent, StudentRow
from .repository import PersonRepository

_FIELD_LIMITS = {
    "name": MAX_NAME_LENGTH,
    "rfid_tag": MAX_RFID_TAG_LENGTH,
    "section": MAX_SECTION_NAME_LENGTH,
    "id_number": MAX_ID_NUMBER_LENGTH,
}


class EnrollmentService:
    """Use case: register a new student and link them to a section.

    The tag/ID pre-checks are an early exit only; the unique constraints behind
    ``insert_person`` are what actually guarantee uniqueness under concurrency.
    """

    def __init__(self, persons: PersonRepository):
        self._persons = persons

    def enroll(self, *, name: Any, rfid_tag: Any, section: Any, id_number: Any) -> EnrolledStudent:
        fields = require_fields(
            {"name": name, "rfid_tag": rfid_tag, "section": section, "id_number": id_number}
        )
        for field_name, max_len in _FIELD_LIMITS.items():
            require_max_length(fields[field_name], field_name, max_len)

        with self._persons.enrollment() as tx:
            if tx.tag_exists(fields["rfid_tag"]):
                raise DuplicateTagError()
            if tx.id_number_exists(fields["id_number"]):
                raise DuplicateIdentifierError()

            section_id = tx.get_or_create_section(fields["section"])
            person_id = tx.insert_person(
                name=fields["name"],
                rfid_tag=fields["rfid_tag"],
                role=PersonRole.STUDENT,
                id_number=fields["id_number"],
            )
            tx.link_student_section(person_id=person_id, section_id=section_id)

        return EnrolledStudent(
            person_id=person_id,
            name=fields["name"],
            rfid_tag=fields["rfid_tag"],
            section=fields["section"],
            id_number=fields["id_number"],
        )


class StudentService:
    def __init__(self, persons: PersonRepository):
        self._persons = persons

    def list_students(self, *, section_name: Optional[Any] = None) -> Sequence[StudentRow]:
        return self._persons.list_students(section_name=optional_text(section_name))
