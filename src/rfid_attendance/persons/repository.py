from __future__ import annotations

from typing import ContextManager, Optional, Protocol, Sequence

from ..core.enums import PersonRole
from .model import StudentRow


class EnrollmentTransaction(Protocol):
    """Steps of one enrollment, all running inside the same transaction."""

    def tag_exists(self, rfid_tag: str) -> bool:
        raise NotImplementedError

    def id_number_exists(self, id_number: str) -> bool:
        raise NotImplementedError

    def get_or_create_section(self, section_name: str) -> int:
        raise NotImplementedError

    def insert_person(self, *, name: str, rfid_tag: str, role: PersonRole, id_number: str) -> int:
        """Insert a person row.

        Must raise DuplicateTagError / DuplicateIdentifierError when the
        storage-level uniqueness constraint rejects the row.
        """

        raise NotImplementedError

    def link_student_section(self, *, person_id: int, section_id: int) -> None:
        raise NotImplementedError


class PersonRepository(Protocol):
    def enrollment(self) -> ContextManager[EnrollmentTransaction]:
        """Open a transaction: committed on normal exit, rolled back on any exception."""

        raise NotImplementedError

    def find_students_by_tags(self, rfid_tags: Sequence[str]) -> Sequence[StudentRow]:
        raise NotImplementedError

    def list_students(self, *, section_name: Optional[str] = None) -> Sequence[StudentRow]:
        raise NotImplementedError
