from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceHistoryService, VerificationService
from .core.constants import DEFAULT_LOCATION_ID, DEFAULT_ROOM_NUMBER, DEFAULT_SECTIONS
from .database.bootstrap import SchemaBootstrap
from .database.connection import DBConfig, DatabaseConnection
from .persons.mysql_person_repository import MySQLPersonRepository
from .persons.service import EnrollmentService, StudentService
from .sections.mysql_section_repository import MySQLSectionRepository
from .sections.service import SectionService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    persons_repo: MySQLPersonRepository
    sections_repo: MySQLSectionRepository
    attendance_repo: MySQLAttendanceRepository

    schema: SchemaBootstrap
    enrollment_service: EnrollmentService
    student_service: StudentService
    section_service: SectionService
    verification_service: VerificationService
    attendance_history_service: AttendanceHistoryService


def build_container(
    *,
    db_config: dict,
    default_location_id: int = DEFAULT_LOCATION_ID,
    default_room_number: str = DEFAULT_ROOM_NUMBER,
    default_sections: Sequence[str] = DEFAULT_SECTIONS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    persons_repo = MySQLPersonRepository(conn)
    sections_repo = MySQLSectionRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    return Container(
        conn=conn,
        persons_repo=persons_repo,
        sections_repo=sections_repo,
        attendance_repo=attendance_repo,
        schema=SchemaBootstrap(
            conn,
            default_room_number=default_room_number,
            default_sections=default_sections,
        ),
        enrollment_service=EnrollmentService(persons_repo),
        student_service=StudentService(persons_repo),
        section_service=SectionService(sections_repo),
        verification_service=VerificationService(
            attendance_repo,
            persons_repo,
            default_location_id=default_location_id,
        ),
        attendance_history_service=AttendanceHistoryService(attendance_repo),
    )
