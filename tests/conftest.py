from __future__ import annotations

import copy
from contextlib import contextmanager
from datetime import date, datetime
from typing import Optional

import pytest

from rfid_attendance.attendance.model import AttendanceRow
from rfid_attendance.attendance.service import AttendanceHistoryService, VerificationService
from rfid_attendance.container import Container
from rfid_attendance.core.enums import PersonRole
from rfid_attendance.core.exceptions import DuplicateIdentifierError, DuplicateTagError, StorageError
from rfid_attendance.persons.model import StudentRow
from rfid_attendance.persons.service import EnrollmentService, StudentService
from rfid_attendance.sections.model import Section
from rfid_attendance.sections.service import SectionService


class InMemoryEnrollment:
    def __init__(self, roster: "InMemoryRoster"):
        self._roster = roster

    def tag_exists(self, rfid_tag: str) -> bool:
        self._roster.calls.append("tag_exists")
        if self._roster.skip_prechecks:
            return False
        return any(p["rfid_tag"] == rfid_tag for p in self._roster.persons.values())

    def id_number_exists(self, id_number: str) -> bool:
        self._roster.calls.append("id_number_exists")
        if self._roster.skip_prechecks:
            return False
        return any(p["id_number"] == id_number for p in self._roster.persons.values())

    def get_or_create_section(self, section_name: str) -> int:
        for section_id, name in self._roster.sections.items():
            if name == section_name:
                return section_id
        return self._roster.add_section(section_name)

    def insert_person(self, *, name: str, rfid_tag: str, role: PersonRole, id_number: str) -> int:
        # Same guarantees as the UNIQUE constraints in schema.sql.
        if any(p["rfid_tag"] == rfid_tag for p in self._roster.persons.values()):
            raise DuplicateTagError()
        if any(p["id_number"] == id_number for p in self._roster.persons.values()):
            raise DuplicateIdentifierError()
        return self._roster.add_person(name=name, rfid_tag=rfid_tag, id_number=id_number, role=role)

    def link_student_section(self, *, person_id: int, section_id: int) -> None:
        if self._roster.fail_on_link:
            raise StorageError("connection lost while linking")
        self._roster.links.add((person_id, section_id))


class InMemoryRoster:
    """Fake store backing the person, section and attendance repositories at once."""

    def __init__(self):
        self.persons: dict[int, dict] = {}
        self.sections: dict[int, str] = {}
        self.links: set[tuple[int, int]] = set()
        self.classrooms: dict[int, str] = {1: "Default Room"}
        self.events: list[dict] = []
        self.calls: list[str] = []

        self.storage_down = False
        self.skip_prechecks = False
        self.fail_on_link = False
        self._next_id = 1

    # -------- helpers for arranging test data --------
    def _new_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def add_section(self, name: str) -> int:
        section_id = self._new_id()
        self.sections[section_id] = name
        return section_id

    def add_person(self, *, name: str, rfid_tag: str, id_number: Optional[str], role: PersonRole = PersonRole.STUDENT, section: Optional[str] = None) -> int:
        person_id = self._new_id()
        self.persons[person_id] = {"name": name, "rfid_tag": rfid_tag, "id_number": id_number, "role": role}
        if section is not None:
            section_id = next((sid for sid, n in self.sections.items() if n == section), None) or self.add_section(section)
            self.links.add((person_id, section_id))
        return person_id

    def _ensure_up(self) -> None:
        if self.storage_down:
            raise StorageError("database unreachable")

    def _student_rows(self) -> list[StudentRow]:
        rows = []
        for person_id, p in self.persons.items():
            if p["role"] != PersonRole.STUDENT:
                continue
            names = sorted(self.sections[sid] for pid, sid in self.links if pid == person_id) or [None]
            for section_name in names:
                rows.append(
                    StudentRow(
                        person_id=person_id,
                        name=p["name"],
                        rfid_tag=p["rfid_tag"],
                        id_number=p["id_number"],
                        section_name=section_name,
                    )
                )
        return rows

    # -------- PersonRepository --------
    @contextmanager
    def enrollment(self):
        self._ensure_up()
        self.calls.append("enrollment")
        snapshot = (copy.deepcopy(self.persons), dict(self.sections), set(self.links), self._next_id)
        try:
            yield InMemoryEnrollment(self)
        except Exception:
            self.persons, self.sections, self.links, self._next_id = snapshot
            raise

    def find_students_by_tags(self, rfid_tags):
        self._ensure_up()
        self.calls.append("find_students_by_tags")
        wanted = set(rfid_tags)
        rows = [r for r in self._student_rows() if r.rfid_tag in wanted]
        return sorted(rows, key=lambda r: (r.person_id, r.section_name or ""))

    def list_students(self, *, section_name=None):
        self._ensure_up()
        rows = self._student_rows()
        if section_name is not None:
            rows = [r for r in rows if r.section_name == section_name]
        return sorted(rows, key=lambda r: r.name)

    # -------- SectionRepository --------
    def list_all(self):
        self._ensure_up()
        return [Section(section_id=sid, section_name=name) for sid, name in sorted(self.sections.items(), key=lambda kv: kv[1])]

    # -------- AttendanceRepository --------
    def location_exists(self, classroom_id: int) -> bool:
        self._ensure_up()
        self.calls.append("location_exists")
        return classroom_id in self.classrooms

    def record_presence(self, *, person_id: int, classroom_id: int, timestamp: Optional[datetime] = None) -> int:
        self._ensure_up()
        timestamp = timestamp or datetime.now()
        attendance_id = len(self.events) + 1
        self.events.append(
            {"attendance_id": attendance_id, "person_id": person_id, "classroom_id": classroom_id, "timestamp": timestamp}
        )
        return attendance_id

    def list_records(self, *, on_date: Optional[date] = None, section_name=None, classroom_id=None):
        self._ensure_up()
        rows = []
        for e in self.events:
            p = self.persons[e["person_id"]]
            sections = [self.sections[sid] for pid, sid in self.links if pid == e["person_id"]] or [None]
            for name in sections:
                rows.append(
                    AttendanceRow(
                        attendance_id=e["attendance_id"],
                        timestamp=e["timestamp"],
                        person_id=e["person_id"],
                        name=p["name"],
                        id_number=p["id_number"],
                        rfid_tag=p["rfid_tag"],
                        section_name=name,
                        classroom_id=e["classroom_id"],
                        room_number=self.classrooms.get(e["classroom_id"]),
                    )
                )
        if on_date is not None:
            rows = [r for r in rows if r.timestamp.date() == on_date]
        if section_name is not None:
            rows = [r for r in rows if r.section_name == section_name]
        if classroom_id is not None:
            rows = [r for r in rows if r.classroom_id == classroom_id]
        return sorted(rows, key=lambda r: (r.timestamp, r.attendance_id), reverse=True)


class FakeSchema:
    def __init__(self, roster: InMemoryRoster, sections=("CS-A", "CS-B")):
        self._roster = roster
        self._sections = sections
        self.runs = 0

    def initialize(self) -> list[str]:
        self._roster._ensure_up()
        self.runs += 1
        if not self._roster.sections:
            for name in self._sections:
                self._roster.add_section(name)
        return ["attendance", "classrooms", "persons", "schedule", "sections", "student_sections", "teacher_sections"]


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 30, 0)


@pytest.fixture
def roster() -> InMemoryRoster:
    return InMemoryRoster()


@pytest.fixture
def container(roster: InMemoryRoster) -> Container:
    return Container(
        conn=None,
        persons_repo=roster,
        sections_repo=roster,
        attendance_repo=roster,
        schema=FakeSchema(roster),
        enrollment_service=EnrollmentService(roster),
        student_service=StudentService(roster),
        section_service=SectionService(roster),
        verification_service=VerificationService(roster, roster, default_location_id=1),
        attendance_history_service=AttendanceHistoryService(roster),
    )


@pytest.fixture
def app(container: Container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from rfid_attendance.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
