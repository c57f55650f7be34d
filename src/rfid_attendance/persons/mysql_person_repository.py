from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

import mysql.connector

from ..core.enums import PersonRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_error_for, fetchall, fetchone, in_placeholders
from .model import StudentRow
from .repository import EnrollmentTransaction, PersonRepository

_STUDENT_COLUMNS = """
    SELECT p.person_id, p.name, p.rfid_tag, p.id_number, s.section_name
    FROM persons p
    LEFT JOIN student_sections ss ON ss.person_id = p.person_id
    LEFT JOIN sections s ON s.section_id = ss.section_id
"""


def _to_row(r: dict) -> StudentRow:
    return StudentRow(
        person_id=int(r["person_id"]),
        name=r["name"],
        rfid_tag=r["rfid_tag"],
        id_number=r.get("id_number"),
        section_name=r.get("section_name"),
    )


class MySQLEnrollmentTransaction(EnrollmentTransaction):
    def __init__(self, cur):
        self._cur = cur

    def tag_exists(self, rfid_tag: str) -> bool:
        self._cur.execute("SELECT person_id FROM persons WHERE rfid_tag=%s", (rfid_tag,))
        return fetchone(self._cur) is not None

    def id_number_exists(self, id_number: str) -> bool:
        self._cur.execute("SELECT person_id FROM persons WHERE id_number=%s", (id_number,))
        return fetchone(self._cur) is not None

    def get_or_create_section(self, section_name: str) -> int:
        self._cur.execute("SELECT section_id FROM sections WHERE section_name=%s", (section_name,))
        row = fetchone(self._cur)
        if row:
            return int(row["section_id"])
        # Racy against a concurrent enrollment with the same new section;
        # the loser surfaces as a SectionConflictError.
        self._insert("INSERT INTO sections (section_name) VALUES (%s)", (section_name,))
        return int(self._cur.lastrowid)

    def insert_person(self, *, name: str, rfid_tag: str, role: PersonRole, id_number: str) -> int:
        self._insert(
            "INSERT INTO persons (name, rfid_tag, role, id_number) VALUES (%s,%s,%s,%s)",
            (name, rfid_tag, role.value, id_number),
        )
        return int(self._cur.lastrowid)

    def link_student_section(self, *, person_id: int, section_id: int) -> None:
        self._insert(
            "INSERT INTO student_sections (person_id, section_id) VALUES (%s,%s)",
            (int(person_id), int(section_id)),
        )

    def _insert(self, sql: str, params: tuple) -> None:
        try:
            self._cur.execute(sql, params)
        except mysql.connector.IntegrityError as e:
            duplicate = duplicate_error_for(e)
            if duplicate is None:
                raise
            raise duplicate from e


class MySQLPersonRepository(PersonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def enrollment(self) -> Iterator[MySQLEnrollmentTransaction]:
        with db_cursor(self._conn_factory) as (_, cur):
            yield MySQLEnrollmentTransaction(cur)

    def find_students_by_tags(self, rfid_tags: Sequence[str]) -> Sequence[StudentRow]:
        tags = list(rfid_tags)
        if not tags:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _STUDENT_COLUMNS
                + f"""
                WHERE p.rfid_tag IN ({in_placeholders(tags)}) AND p.role=%s
                ORDER BY p.person_id, s.section_name
                """,
                tuple(tags) + (PersonRole.STUDENT.value,),
            )
            return [_to_row(r) for r in fetchall(cur)]

    def list_students(self, *, section_name: Optional[str] = None) -> Sequence[StudentRow]:
        clauses = ["p.role=%s"]
        params: list[object] = [PersonRole.STUDENT.value]

        if section_name is not None:
            clauses.append("s.section_name=%s")
            params.append(section_name)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _STUDENT_COLUMNS
                + f"""
                WHERE {where}
                ORDER BY p.name
                """,
                tuple(params),
            )
            return [_to_row(r) for r in fetchall(cur)]
