from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRow
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def location_exists(self, classroom_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT classroom_id FROM classrooms WHERE classroom_id=%s", (int(classroom_id),))
            return fetchone(cur) is not None

    def record_presence(self, *, person_id: int, classroom_id: int, timestamp: Optional[datetime] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            if timestamp is None:
                cur.execute(
                    "INSERT INTO attendance (person_id, classroom_id) VALUES (%s,%s)",
                    (int(person_id), int(classroom_id)),
                )
            else:
                cur.execute(
                    "INSERT INTO attendance (person_id, classroom_id, `timestamp`) VALUES (%s,%s,%s)",
                    (int(person_id), int(classroom_id), timestamp),
                )
            return int(cur.lastrowid)

    def list_records(
        self,
        *,
        on_date: Optional[date] = None,
        section_name: Optional[str] = None,
        classroom_id: Optional[int] = None,
    ) -> Sequence[AttendanceRow]:
        clauses = ["1=1"]
        params: list[object] = []

        if on_date is not None:
            clauses.append("DATE(a.`timestamp`)=%s")
            params.append(on_date)
        if section_name is not None:
            clauses.append("s.section_name=%s")
            params.append(section_name)
        if classroom_id is not None:
            clauses.append("a.classroom_id=%s")
            params.append(int(classroom_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    a.attendance_id, a.`timestamp`, a.classroom_id,
                    p.person_id, p.name, p.id_number, p.rfid_tag,
                    s.section_name,
                    c.room_number
                FROM attendance a
                JOIN persons p ON p.person_id = a.person_id
                LEFT JOIN student_sections ss ON ss.person_id = p.person_id
                LEFT JOIN sections s ON s.section_id = ss.section_id
                LEFT JOIN classrooms c ON c.classroom_id = a.classroom_id
                WHERE {where}
                ORDER BY a.`timestamp` DESC, a.attendance_id DESC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceRow(
                    attendance_id=int(r["attendance_id"]),
                    timestamp=r["timestamp"],
                    person_id=int(r["person_id"]),
                    name=r["name"],
                    id_number=r.get("id_number"),
                    rfid_tag=r["rfid_tag"],
                    section_name=r.get("section_name"),
                    classroom_id=int(r["classroom_id"]),
                    room_number=r.get("room_number"),
                )
                for r in rows
            ]
