from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Section
from .repository import SectionRepository


class MySQLSectionRepository(SectionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT section_id, section_name FROM sections ORDER BY section_name")
            rows = fetchall(cur)
            return [Section(section_id=int(r["section_id"]), section_name=r["section_name"]) for r in rows]
