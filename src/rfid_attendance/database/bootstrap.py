from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Sequence

from ..core.constants import DEFAULT_ROOM_NUMBER, DEFAULT_SECTIONS
from .connection import DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().with_name("schema.sql")


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def load_schema_statements(schema_path: str | Path = SCHEMA_PATH) -> list[str]:
    sql = Path(schema_path).read_text(encoding="utf-8")
    sql = _strip_line_comments(_strip_create_db_and_use(sql))
    return list(_iter_sql_statements(sql))


class SchemaBootstrap:
    """Idempotent schema creation plus seed rows.

    Safe to run on every startup: tables use CREATE TABLE IF NOT EXISTS, the
    default classroom is inserted only when missing and default sections only
    when the sections table is empty.
    """

    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        default_room_number: str = DEFAULT_ROOM_NUMBER,
        default_sections: Sequence[str] = DEFAULT_SECTIONS,
        schema_path: str | Path = SCHEMA_PATH,
    ):
        self._conn_factory = conn_factory
        self._default_room_number = default_room_number
        self._default_sections = tuple(default_sections)
        self._schema_path = Path(schema_path)

    def initialize(self) -> list[str]:
        self.ensure_database_exists()
        self.apply_schema()
        self.seed_defaults()
        tables = self.list_tables()
        logger.info("Schema ready for %s (tables=%d)", self._conn_factory.config.database, len(tables))
        return tables

    def ensure_database_exists(self) -> None:
        database = self._conn_factory.config.database
        with db_cursor(self._conn_factory, dictionary=False, with_database=False) as (_, cur):
            cur.execute(
                f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
            )

    def apply_schema(self) -> None:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            for stmt in load_schema_statements(self._schema_path):
                cur.execute(stmt)

    def seed_defaults(self) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO classrooms (room_number)
                SELECT %s FROM DUAL
                WHERE NOT EXISTS (SELECT 1 FROM classrooms WHERE room_number=%s)
                """,
                (self._default_room_number, self._default_room_number),
            )

            cur.execute("SELECT COUNT(*) AS total FROM sections")
            row = cur.fetchone()
            if int(row["total"]) == 0 and self._default_sections:
                cur.executemany(
                    "INSERT INTO sections (section_name) VALUES (%s)",
                    [(name,) for name in self._default_sections],
                )
                logger.info("Seeded %d default sections", len(self._default_sections))

    def list_tables(self) -> list[str]:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("SHOW TABLES")
            return [row[0] for row in cur.fetchall()]
