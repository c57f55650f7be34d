from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import (
    DuplicateError,
    DuplicateIdentifierError,
    DuplicateTagError,
    SectionConflictError,
    StorageError,
)
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Constraint names declared in schema.sql; MySQL echoes them in ER_DUP_ENTRY messages.
TAG_CONSTRAINT = "uq_persons_rfid_tag"
ID_NUMBER_CONSTRAINT = "uq_persons_id_number"
SECTION_CONSTRAINT = "uq_sections_section_name"


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, with_database: bool = True):
    """Yield ``(conn, cursor)`` inside one transaction.

    Commits when the block exits normally and rolls back on any exception.
    Driver errors other than integrity violations are re-raised as StorageError;
    integrity errors pass through so callers can map them to domain errors.
    """

    try:
        conn = conn_factory.connect(with_database=with_database)
    except mysql.connector.Error as e:
        raise StorageError(f"Cannot connect to database: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError:
        _rollback(conn)
        raise
    except mysql.connector.Error as e:
        _rollback(conn)
        raise StorageError(f"Database operation failed: {e}") from e
    except Exception:
        _rollback(conn)
        raise
    finally:
        conn.close()


def _rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error:
        # The original error is what the caller needs to see.
        logger.warning("Rollback failed on a broken connection", exc_info=True)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_placeholders(values) -> str:
    """Build ``%s,%s,...`` for an IN (...) clause."""
    return ",".join(["%s"] * len(values))


def duplicate_error_for(err: mysql.connector.Error) -> Optional[DuplicateError]:
    """Map a MySQL duplicate-key error to the matching domain error.

    Returns None when ``err`` is not a duplicate-key violation.
    """

    if getattr(err, "errno", None) != errorcode.ER_DUP_ENTRY:
        return None
    message = str(getattr(err, "msg", "") or "")
    if TAG_CONSTRAINT in message:
        return DuplicateTagError()
    if ID_NUMBER_CONSTRAINT in message:
        return DuplicateIdentifierError()
    if SECTION_CONSTRAINT in message:
        return SectionConflictError()
    return DuplicateError()
