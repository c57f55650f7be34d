from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRow


class AttendanceRepository(Protocol):
    def location_exists(self, classroom_id: int) -> bool:
        raise NotImplementedError

    def record_presence(self, *, person_id: int, classroom_id: int, timestamp: Optional[datetime] = None) -> int:
        """Append one attendance event in its own transaction.

        A None timestamp leaves the column to the database default (insertion time).
        """

        raise NotImplementedError

    def list_records(
        self,
        *,
        on_date: Optional[date] = None,
        section_name: Optional[str] = None,
        classroom_id: Optional[int] = None,
    ) -> Sequence[AttendanceRow]:
        raise NotImplementedError
