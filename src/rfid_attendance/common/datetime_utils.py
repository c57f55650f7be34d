from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_iso(value: datetime | date | None) -> str | None:
    return value.isoformat() if value is not None else None
