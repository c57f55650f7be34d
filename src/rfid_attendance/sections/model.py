from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Section:
    section_id: int
    section_name: str
