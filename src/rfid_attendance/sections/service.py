from __future__ import annotations

from typing import Sequence

from .model import Section
from .repository import SectionRepository


class SectionService:
    def __init__(self, sections: SectionRepository):
        self._sections = sections

    def list_sections(self) -> Sequence[Section]:
        return self._sections.list_all()
