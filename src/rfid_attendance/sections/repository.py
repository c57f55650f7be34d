from __future__ import annotations

from typing import Protocol, Sequence

from .model import Section


class SectionRepository(Protocol):
    def list_all(self) -> Sequence[Section]:
        raise NotImplementedError
