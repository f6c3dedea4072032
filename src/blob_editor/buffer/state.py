"""Cursor state tied to a LineBuffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .lines import LineHandle


@dataclass(slots=True)
class Cursor:
    """``start`` is the first line, ``current`` the line commands address."""

    start: Optional[LineHandle] = None
    current: Optional[LineHandle] = None

    @property
    def is_empty(self) -> bool:
        return self.current is None

    def reset(self, start: Optional[LineHandle]) -> None:
        self.start = start
        self.current = start
