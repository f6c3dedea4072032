"""Per-line character storage as an index-linked chain of bytes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional


@dataclass(slots=True)
class Character:
    """One byte plus links to its neighbours inside the owning chain."""

    value: int
    next: Optional[int] = None
    prev: Optional[int] = None


class CharacterChain:
    """Doubly linked byte sequence holding the content of a single line.

    Cells live in a private arena and point at each other by index, so a
    chain can only ever link to its own characters. No trailing newline is
    stored.
    """

    __slots__ = ("_cells", "head", "tail")

    def __init__(self, values: Iterable[int] = ()) -> None:
        self._cells: List[Character] = []
        self.head: Optional[int] = None
        self.tail: Optional[int] = None
        for value in values:
            self.append(value)

    def append(self, value: int) -> int:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"character value out of byte range: {value}")
        index = len(self._cells)
        self._cells.append(Character(value=value, prev=self.tail))
        if self.tail is None:
            self.head = index
        else:
            self._cells[self.tail].next = index
        self.tail = index
        return index

    def cell(self, index: int) -> Character:
        return self._cells[index]

    def __iter__(self) -> Iterator[int]:
        index = self.head
        while index is not None:
            cell = self._cells[index]
            yield cell.value
            index = cell.next

    def __reversed__(self) -> Iterator[int]:
        index = self.tail
        while index is not None:
            cell = self._cells[index]
            yield cell.value
            index = cell.prev

    def __len__(self) -> int:
        return len(self._cells)

    def __bytes__(self) -> bytes:
        return bytes(iter(self))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CharacterChain):
            return NotImplemented
        return bytes(self) == bytes(other)

    def __repr__(self) -> str:
        return f"CharacterChain({bytes(self)!r})"

    def release(self) -> None:
        self._cells.clear()
        self.head = None
        self.tail = None


__all__ = ["Character", "CharacterChain"]
