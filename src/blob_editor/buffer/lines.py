"""Doubly linked line storage backed by an arena of stable handles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from .chain import CharacterChain
from .validation import BufferValidationError, ensure_handle

LineHandle = int


@dataclass(slots=True)
class Line:
    """A line owns its character chain and knows its neighbours by handle."""

    chain: CharacterChain
    next: Optional[LineHandle] = None
    prev: Optional[LineHandle] = None


class LineBuffer:
    """Arena of :class:`Line` records linked into one ordered document.

    Handles stay valid until their line is unlinked; the freed slot may then
    be reused by a later insertion. An empty document holds no lines at all.
    """

    def __init__(self) -> None:
        self._slots: List[Optional[Line]] = []
        self._free: List[LineHandle] = []
        self._count = 0
        self.first: Optional[LineHandle] = None
        self.last: Optional[LineHandle] = None

    def __len__(self) -> int:
        return self._count

    @property
    def is_empty(self) -> bool:
        return self._count == 0

    def line(self, handle: LineHandle) -> Line:
        ensure_handle(handle, len(self._slots))
        record = self._slots[handle]
        if record is None:
            raise BufferValidationError("Line handle is stale", handle=handle)
        return record

    def chain(self, handle: LineHandle) -> CharacterChain:
        return self.line(handle).chain

    def next(self, handle: LineHandle) -> Optional[LineHandle]:
        return self.line(handle).next

    def prev(self, handle: LineHandle) -> Optional[LineHandle]:
        return self.line(handle).prev

    def append(self, chain: CharacterChain) -> LineHandle:
        """Link a new line after the current last line."""

        if self.last is None:
            return self.insert_after(None, chain)
        return self.insert_after(self.last, chain)

    def insert_after(
        self, anchor: Optional[LineHandle], chain: CharacterChain
    ) -> LineHandle:
        """Link a new line right after ``anchor``.

        ``anchor=None`` is only valid on an empty buffer, where the new line
        becomes the sole line with no links.
        """

        if anchor is None:
            if not self.is_empty:
                raise BufferValidationError("Anchor required for non-empty buffer")
            handle = self._allocate(Line(chain=chain))
            self.first = handle
            self.last = handle
            return handle

        left = self.line(anchor)
        handle = self._allocate(Line(chain=chain, next=left.next, prev=anchor))
        if left.next is None:
            self.last = handle
        else:
            self.line(left.next).prev = handle
        left.next = handle
        return handle

    def unlink(self, handle: LineHandle) -> Line:
        """Detach ``handle``, join its neighbours and release the slot."""

        record = self.line(handle)
        if record.prev is None:
            self.first = record.next
        else:
            self.line(record.prev).next = record.next
        if record.next is None:
            self.last = record.prev
        else:
            self.line(record.next).prev = record.prev

        self._slots[handle] = None
        self._free.append(handle)
        self._count -= 1
        return record

    def iter_handles(self, start: Optional[LineHandle] = None) -> Iterator[LineHandle]:
        handle = self.first if start is None else start
        while handle is not None:
            record = self.line(handle)
            yield handle
            handle = record.next

    def __iter__(self) -> Iterator[CharacterChain]:
        for handle in self.iter_handles():
            yield self.line(handle).chain

    def clear(self) -> None:
        """Release every line and its chain."""

        for record in self._slots:
            if record is not None:
                record.chain.release()
        self._slots.clear()
        self._free.clear()
        self._count = 0
        self.first = None
        self.last = None

    def _allocate(self, record: Line) -> LineHandle:
        self._count += 1
        if self._free:
            handle = self._free.pop()
            self._slots[handle] = record
            return handle
        self._slots.append(record)
        return len(self._slots) - 1


__all__ = ["Line", "LineBuffer", "LineHandle"]
