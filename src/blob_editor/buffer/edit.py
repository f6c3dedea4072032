"""Line insertion and deletion against a cursor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from blob_editor.errors import InputClosedError
from blob_editor.runtime.cancellation import CancellationToken

from .lines import LineBuffer, LineHandle
from .serializer import text_to_chain
from .state import Cursor


class LineReader(Protocol):
    """Anything that yields one raw line per call and ``b""`` at end of input."""

    def readline(self) -> bytes:
        ...


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    start: Optional[LineHandle]
    current: Optional[LineHandle]


def reassign_after_delete(
    start: Optional[LineHandle],
    deleted: LineHandle,
    following: Optional[LineHandle],
    preceding: Optional[LineHandle],
) -> DeletionOutcome:
    """Pick the cursor after ``deleted`` is removed.

    ``start`` moves to ``following`` when the first line goes away. The new
    current line prefers ``following``, then ``preceding``, then nothing.
    """

    new_start = following if start == deleted else start
    if following is not None:
        return DeletionOutcome(start=new_start, current=following)
    if preceding is not None:
        return DeletionOutcome(start=new_start, current=preceding)
    return DeletionOutcome(start=new_start, current=None)


def delete_current(lines: LineBuffer, cursor: Cursor) -> Optional[LineHandle]:
    """Remove the current line and return the new current handle."""

    deleted = cursor.current
    if deleted is None:
        return None
    record = lines.line(deleted)
    outcome = reassign_after_delete(cursor.start, deleted, record.next, record.prev)
    lines.unlink(deleted).chain.release()
    cursor.start = outcome.start
    cursor.current = outcome.current
    return outcome.current


def insert_lines(
    lines: LineBuffer,
    cursor: Cursor,
    reader: LineReader,
    cancellation: CancellationToken,
    on_start: Optional[Callable[[], None]] = None,
) -> int:
    """Insert lines read from ``reader`` after the cursor until cancelled.

    The token is reset on entry, before ``on_start`` runs, and checked again
    after each read, so a line that was pending when cancellation arrived is
    discarded. End of input while waiting is fatal.
    """

    cancellation.reset()
    if on_start is not None:
        on_start()
    inserted = 0
    while not cancellation.cancelled:
        raw = reader.readline()
        if not raw:
            raise InputClosedError()
        if cancellation.cancelled:
            break

        handle = lines.insert_after(cursor.current, text_to_chain(raw))
        if cursor.current is None:
            cursor.start = handle
        cursor.current = handle
        inserted += 1
    return inserted


__all__ = [
    "DeletionOutcome",
    "LineReader",
    "delete_current",
    "insert_lines",
    "reassign_after_delete",
]
