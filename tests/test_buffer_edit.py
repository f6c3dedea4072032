import io

import pytest

from blob_editor.buffer import (
    Buffer,
    Cursor,
    DeletionOutcome,
    LineBuffer,
    advance,
    delete_current,
    insert_lines,
    reassign_after_delete,
    text_to_chain,
)
from blob_editor.errors import InputClosedError
from blob_editor.runtime import CancellationToken
from blob_editor.signals import Signal


class CancellingReader:
    """Serves scripted lines and fires the token on the configured read."""

    def __init__(self, lines: list[bytes], token: CancellationToken, *, cancel_on: int):
        self._lines = list(lines)
        self._token = token
        self._cancel_on = cancel_on
        self.reads = 0

    def readline(self) -> bytes:
        self.reads += 1
        if self.reads == self._cancel_on:
            self._token.cancel()
        return self._lines.pop(0) if self._lines else b""


def make_buffer(*rows: bytes) -> LineBuffer:
    lines = LineBuffer()
    for row in rows:
        lines.append(text_to_chain(row))
    return lines


def contents(lines: LineBuffer) -> list[bytes]:
    return [bytes(chain) for chain in lines]


def test_reassign_policy_prefers_next_line() -> None:
    outcome = reassign_after_delete(start=0, deleted=1, following=2, preceding=0)

    assert outcome == DeletionOutcome(start=0, current=2)


def test_reassign_policy_falls_back_to_previous_line() -> None:
    outcome = reassign_after_delete(start=0, deleted=2, following=None, preceding=1)

    assert outcome == DeletionOutcome(start=0, current=1)


def test_reassign_policy_moves_start_with_first_line() -> None:
    outcome = reassign_after_delete(start=0, deleted=0, following=1, preceding=None)

    assert outcome == DeletionOutcome(start=1, current=1)


def test_reassign_policy_empties_cursor_for_last_remaining_line() -> None:
    outcome = reassign_after_delete(start=0, deleted=0, following=None, preceding=None)

    assert outcome == DeletionOutcome(start=None, current=None)


def test_delete_only_line_empties_buffer() -> None:
    lines = make_buffer(b"solo")
    cursor = Cursor(start=lines.first, current=lines.first)

    assert delete_current(lines, cursor) is None
    assert lines.is_empty
    assert cursor.start is None
    assert cursor.current is None


def test_delete_middle_line_relinks_neighbours() -> None:
    lines = make_buffer(b"a", b"b", b"c")
    first, middle, last = lines.iter_handles()
    cursor = Cursor(start=first, current=middle)

    assert delete_current(lines, cursor) == last
    cursor.current = first
    assert advance(lines, cursor) is Signal.CONTINUE
    assert cursor.current == last
    assert contents(lines) == [b"a ", b"c "]


def test_delete_first_line_moves_start() -> None:
    lines = make_buffer(b"a", b"b")
    first, second = lines.iter_handles()
    cursor = Cursor(start=first, current=first)

    delete_current(lines, cursor)

    assert cursor.start == second
    assert cursor.current == second
    assert lines.first == second


def test_delete_last_line_falls_back_to_previous() -> None:
    lines = make_buffer(b"a", b"b")
    first, second = lines.iter_handles()
    cursor = Cursor(start=first, current=second)

    assert delete_current(lines, cursor) == first
    assert cursor.start == first


def test_delete_on_empty_cursor_is_noop() -> None:
    lines = LineBuffer()
    cursor = Cursor()

    assert delete_current(lines, cursor) is None
    assert lines.is_empty


def test_insert_into_empty_buffer_sets_start_and_current() -> None:
    lines = LineBuffer()
    cursor = Cursor()
    token = CancellationToken()
    reader = CancellingReader([b"one\n", b"two\n", b"three\n", b"dropped\n"], token, cancel_on=4)

    assert insert_lines(lines, cursor, reader, token) == 3

    assert contents(lines) == [b"one ", b"two ", b"three "]
    assert cursor.start == lines.first
    assert cursor.current == lines.last


def test_insert_after_current_keeps_following_lines() -> None:
    lines = make_buffer(b"a", b"z")
    cursor = Cursor(start=lines.first, current=lines.first)
    token = CancellationToken()
    reader = CancellingReader([b"b\n", b"c\n", b"x\n"], token, cancel_on=3)

    insert_lines(lines, cursor, reader, token)

    assert contents(lines) == [b"a ", b"b ", b"c ", b"z "]
    assert bytes(lines.chain(cursor.current)) == b"c "


def test_insert_resets_a_stale_cancellation() -> None:
    lines = LineBuffer()
    cursor = Cursor()
    token = CancellationToken()
    token.cancel()
    reader = CancellingReader([b"kept\n", b"dropped\n"], token, cancel_on=2)

    assert insert_lines(lines, cursor, reader, token) == 1
    assert contents(lines) == [b"kept "]


def test_insert_end_of_input_is_fatal() -> None:
    lines = LineBuffer()
    cursor = Cursor()

    with pytest.raises(InputClosedError):
        insert_lines(lines, cursor, io.BytesIO(b"only\n"), CancellationToken())
    assert contents(lines) == [b"only "]


def test_buffer_facade_tracks_current_line() -> None:
    buffer = Buffer.from_text(b"first\nsecond\n")

    buffer.advance()

    assert len(buffer.lines) == 2
    assert buffer.current_text() == b"second "
    assert buffer.text() == b"first \nsecond \n"


def test_buffer_facade_delete_and_close() -> None:
    buffer = Buffer.from_text(b"only\n")

    buffer.delete_current()

    assert buffer.cursor.current is None
    assert buffer.current_text() is None
    buffer.close()
    assert buffer.lines.is_empty


def test_insert_start_hook_runs_after_reset() -> None:
    lines = make_buffer(b"a")
    cursor = Cursor(start=lines.first, current=lines.first)
    token = CancellationToken()
    token.cancel()
    reader = io.BytesIO(b"late\n")

    inserted = insert_lines(lines, cursor, reader, token, on_start=token.cancel)

    assert inserted == 0
    assert reader.read() == b"late\n"
    assert contents(lines) == [b"a "]
