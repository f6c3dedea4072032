from __future__ import annotations

import io
from pathlib import Path
from typing import List, Optional

import pytest

from blob_editor.buffer import Buffer
from blob_editor.commands import (
    CommandContext,
    CommandEntry,
    CommandTable,
    DEFAULT_COMMANDS,
    Interpreter,
    Signal,
    default_table,
)
from blob_editor.console import Console
from blob_editor.errors import InputClosedError


def make_context(
    text: bytes = b"",
    *,
    stdin: bytes = b"",
    path: Optional[Path] = None,
) -> CommandContext:
    buffer = Buffer.from_text(text)
    return CommandContext(
        buffer=buffer,
        console=Console(reader=io.BytesIO(stdin), writer=io.BytesIO()),
        path=path or Path("unused.txt"),
        help_text=default_table().help_text(),
    )


def output(context: CommandContext) -> bytes:
    writer = context.console.writer
    assert isinstance(writer, io.BytesIO)
    return writer.getvalue()


def test_default_table_covers_every_command_letter() -> None:
    assert sorted(entry.letter for entry in DEFAULT_COMMANDS) == sorted("nbpildqwh")


def test_table_rejects_duplicate_letters() -> None:
    table = default_table()

    with pytest.raises(ValueError):
        table.register(CommandEntry("n", lambda ctx: Signal.CONTINUE, "again"))


def test_command_entry_requires_single_letter() -> None:
    with pytest.raises(ValueError):
        CommandEntry("nn", lambda ctx: Signal.CONTINUE, "bad")


def test_print_current_line() -> None:
    context = make_context(b"alpha\nbeta\n")

    assert Interpreter().run_line(context, b"p\n") is Signal.CONTINUE
    assert output(context) == b"alpha \n"


def test_print_on_empty_buffer_emits_newline() -> None:
    context = make_context()

    Interpreter().run_line(context, b"p\n")

    assert output(context) == b"\n"


def test_list_prints_whole_buffer() -> None:
    context = make_context(b"one\ntwo\n")

    Interpreter().run_line(context, b"nl\n")

    assert output(context) == b"one \ntwo \n"


class CancelAfter:
    """Reader that hands out lines and cancels insertion on the n-th read."""

    def __init__(self, context: CommandContext, lines: List[bytes], cancel_on: int):
        self._context = context
        self._lines = list(lines)
        self._cancel_on = cancel_on
        self._reads = 0

    def readline(self) -> bytes:
        self._reads += 1
        if self._reads == self._cancel_on:
            self._context.cancellation.cancel()
        return self._lines.pop(0) if self._lines else b""


def test_npi_advances_prints_then_inserts() -> None:
    context = make_context(b"first\nsecond\n")
    context.console.reader = CancelAfter(context, [b"third\n", b"ignored\n"], 2)

    assert Interpreter().run_line(context, b"npi\n") is Signal.CONTINUE

    assert output(context) == b"second \n"
    assert context.buffer.text() == b"first \nsecond \nthird \n"
    assert context.buffer.current_text() == b"third "


def test_insert_hitting_end_of_input_is_fatal() -> None:
    context = make_context(b"first\n", stdin=b"more\n")

    with pytest.raises(InputClosedError):
        Interpreter().run_line(context, b"i\n")
    assert context.buffer.text() == b"first \nmore \n"


def test_failed_advance_aborts_rest_of_line() -> None:
    context = make_context(b"first\nsecond\n", stdin=b"never read\n")
    context.buffer.advance()

    signal = Interpreter().run_line(context, b"npi\n")

    assert signal is Signal.END_OF_BUFFER
    assert output(context) == b""
    assert context.console.readline() == b"never read\n"


def test_failed_retreat_reports_start() -> None:
    context = make_context(b"first\n")

    assert Interpreter().run_line(context, b"bp\n") is Signal.START_OF_BUFFER
    assert output(context) == b""


def test_quit_aborts_even_with_trailing_commands() -> None:
    context = make_context(b"first\n")

    assert Interpreter().run_line(context, b"qp\n") is Signal.QUIT
    assert output(context) == b""


def test_unknown_characters_are_skipped() -> None:
    context = make_context(b"first\n")

    assert Interpreter().run_line(context, b"x?zp\n") is Signal.CONTINUE
    assert output(context) == b"first \n"


def test_scan_stops_at_newline_and_nul() -> None:
    context = make_context(b"first\n")

    Interpreter().run_line(context, b"p\x00p\n")
    Interpreter().run_line(context, b"p\np")

    assert output(context) == b"first \nfirst \n"


def test_delete_only_line_then_print() -> None:
    context = make_context(b"only\n")

    Interpreter().run_line(context, b"dp\n")

    assert context.buffer.lines.is_empty
    assert context.buffer.cursor.start is None
    assert output(context) == b"\n"


def test_write_stores_buffer(tmp_path: Path) -> None:
    target = tmp_path / "doc.txt"
    context = make_context(b"keep\n", path=target)
    events: List[object] = []
    context.bus.subscribe("buffer.write", events.append)

    Interpreter().run_line(context, b"w\n")

    assert target.read_bytes() == b"keep \n"
    assert events == [target]


def test_help_lists_commands() -> None:
    context = make_context()

    Interpreter().run_line(context, b"h\n")

    text = output(context)
    for entry in DEFAULT_COMMANDS:
        assert f"'{entry.letter}' ({entry.name})".encode() in text


def test_custom_table_only_dispatches_registered_letters() -> None:
    calls: List[str] = []
    table = CommandTable(
        [CommandEntry("p", lambda ctx: calls.append("p") or Signal.CONTINUE, "print")]
    )
    context = make_context(b"first\n")

    Interpreter(table).run_line(context, b"npq\n")

    assert calls == ["p"]
