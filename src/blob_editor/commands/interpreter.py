"""Executes one input line of chained single-letter commands."""

from __future__ import annotations

from typing import Optional

from blob_editor.runtime import telemetry
from blob_editor.signals import Signal

from .context import CommandContext
from .registry import CommandTable, default_table

_END_OF_INPUT = frozenset((0x0A, 0x00))


class Interpreter:
    """Scans an input line left to right and dispatches known letters.

    Unknown bytes are skipped. The first signal other than
    ``Signal.CONTINUE`` stops the scan and is returned to the caller.
    """

    def __init__(self, table: Optional[CommandTable] = None) -> None:
        self.table = table if table is not None else default_table()

    def run_line(self, context: CommandContext, line: bytes) -> Signal:
        with telemetry.span(
            "interpreter::run_line",
            component="interpreter",
            metadata={"input": line.rstrip(b"\n")},
        ) as handle:
            executed = 0
            for code in line:
                if code in _END_OF_INPUT:
                    break
                command = self.table.lookup(code)
                if command is None:
                    continue
                executed += 1
                signal = command(context)
                if signal.aborts:
                    handle.add_metadata("aborted_by", command.letter)
                    handle.add_metadata("signal", signal.value)
                    return signal
            handle.add_metadata("executed", executed)
            return Signal.CONTINUE


__all__ = ["Interpreter"]
