"""One action per command letter."""

from __future__ import annotations

from blob_editor.runtime import telemetry
from blob_editor.signals import Signal

from .context import CommandContext


def next_line(context: CommandContext) -> Signal:
    return context.buffer.advance()


def previous_line(context: CommandContext) -> Signal:
    return context.buffer.retreat()


def print_line(context: CommandContext) -> Signal:
    context.console.write((context.buffer.current_text() or b"") + b"\n")
    return Signal.CONTINUE


def insert_lines(context: CommandContext) -> Signal:
    def announce() -> None:
        # The cancellation token is already cleared here.
        context.bus.emit("insert.start", None)
        # The prompt is not re-issued while inserting; push out anything pending.
        context.console.flush()

    count = context.buffer.insert_from(
        context.console, context.cancellation, on_start=announce
    )
    context.bus.emit("insert.end", count)
    return Signal.CONTINUE


def list_buffer(context: CommandContext) -> Signal:
    context.console.write(context.buffer.text())
    return Signal.CONTINUE


def delete_line(context: CommandContext) -> Signal:
    current = context.buffer.delete_current()
    context.bus.emit("buffer.delete", current)
    return Signal.CONTINUE


def quit_session(context: CommandContext) -> Signal:
    del context
    return Signal.QUIT


def write_buffer(context: CommandContext) -> Signal:
    context.buffer.store(context.path)
    telemetry.record_event(
        "buffer.write",
        data={"path": context.path, "lines": len(context.buffer.lines)},
    )
    context.bus.emit("buffer.write", context.path)
    return Signal.CONTINUE


def show_help(context: CommandContext) -> Signal:
    context.console.write(context.help_text)
    return Signal.CONTINUE


__all__ = [
    "next_line",
    "previous_line",
    "print_line",
    "insert_lines",
    "list_buffer",
    "delete_line",
    "quit_session",
    "write_buffer",
    "show_help",
]
