"""Cursor movement with boundary detection."""

from __future__ import annotations

from blob_editor.signals import Signal

from .lines import LineBuffer
from .state import Cursor


def advance(lines: LineBuffer, cursor: Cursor) -> Signal:
    if cursor.current is None:
        return Signal.END_OF_BUFFER
    following = lines.next(cursor.current)
    if following is None:
        return Signal.END_OF_BUFFER
    cursor.current = following
    return Signal.CONTINUE


def retreat(lines: LineBuffer, cursor: Cursor) -> Signal:
    if cursor.current is None:
        return Signal.START_OF_BUFFER
    preceding = lines.prev(cursor.current)
    if preceding is None:
        return Signal.START_OF_BUFFER
    cursor.current = preceding
    return Signal.CONTINUE


__all__ = ["advance", "retreat"]
