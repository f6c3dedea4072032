"""Outcomes returned by command execution."""

from __future__ import annotations

from enum import Enum


class Signal(str, Enum):
    """Control signal accumulated while interpreting one input line."""

    CONTINUE = "continue"
    END_OF_BUFFER = "end_of_buffer"
    START_OF_BUFFER = "start_of_buffer"
    QUIT = "quit"

    @property
    def aborts(self) -> bool:
        return self is not Signal.CONTINUE


__all__ = ["Signal"]
