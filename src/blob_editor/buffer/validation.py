"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Optional


class BufferValidationError(RuntimeError):
    """Raised when a caller hands the buffer a stale or foreign line handle."""

    def __init__(self, message: str, *, handle: Optional[int] = None) -> None:
        super().__init__(message)
        self.handle = handle


def ensure_handle(handle: int, slot_count: int) -> int:
    if handle < 0 or handle >= slot_count:
        raise BufferValidationError("Line handle out of range", handle=handle)
    return handle


__all__ = ["BufferValidationError", "ensure_handle"]
