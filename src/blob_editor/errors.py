"""Fatal error taxonomy for the editor session."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class EditorFatalError(RuntimeError):
    """Base class for failures that end the session with a failure status."""


class SourceReadError(EditorFatalError):
    """Raised when the source exists but cannot be read (or created)."""

    def __init__(self, path: Path, cause: Optional[OSError] = None) -> None:
        detail = f": {cause.strerror}" if cause and cause.strerror else ""
        super().__init__(f"cannot read '{path}'{detail}")
        self.path = path


class SinkWriteError(EditorFatalError):
    """Raised when the buffer cannot be written back to its sink."""

    def __init__(self, path: Path, cause: Optional[OSError] = None) -> None:
        detail = f": {cause.strerror}" if cause and cause.strerror else ""
        super().__init__(f"cannot write '{path}'{detail}")
        self.path = path


class InputClosedError(EditorFatalError):
    """Raised when input ends while insertion mode is waiting for a line."""

    def __init__(self) -> None:
        super().__init__("end of input during insertion")


__all__ = [
    "EditorFatalError",
    "SourceReadError",
    "SinkWriteError",
    "InputClosedError",
]
