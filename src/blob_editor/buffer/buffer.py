"""High-level buffer façade combining line storage, cursor and persistence."""

from __future__ import annotations

import io
from contextlib import AbstractContextManager
from typing import Callable, ContextManager, Optional

from blob_editor.runtime import telemetry
from blob_editor.runtime.cancellation import CancellationToken
from blob_editor.signals import Signal

from . import edit, navigation, serializer
from .lines import LineBuffer, LineHandle
from .serializer import PathLike
from .state import Cursor


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        lines: Optional[LineBuffer] = None,
        cursor: Optional[Cursor] = None,
    ) -> None:
        self.name = name
        self.lines = lines if lines is not None else LineBuffer()
        self.cursor = cursor or Cursor(start=self.lines.first, current=self.lines.first)

    @classmethod
    def from_text(cls, text: bytes, *, name: str = "default") -> "Buffer":
        lines = LineBuffer()
        for raw in io.BytesIO(text):
            lines.append(serializer.text_to_chain(raw))
        return cls(name=name, lines=lines)

    @classmethod
    def load(cls, path: PathLike) -> "Buffer":
        return cls(name=str(path), lines=serializer.load_buffer(path))

    def store(self, path: PathLike) -> None:
        serializer.store_buffer(path, self.lines)

    def current_text(self) -> Optional[bytes]:
        if self.cursor.current is None:
            return None
        return bytes(self.lines.chain(self.cursor.current))

    def text(self) -> bytes:
        return serializer.buffer_to_text(self.lines, self.cursor.start)

    def advance(self) -> Signal:
        return navigation.advance(self.lines, self.cursor)

    def retreat(self) -> Signal:
        return navigation.retreat(self.lines, self.cursor)

    def insert_from(
        self,
        reader: edit.LineReader,
        cancellation: CancellationToken,
        *,
        on_start: Optional[Callable[[], None]] = None,
    ) -> int:
        with Transaction(self, "insert") as tx:
            count = edit.insert_lines(
                self.lines, self.cursor, reader, cancellation, on_start
            )
            tx.note("inserted", count)
        return count

    def delete_current(self) -> Optional[LineHandle]:
        with Transaction(self, "delete") as tx:
            tx.note("handle", self.cursor.current)
            return edit.delete_current(self.lines, self.cursor)

    def close(self) -> None:
        self.lines.clear()
        self.cursor.reset(None)


class Transaction(AbstractContextManager["Transaction"]):
    """Telemetry span wrapped around a single buffer mutation."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def note(self, key: str, value: object) -> None:
        if self._handle is not None:
            self._handle.add_metadata(key, value)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._handle is not None:
            self._handle.add_metadata("lines", len(self.buffer.lines))
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Transaction"]
