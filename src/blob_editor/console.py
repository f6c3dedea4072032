"""Byte-level terminal plumbing used by the session loop."""

from __future__ import annotations

import queue
import sys
from dataclasses import dataclass
from typing import Optional, Protocol

from blob_editor.buffer.edit import LineReader


class ByteWriter(Protocol):
    def write(self, data: bytes) -> object:
        ...

    def flush(self) -> None:
        ...


@dataclass(slots=True)
class Console:
    """Pairs a line reader with a byte writer."""

    reader: LineReader
    writer: ByteWriter

    @classmethod
    def from_stdio(cls) -> "Console":
        return cls(reader=sys.stdin.buffer, writer=sys.stdout.buffer)

    def readline(self) -> bytes:
        return self.reader.readline()

    def write(self, data: bytes) -> None:
        self.writer.write(data)

    def flush(self) -> None:
        self.writer.flush()


class QueueLineReader:
    """Blocking reader fed from another thread, e.g. a UI input widget."""

    def __init__(self) -> None:
        self._queue: "queue.Queue[Optional[bytes]]" = queue.Queue()
        self._closed = False

    def feed(self, line: bytes) -> None:
        if not line.endswith(b"\n"):
            line += b"\n"
        self._queue.put(line)

    def close(self) -> None:
        self._queue.put(None)

    def readline(self) -> bytes:
        if self._closed:
            return b""
        item = self._queue.get()
        if item is None:
            self._closed = True
            return b""
        return item


__all__ = ["ByteWriter", "Console", "QueueLineReader"]
