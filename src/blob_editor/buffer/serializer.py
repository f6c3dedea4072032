"""Conversion between raw text lines and the in-memory buffer."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from blob_editor.errors import SinkWriteError, SourceReadError
from blob_editor.runtime import telemetry

from .chain import CharacterChain
from .lines import LineBuffer, LineHandle

PathLike = Union[str, os.PathLike]

NEWLINE = 0x0A
NUL = 0x00
SPACE = 0x20

_TERMINATORS = frozenset((NEWLINE, NUL))


def text_to_chain(raw: bytes) -> CharacterChain:
    """Build a chain from one raw line.

    Scanning stops at a newline, a NUL byte or the end of ``raw``. A single
    space is always appended after the real content, so an empty line
    becomes a one-space sentinel chain.
    """

    # NOTE: the synthesized trailing space is part of the on-disk round trip
    # and probably unintended. Keep it until someone confirms otherwise.
    chain = CharacterChain()
    for value in raw:
        if value in _TERMINATORS:
            break
        chain.append(value)
    chain.append(SPACE)
    return chain


def chain_to_text(chain: CharacterChain) -> bytes:
    return bytes(chain) + b"\n"


def buffer_to_text(lines: LineBuffer, start: Optional[LineHandle] = None) -> bytes:
    """Flatten every line from ``start`` (default: the first line) onwards."""

    if lines.is_empty:
        return b""
    return b"".join(
        chain_to_text(lines.chain(handle)) for handle in lines.iter_handles(start)
    )


def load_buffer(path: PathLike) -> LineBuffer:
    """Read ``path`` into a new buffer, creating an empty file if missing."""

    source = Path(path)
    lines = LineBuffer()
    with telemetry.span(
        "buffer::load", component="serializer", metadata={"path": source}
    ) as handle:
        try:
            with source.open("rb") as stream:
                for raw in stream:
                    lines.append(text_to_chain(raw))
        except FileNotFoundError:
            _create_empty(source)
            handle.add_metadata("created", True)
        except OSError as exc:
            raise SourceReadError(source, exc) from exc
        handle.add_metadata("lines", len(lines))
    return lines


def store_buffer(path: PathLike, lines: LineBuffer) -> None:
    """Overwrite ``path`` with the flattened buffer.

    A failure halfway through leaves the sink truncated; nothing is rolled
    back.
    """

    sink = Path(path)
    with telemetry.span(
        "buffer::store",
        component="serializer",
        metadata={"path": sink, "lines": len(lines)},
    ):
        try:
            with sink.open("wb") as stream:
                for chain in lines:
                    stream.write(chain_to_text(chain))
        except OSError as exc:
            raise SinkWriteError(sink, exc) from exc


def _create_empty(source: Path) -> None:
    try:
        with source.open("w+b"):
            pass
    except OSError as exc:
        raise SourceReadError(source, exc) from exc


__all__ = [
    "text_to_chain",
    "chain_to_text",
    "buffer_to_text",
    "load_buffer",
    "store_buffer",
]
