"""Cooperative cancellation for insertion mode.

The core never touches signal plumbing: it only polls a
:class:`CancellationToken`. :func:`interrupt_cancels` is the shim that
wires ``SIGINT`` to the token for the lifetime of a session.
"""

from __future__ import annotations

import signal
import threading
from contextlib import contextmanager
from typing import Any, Iterator


class CancellationToken:
    """Process-wide "stop inserting" flag."""

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def reset(self) -> None:
        self._event.clear()


@contextmanager
def interrupt_cancels(
    token: CancellationToken, *, signum: int = signal.SIGINT
) -> Iterator[CancellationToken]:
    """Route ``signum`` to ``token.cancel`` until the block exits.

    A blocking read is resumed after the handler runs, so the flag is only
    observed once the pending line has been read.
    """

    def _handler(received: int, frame: Any) -> None:
        del received, frame
        token.cancel()

    previous = signal.signal(signum, _handler)
    try:
        yield token
    finally:
        signal.signal(signum, previous)


__all__ = ["CancellationToken", "interrupt_cancels"]
