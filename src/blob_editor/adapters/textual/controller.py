"""Adapter running an EditorSession behind Textual-friendly callbacks."""

from __future__ import annotations

import codecs
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from blob_editor.buffer.serializer import PathLike
from blob_editor.commands import EventBus, Signal
from blob_editor.config import EditorConfig
from blob_editor.console import Console, QueueLineReader
from blob_editor.errors import EditorFatalError
from blob_editor.runtime import telemetry
from blob_editor.runtime.cancellation import CancellationToken
from blob_editor.session import EXIT_FAILURE, EditorSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets.

    They are called from the session thread; the host is responsible for
    marshalling onto its own event loop.
    """

    write_output: Callable[[str], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    session_ended: Callable[[int], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class _HookWriter:
    """Byte sink that decodes session output and forwards it as text."""

    def __init__(self, hooks: TextualUIHooks) -> None:
        self._hooks = hooks
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def write(self, data: bytes) -> int:
        text = self._decoder.decode(data)
        if text:
            self._hooks.write_output(text)
        return len(data)

    def flush(self) -> None:
        return None


class TextualSessionAdapter:
    """Bridges widget input and bus events to a background EditorSession."""

    def __init__(
        self,
        path: PathLike,
        hooks: TextualUIHooks,
        *,
        config: Optional[EditorConfig] = None,
    ) -> None:
        self.hooks = hooks
        self.reader = QueueLineReader()
        self.cancellation = CancellationToken()
        self.bus = EventBus()
        self.session = EditorSession(
            path,
            console=Console(reader=self.reader, writer=_HookWriter(hooks)),
            config=config,
            cancellation=self.cancellation,
            bus=self.bus,
        )
        self.exit_code: Optional[int] = None
        self._inserting = False
        self._thread: Optional[threading.Thread] = None
        self._subscribe_events()

    @property
    def inserting(self) -> bool:
        return self._inserting

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self.run, name="blob-session", daemon=True
        )
        self._thread.start()

    def run(self) -> int:
        """Run the session to completion on the calling thread."""

        try:
            code = self.session.run()
        except EditorFatalError as exc:
            telemetry.record_event("session.fatal", level="error", data={"error": exc})
            self.hooks.write_output(f"\nblob: {exc}\n")
            code = EXIT_FAILURE
        finally:
            self._inserting = False
        self.exit_code = code
        self._log_state("session <-", exit_code=code)
        self.hooks.session_ended(code)
        return code

    def join(self, timeout: Optional[float] = None) -> Optional[int]:
        if self._thread is not None:
            self._thread.join(timeout)
        return self.exit_code

    def submit(self, text: str) -> None:
        """Queue one line typed by the user."""

        self._log_state("line ->", text=text)
        self.reader.feed(text.encode("utf-8"))

    def cancel_insertion(self) -> None:
        """Stop insertion mode; the pending read is unblocked and discarded."""

        self.cancellation.cancel()
        if self._inserting:
            self.reader.feed(b"\n")
        self._log_state("cancel ->")

    def close_input(self) -> None:
        self.reader.close()

    def _subscribe_events(self) -> None:
        for event in (
            "buffer.load",
            "buffer.write",
            "buffer.delete",
            "insert.start",
            "insert.end",
            "session.signal",
            "session.close",
        ):
            self.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        if name == "insert.start":
            self._inserting = True
            self.hooks.update_status("INSERT (ctrl+c to stop)")
        elif name == "insert.end":
            self._inserting = False
            self.hooks.update_status(f"inserted {payload} line(s)")
        elif name == "buffer.write":
            self.hooks.update_status(f"wrote {payload}")
        elif name == "buffer.load":
            self.hooks.update_status(f"{self.session.path}: {payload} line(s)")
        elif name == "session.signal" and isinstance(payload, Signal):
            if payload is not Signal.CONTINUE:
                self.hooks.update_status(payload.value)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "path": str(self.session.path),
            "inserting": self._inserting,
            "cancelled": self.cancellation.cancelled,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = ["TextualSessionAdapter", "TextualUIHooks"]
