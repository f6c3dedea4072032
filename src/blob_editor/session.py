"""Prompt loop hosting a single open document."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from blob_editor.buffer import Buffer
from blob_editor.buffer.serializer import PathLike
from blob_editor.commands import CommandContext, EventBus, Interpreter
from blob_editor.config import EditorConfig
from blob_editor.console import Console
from blob_editor.runtime import telemetry
from blob_editor.runtime.cancellation import CancellationToken
from blob_editor.signals import Signal

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class EditorSession:
    """Owns the buffer for one document from load until teardown."""

    def __init__(
        self,
        path: PathLike,
        *,
        console: Optional[Console] = None,
        config: Optional[EditorConfig] = None,
        cancellation: Optional[CancellationToken] = None,
        bus: Optional[EventBus] = None,
        interpreter: Optional[Interpreter] = None,
    ) -> None:
        self.path = Path(path)
        self.console = console or Console.from_stdio()
        self.config = config or EditorConfig()
        self.cancellation = cancellation or CancellationToken()
        self.bus = bus or EventBus()
        self.interpreter = interpreter or Interpreter()
        self.logger = telemetry.get_logger("blob_editor.session")
        self.context: Optional[CommandContext] = None

    @property
    def buffer(self) -> Buffer:
        if self.context is None:
            raise RuntimeError("Session has not been opened")
        return self.context.buffer

    def open(self) -> Buffer:
        buffer = Buffer.load(self.path)
        self.context = CommandContext(
            buffer=buffer,
            console=self.console,
            path=self.path,
            cancellation=self.cancellation,
            bus=self.bus,
            help_text=self.interpreter.table.help_text(),
        )
        self.logger.info(f"opened {self.path} ({len(buffer.lines)} lines)")
        self.bus.emit("buffer.load", len(buffer.lines))
        return buffer

    def run(self) -> int:
        """Prompt, interpret and repeat until quit or end of input."""

        if self.context is None:
            self.open()
        assert self.context is not None
        try:
            return self._loop(self.context)
        finally:
            self.close()

    def _loop(self, context: CommandContext) -> int:
        prompt = self.config.prompt.encode("utf-8")
        while True:
            self.console.write(prompt)
            self.console.flush()
            line = self.console.readline()
            if not line:
                self.logger.info("end of input at prompt")
                return EXIT_SUCCESS

            signal = self.interpreter.run_line(context, line)
            self.bus.emit("session.signal", signal)
            if signal is Signal.QUIT:
                return EXIT_SUCCESS
            if signal is Signal.END_OF_BUFFER:
                telemetry.record_event("cursor.bound", data={"signal": signal.value})
                self.console.write(self.config.eof_marker.encode("utf-8"))
            elif signal is Signal.START_OF_BUFFER:
                telemetry.record_event("cursor.bound", data={"signal": signal.value})
                self.console.write(self.config.start_marker.encode("utf-8"))

    def close(self) -> None:
        if self.context is None:
            return
        self.console.flush()
        self.context.buffer.close()
        self.context = None
        self.bus.emit("session.close", None)


__all__ = ["EditorSession", "EXIT_SUCCESS", "EXIT_FAILURE"]
