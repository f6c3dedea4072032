"""Textual front-end hosting an editor session."""

from __future__ import annotations

from typing import Callable, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input, Log, Static

from blob_editor.buffer.serializer import PathLike
from blob_editor.config import EditorConfig

from .controller import TextualSessionAdapter, TextualUIHooks

# Bounded so a session blocked on a relay to the closing app cannot hang exit.
_SESSION_JOIN_TIMEOUT = 1.0


class BlobEditorApp(App[int]):
    """Terminal-style transcript with an input line feeding the session."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#output {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-input {
		height: 3;
	}
	"""

    BINDINGS = [
        Binding("ctrl+c", "cancel_insert", "Stop insert", priority=True),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, path: PathLike, *, config: Optional[EditorConfig] = None) -> None:
        super().__init__()
        self._path = path
        self._config = config
        self.adapter: TextualSessionAdapter | None = None
        self._output_widget: Log | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._output_widget = Log(id="output", highlight=False)
        yield self._output_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Input(placeholder="commands: n b p i l d w q h", id="command-input")
        yield Footer()

    def on_mount(self) -> None:
        self.title = "blob"
        self.sub_title = str(self._path)
        hooks = TextualUIHooks(
            write_output=self._from_session(self._write_output),
            update_status=self._from_session(self._update_status),
            session_ended=self._from_session(self._session_ended),
        )
        self.adapter = TextualSessionAdapter(self._path, hooks, config=self._config)
        self.adapter.start()
        self.query_one("#command-input", Input).focus()

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close_input()
            self.adapter.join(timeout=_SESSION_JOIN_TIMEOUT)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        value = event.value
        event.input.value = ""
        self._write_output(value + "\n")
        self.adapter.submit(value)

    def action_cancel_insert(self) -> None:
        if self.adapter:
            self.adapter.cancel_insertion()

    def _from_session(self, callback: Callable[..., None]) -> Callable[..., None]:
        def relay(*args: object) -> None:
            if self.is_running:
                self.call_from_thread(callback, *args)

        return relay

    def _write_output(self, text: str) -> None:
        if self._output_widget:
            self._output_widget.write(text)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _session_ended(self, code: int) -> None:
        self.exit(result=code, return_code=code)


def run_app(path: PathLike, *, config: Optional[EditorConfig] = None) -> int:
    app = BlobEditorApp(path, config=config)
    result = app.run()
    return result if isinstance(result, int) else 0


__all__ = ["BlobEditorApp", "run_app"]
