from __future__ import annotations

from pathlib import Path
from typing import List

from blob_editor.adapters.textual import TextualSessionAdapter, TextualUIHooks
from blob_editor.config import EditorConfig
from blob_editor.session import EXIT_FAILURE, EXIT_SUCCESS


def make_adapter(
    path: Path,
    output: List[str],
    statuses: List[str] | None = None,
    logs: List[str] | None = None,
    ended: List[int] | None = None,
) -> TextualSessionAdapter:
    hooks = TextualUIHooks(
        write_output=output.append,
        update_status=(statuses if statuses is not None else []).append,
        log=(logs if logs is not None else []).append,
        session_ended=(ended if ended is not None else []).append,
    )
    return TextualSessionAdapter(path, hooks, config=EditorConfig())


def test_adapter_runs_session_on_worker_thread(tmp_path: Path) -> None:
    target = tmp_path / "doc.txt"
    target.write_bytes(b"alpha\nbeta\n")
    output: List[str] = []
    ended: List[int] = []
    adapter = make_adapter(target, output, ended=ended)

    adapter.submit("l")
    adapter.submit("q")
    adapter.start()

    assert adapter.join(timeout=5) == EXIT_SUCCESS
    assert "".join(output) == ": alpha \nbeta \n: "
    assert ended == [EXIT_SUCCESS]


def test_adapter_reports_bound_signals_in_status(tmp_path: Path) -> None:
    output: List[str] = []
    statuses: List[str] = []
    adapter = make_adapter(tmp_path / "doc.txt", output, statuses=statuses)

    adapter.submit("n")
    adapter.close_input()

    assert adapter.run() == EXIT_SUCCESS
    assert "end_of_buffer" in statuses
    assert "".join(output) == ": EOF: "


def test_adapter_surfaces_fatal_insert_end(tmp_path: Path) -> None:
    output: List[str] = []
    adapter = make_adapter(tmp_path / "doc.txt", output)

    adapter.submit("i")
    adapter.submit("pending")
    adapter.close_input()

    assert adapter.run() == EXIT_FAILURE
    assert "blob: end of input during insertion" in "".join(output)
    assert adapter.inserting is False


def test_cancel_as_insertion_starts_returns_to_prompt(tmp_path: Path) -> None:
    target = tmp_path / "doc.txt"
    target.write_bytes(b"alpha\n")
    output: List[str] = []
    adapter = make_adapter(target, output)

    def cancel_on_start(name: str, payload: object | None) -> None:
        if name == "insert.start":
            adapter.cancel_insertion()

    adapter.hooks.handle_event = cancel_on_start
    adapter.submit("i")
    adapter.submit("l")
    adapter.close_input()

    assert adapter.run() == EXIT_SUCCESS
    assert adapter.inserting is False
    assert "".join(output) == ": : alpha \n: "


def test_cancel_while_inserting_unblocks_reader(tmp_path: Path) -> None:
    adapter = make_adapter(tmp_path / "doc.txt", [])
    adapter.bus.emit("insert.start", None)

    adapter.cancel_insertion()

    assert adapter.cancellation.cancelled
    assert adapter.reader.readline() == b"\n"


def test_cancel_outside_insertion_only_sets_token(tmp_path: Path) -> None:
    adapter = make_adapter(tmp_path / "doc.txt", [])

    adapter.cancel_insertion()
    adapter.close_input()

    assert adapter.cancellation.cancelled
    assert adapter.reader.readline() == b""


def test_adapter_emits_log_lines(tmp_path: Path) -> None:
    logs: List[str] = []
    adapter = make_adapter(tmp_path / "doc.txt", [], logs=logs)

    adapter.submit("p")

    assert any(line.startswith("line ->") for line in logs)
