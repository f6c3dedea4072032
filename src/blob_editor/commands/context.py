"""Shared state every command action operates on."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict

from blob_editor.buffer import Buffer
from blob_editor.console import Console
from blob_editor.runtime.cancellation import CancellationToken


class EventBus:
    """Minimal event bus letting front-ends observe the session."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class CommandContext:
    buffer: Buffer
    console: Console
    path: Path
    cancellation: CancellationToken = field(default_factory=CancellationToken)
    bus: EventBus = field(default_factory=EventBus)
    help_text: bytes = b""


__all__ = ["CommandContext", "EventBus"]
