"""Single-letter command table and the line interpreter."""

from blob_editor.signals import Signal

from .context import CommandContext, EventBus
from .interpreter import Interpreter
from .registry import CommandEntry, CommandTable, DEFAULT_COMMANDS, default_table

__all__ = [
    "CommandContext",
    "CommandEntry",
    "CommandTable",
    "DEFAULT_COMMANDS",
    "EventBus",
    "Interpreter",
    "Signal",
    "default_table",
]
