"""Command table mapping single letters to actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, Optional

from blob_editor.signals import Signal

from . import actions
from .context import CommandContext

CommandAction = Callable[[CommandContext], Signal]

HELP_HEADER = (
    "\nblob - a small line-oriented text editor.\n"
    "Commands operate on the current line and can be chained.\n\n"
)
HELP_FOOTER = "\nChain commands on one line, like so: 'npi' (next, print, insert).\n"


@dataclass(frozen=True, slots=True)
class CommandEntry:
    """Single-letter command bound to an action."""

    letter: str
    action: CommandAction
    name: str
    description: str = ""

    def __post_init__(self) -> None:
        if len(self.letter) != 1:
            raise ValueError("command letter must be a single character")
        if not callable(self.action):
            raise TypeError("action must be callable")

    @property
    def code(self) -> int:
        return ord(self.letter)

    def __call__(self, context: CommandContext) -> Signal:
        return self.action(context)


class CommandTable:
    """Owns the letter -> command mapping and renders help from it."""

    def __init__(self, commands: Iterable[CommandEntry] = ()) -> None:
        self._commands: Dict[int, CommandEntry] = {}
        for command in commands:
            self.register(command)

    def register(self, command: CommandEntry, *, replace: bool = False) -> CommandEntry:
        if not replace and command.code in self._commands:
            raise ValueError(f"Command '{command.letter}' already registered")
        self._commands[command.code] = command
        return command

    def lookup(self, code: int) -> Optional[CommandEntry]:
        return self._commands.get(code)

    def __iter__(self) -> Iterator[CommandEntry]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)

    def help_text(self) -> bytes:
        rows = "".join(
            f"'{command.letter}' ({command.name}): {command.description}\n"
            for command in self
        )
        return (HELP_HEADER + rows + HELP_FOOTER).encode("utf-8")


DEFAULT_COMMANDS: tuple[CommandEntry, ...] = (
    CommandEntry("n", actions.next_line, "next", "go to the next line."),
    CommandEntry("b", actions.previous_line, "back", "go to the previous line."),
    CommandEntry("p", actions.print_line, "print", "print the current line."),
    CommandEntry(
        "i",
        actions.insert_lines,
        "insert",
        "insert lines after the current line, until interrupted (ctrl+c).",
    ),
    CommandEntry("l", actions.list_buffer, "list", "list the contents of the file."),
    CommandEntry("d", actions.delete_line, "delete", "delete the current line."),
    CommandEntry("q", actions.quit_session, "quit", "quit the editor."),
    CommandEntry("w", actions.write_buffer, "write", "write the buffer to the file."),
    CommandEntry("h", actions.show_help, "help", "print this message."),
)


def default_table() -> CommandTable:
    return CommandTable(DEFAULT_COMMANDS)


__all__ = [
    "CommandAction",
    "CommandEntry",
    "CommandTable",
    "DEFAULT_COMMANDS",
    "default_table",
]
