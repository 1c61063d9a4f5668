"""Command registry for the eigenvalue shell."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..errors import DuplicateCommandError
from .base import COMMAND_MARKER, Command, CommandSource, Option
from .sources import builtin_commands, entry_point_sources


class CommandRegistry:
    """Stores the known commands in registration order.

    Lookups are exact, case sensitive matches on the bare name (without the
    ``/`` marker). The registry is filled once at startup and only read
    afterwards.
    """

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}
        self._ordered: List[Command] = []

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def register(self, commands: Iterable[Command]) -> None:
        """Append a batch of commands. A name seen before is a programming error."""
        for command in commands:
            if command.name in self._commands:
                raise DuplicateCommandError(f"command '{command.name}' registered twice")
            self._ordered.append(command)
            self._commands[command.name] = command
            bind = getattr(command, "bind", None)
            if callable(bind):
                bind(self)

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    lookup = get

    def list_commands(self) -> List[Command]:
        return list(self._ordered)

    def names(self) -> List[str]:
        return [command.name for command in self._ordered]


def build_registry(sources: Optional[Iterable[CommandSource]] = None) -> CommandRegistry:
    """Build a registry from *sources*, followed by the built-in prompt commands."""
    registry = CommandRegistry()
    for source in sources or ():
        registry.register(source())
    registry.register(builtin_commands())
    return registry


__all__ = [
    "COMMAND_MARKER",
    "Command",
    "CommandRegistry",
    "CommandSource",
    "Option",
    "build_registry",
    "builtin_commands",
    "entry_point_sources",
]
