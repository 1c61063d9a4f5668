"""Help command."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from .base import Command, Option
from ..context import ShellContext
from ..output import INFO_INDENT, FormatBuilder

if TYPE_CHECKING:  # pragma: no cover
    from . import CommandRegistry


class HelpCommand(Command):
    def __init__(self) -> None:
        super().__init__(
            "help",
            "Show this help",
            options=(
                Option(
                    "command",
                    "The command to print help for",
                    optional=True,
                    completer=self.complete_command_name,
                ),
            ),
        )
        self._registry: CommandRegistry | None = None

    def bind(self, registry: "CommandRegistry") -> None:
        self._registry = registry

    def complete_command_name(self, word: str, length: int) -> List[str]:
        if not self._registry:
            return []
        prefix = word[:length]
        return [name for name in self._registry.names() if name.startswith(prefix)]

    def run(self, ctx: ShellContext, argv: List[str]) -> str | None:
        registry = self._registry
        if not registry:
            return None
        if argv:
            name = argv[0]
            command = registry.get(name)
            if not command:
                return f"Unknown command {name}\n"
            return command.format_help()
        builder = FormatBuilder(indent=INFO_INDENT)
        for command in registry.list_commands():
            builder.add(command.name, command.help_summary)
        return builder.end()
