"""Command base classes for the eigenvalue shell."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..context import ShellContext

COMMAND_MARKER = "/"

Completer = Callable[[str, int], Sequence[str]]
Handler = Callable[[ShellContext, List[str]], Optional[str]]


@dataclass
class Option:
    """One positional argument of a command."""

    name: str
    description: str
    optional: bool = False
    completer: Optional[Completer] = None

    def complete(self, word: str, length: int) -> List[str]:
        """Return completion candidates for *word*; ``[]`` if there is no completer."""
        if self.completer is None:
            return []
        return list(self.completer(word, length) or ())

    def format_usage(self) -> str:
        return f"[{self.name}]" if self.optional else self.name


@dataclass
class Command:
    """A ``/name`` command.

    Either pass a ``handler`` or subclass and override :meth:`run`. A handler
    returns the output text (possibly empty), raises
    :class:`~eigenvalue.errors.CommandError` to fail, and returning ``None``
    means it failed without saying why.
    """

    name: str
    help_summary: str
    options: Sequence[Option] = field(default_factory=tuple)
    handler: Optional[Handler] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("command name must not be empty")
        self.options = tuple(self.options)

    def run(self, ctx: ShellContext, argv: List[str]) -> Optional[str]:
        if self.handler is None:
            raise NotImplementedError("Command must implement run() or provide a handler")
        return self.handler(ctx, argv)

    def invoke(self, ctx: ShellContext, argv: Sequence[str]) -> Optional[str]:
        return self.run(ctx, list(argv))

    def option_at(self, position: int) -> Optional[Option]:
        """Option for the 0-based argument *position* after the command name."""
        if 0 <= position < len(self.options):
            return self.options[position]
        return None

    def complete(self, position: int, word: str, length: int) -> List[str]:
        option = self.option_at(position)
        if option is None:
            return []
        return option.complete(word, length)

    def format_usage(self) -> str:
        parts = [f"{COMMAND_MARKER}{self.name}"]
        parts.extend(option.format_usage() for option in self.options)
        return " ".join(parts)

    def format_help(self) -> str:
        lines = [f"  {self.name} - {self.help_summary}\n", "\n", "  Usage:\n", f"    {self.format_usage()}\n"]
        if self.options:
            width = max(len(option.name) for option in self.options) + 4
            for option in self.options:
                lines.append(f"{option.name:>{width}} : {option.description}\n")
        lines.append("\n")
        return "".join(lines)


CommandSource = Callable[[], Sequence[Command]]
