"""History listing command."""

from __future__ import annotations

from typing import List

from .base import Command
from ..context import ShellContext
from ..errors import CommandError


class HistoryCommand(Command):
    def __init__(self) -> None:
        super().__init__("history", "Print command history")

    def run(self, ctx: ShellContext, argv: List[str]) -> str:
        if ctx.history is None:
            raise CommandError("history not available")
        return "".join(f"{num:4d} {line}\n" for num, line in ctx.history.all())
