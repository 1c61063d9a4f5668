"""Quit command."""

from __future__ import annotations

from typing import List

from .base import Command
from ..context import ShellContext


class QuitCommand(Command):
    def __init__(self) -> None:
        super().__init__("quit", "Quit the application")

    def run(self, ctx: ShellContext, argv: List[str]) -> str:
        ctx.request_quit()
        return ""
