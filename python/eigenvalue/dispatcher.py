"""Resolve ``/command`` lines and run their handlers."""

from __future__ import annotations

import enum
import logging
from typing import Sequence

from .commands import COMMAND_MARKER, CommandRegistry
from .context import ShellContext
from .errors import CommandError, ParseError
from .output import emit_error, emit_notice, emit_output
from .parser import split_command

LOGGER = logging.getLogger("eigenvalue.dispatcher")

INTERNAL_ERROR_MESSAGE = "Internal error - Command failed to set error"


class Outcome(enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    INTERNAL_ERROR = "internal-error"
    UNKNOWN_COMMAND = "unknown-command"
    PARSE_ERROR = "parse-error"
    IGNORED = "ignored"

    @property
    def ok(self) -> bool:
        return self in (Outcome.SUCCESS, Outcome.IGNORED)


class Dispatcher:
    """Runs one tokenized command line and renders its result.

    Command failures are printed and reported through the returned
    :class:`Outcome`; they never end the session. Only a command calling
    :meth:`ShellContext.request_quit` does that.
    """

    def __init__(self, ctx: ShellContext, registry: CommandRegistry) -> None:
        self.ctx = ctx
        self.registry = registry

    def run(self, argv: Sequence[str]) -> Outcome:
        if not argv or not argv[0].startswith(COMMAND_MARKER):
            return Outcome.IGNORED
        name = argv[0][len(COMMAND_MARKER):]
        command = self.registry.get(name)
        if command is None:
            LOGGER.debug("unknown command %r", name)
            emit_notice(self.ctx, f"Unknown command '{name}'")
            return Outcome.UNKNOWN_COMMAND
        try:
            output = command.invoke(self.ctx, argv[1:])
        except CommandError as exc:
            message = str(exc)
            if not message:
                emit_error(self.ctx, message=INTERNAL_ERROR_MESSAGE)
                return Outcome.INTERNAL_ERROR
            emit_error(self.ctx, message=f"Command failed: {message}", data={"command": name, "kind": type(exc).__name__})
            return Outcome.FAILURE
        except SystemExit:
            raise
        except Exception as exc:
            LOGGER.exception("command %s failed", name)
            emit_error(self.ctx, message=f"Internal error - Command '{name}' failed: {exc}")
            return Outcome.INTERNAL_ERROR
        if output is None:
            emit_error(self.ctx, message=INTERNAL_ERROR_MESSAGE)
            return Outcome.INTERNAL_ERROR
        emit_output(self.ctx, output)
        return Outcome.SUCCESS

    def run_line(self, line: str) -> Outcome:
        """Tokenize *line* and run it."""
        try:
            argv = split_command(line.strip())
        except ParseError as exc:
            LOGGER.error("Internal error parsing input: %s", exc)
            emit_error(self.ctx, message=f"Parse error: {exc}")
            return Outcome.PARSE_ERROR
        return self.run(argv)


__all__ = ["INTERNAL_ERROR_MESSAGE", "Dispatcher", "Outcome"]
