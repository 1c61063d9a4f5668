"""Exception types shared by the eigenvalue shell."""

from __future__ import annotations


class ShellError(RuntimeError):
    """Base class for errors raised by the shell core."""


class ParseError(ShellError):
    """Raised when an input line cannot be tokenized (e.g. unterminated quote)."""


class DuplicateCommandError(ShellError, ValueError):
    """Raised at startup when two command sources register the same name."""


class CommandError(ShellError):
    """A command failed in a way the user should see.

    Handlers raise this (or one of its subclasses) instead of returning output.
    """


class ArgumentError(CommandError):
    """Wrong number of arguments or an invalid argument value."""


class NotFoundError(CommandError):
    """An entity referenced by the arguments does not exist."""


__all__ = [
    "ShellError",
    "ParseError",
    "DuplicateCommandError",
    "CommandError",
    "ArgumentError",
    "NotFoundError",
]
