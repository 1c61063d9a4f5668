"""Context sensitive Tab completion for the eigenvalue shell.

Completion works on the tokens of the line up to the cursor:

* While the cursor is in the first token and nothing follows it, command
  names are completed (``/he`` -> ``/help``).
* Otherwise the first token names a command and the cursor's token index
  picks the option whose completer supplies the candidates.

How candidates are applied to the line is decided by :func:`render_candidates`.
"""

from __future__ import annotations

import enum
import logging
from typing import List, Optional, Protocol, Sequence

from .commands import COMMAND_MARKER, CommandRegistry
from .errors import ParseError
from .parser import TokenizedLine, Tokenizer

LOGGER = logging.getLogger("eigenvalue.completion")


class CompletionStatus(enum.Enum):
    ERROR = "error"
    REFRESH = "refresh"
    REDISPLAY = "redisplay"


class CompletionTarget(Protocol):
    """The editing widget as seen by the completion engine."""

    def insert_text(self, text: str) -> None:
        ...

    def show_candidates(self, candidates: Sequence[str]) -> None:
        ...


def render_candidates(target: CompletionTarget, candidates: Sequence[str], typed: int) -> CompletionStatus:
    """Apply *candidates* to *target* given that *typed* characters are already on the line.

    No candidate leaves the line alone. A single candidate has its missing
    suffix and one space inserted at the cursor. Several candidates are listed
    and the line is left byte for byte unchanged.
    """
    if not candidates:
        return CompletionStatus.ERROR
    if len(candidates) > 1:
        target.show_candidates(list(candidates))
        return CompletionStatus.REDISPLAY
    target.insert_text(f"{candidates[0][typed:]} ")
    return CompletionStatus.REFRESH


class CompletionEngine:
    def __init__(self, registry: CommandRegistry, tokenizer: Optional[Tokenizer] = None) -> None:
        self.registry = registry
        self.tokenizer = tokenizer or Tokenizer()

    def complete(self, line: str, cursor: int, target: CompletionTarget) -> CompletionStatus:
        """Run one Tab press against *line* with the cursor at *cursor*."""
        try:
            tokens = self.tokenizer.tokenize(line, cursor)
        except ParseError as exc:
            LOGGER.error("Internal error parsing input: %s", exc)
            return CompletionStatus.ERROR
        finally:
            self.tokenizer.reset()
        candidates = self.candidates(tokens)
        LOGGER.debug(
            "argc=%d cursor_index=%d cursor_offset=%d candidates=%d",
            len(tokens.argv),
            tokens.cursor_index,
            tokens.cursor_offset,
            len(candidates),
        )
        return render_candidates(target, candidates, tokens.cursor_offset)

    def candidates(self, tokens: TokenizedLine) -> List[str]:
        argv = tokens.argv
        if len(argv) < 2 and tokens.cursor_index == 0:
            return self.complete_command(tokens.word, tokens.cursor_offset)
        if not argv or tokens.cursor_index == 0:
            return []
        name = argv[0]
        if not name.startswith(COMMAND_MARKER):
            return []
        command = self.registry.get(name[len(COMMAND_MARKER):])
        if command is None:
            return []
        return command.complete(tokens.cursor_index - 1, tokens.word, tokens.cursor_offset)

    def complete_command(self, word: str, length: int) -> List[str]:
        """Full ``/name`` tokens of every command whose name starts with the typed text."""
        if word and not word.startswith(COMMAND_MARKER):
            return []
        typed = word[len(COMMAND_MARKER):length] if word else ""
        return [
            f"{COMMAND_MARKER}{command.name}"
            for command in self.registry.list_commands()
            if command.name.startswith(typed)
        ]


__all__ = ["CompletionEngine", "CompletionStatus", "CompletionTarget", "render_candidates"]
