"""Line tokenizing helpers for the eigenvalue shell."""

from __future__ import annotations

import shlex
from typing import List, NamedTuple, Optional

from .errors import ParseError

_QUOTES = ('"', "'")


def split_command(line: str) -> List[str]:
    """Split a command line into argv tokens using shlex rules."""
    if not line:
        return []
    try:
        return shlex.split(line, comments=False, posix=True)
    except ValueError as exc:
        raise ParseError(str(exc)) from exc


class TokenizedLine(NamedTuple):
    """Tokens of a line plus the position of the cursor among them."""

    argv: List[str]
    cursor_index: int
    cursor_offset: int

    @property
    def word(self) -> str:
        """Token under the cursor, empty when the cursor is past the last token."""
        if 0 <= self.cursor_index < len(self.argv):
            return self.argv[self.cursor_index]
        return ""


class Tokenizer:
    """Quote aware tokenizer that also reports the cursor's token.

    ``last`` keeps the result of the most recent call until :meth:`reset`
    is invoked; the shell resets it once per line.
    """

    def __init__(self) -> None:
        self.last: Optional[TokenizedLine] = None

    def reset(self) -> None:
        self.last = None

    def tokenize(self, line: str, cursor: Optional[int] = None) -> TokenizedLine:
        self.last = None
        text = line.rstrip("\r\n")
        if cursor is None or cursor > len(text):
            cursor = len(text)
        cursor = max(0, cursor)
        argv = split_command(text)
        before = _split_before_cursor(text[:cursor])
        result = TokenizedLine(argv, len(before) - 1, len(before[-1]))
        self.last = result
        return result


def _split_before_cursor(text: str) -> List[str]:
    if not text or text.isspace():
        return [""]
    try:
        tokens = split_command(text)
    except ParseError:
        # The cursor sits inside a quoted token that is closed later on the line.
        tokens = _close_open_quote(text)
        return tokens or [""]
    if _starts_new_token(text, tokens):
        tokens.append("")
    return tokens or [""]


def _close_open_quote(text: str) -> List[str]:
    for quote in _QUOTES:
        try:
            return split_command(text + quote)
        except ParseError:
            continue
    raise ParseError(f"cannot tokenize {text!r}")


def _starts_new_token(text: str, tokens: List[str]) -> bool:
    # Escaped whitespace glues the next character onto the last token.
    return len(split_command(text + "x")) > len(tokens)


__all__ = ["ParseError", "TokenizedLine", "Tokenizer", "split_command"]
