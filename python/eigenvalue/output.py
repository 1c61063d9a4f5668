"""Output helpers for the eigenvalue shell."""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText

from .context import ShellContext

ERROR_STYLE = "ansired"
INFO_INDENT = 4


class FormatBuilder:
    """Collects key/value pairs and renders them aligned on ``:``::

              a key : value1
        another key : value2
    """

    def __init__(self, *, indent: int = 0) -> None:
        self.indent = indent
        self._rows: List[Optional[Tuple[str, str]]] = []

    def add(self, key: str, value: Optional[str]) -> "FormatBuilder":
        self._rows.append((key, value or ""))
        return self

    def add_nonnull(self, key: str, value: Optional[str]) -> "FormatBuilder":
        if value is not None:
            self.add(key, value)
        return self

    def add_newline(self) -> "FormatBuilder":
        self._rows.append(None)
        return self

    def end(self) -> str:
        width = max((len(row[0]) for row in self._rows if row), default=0) + self.indent
        lines = []
        for row in self._rows:
            if row is None:
                lines.append("\n")
                continue
            key, value = row
            lines.append(f"{key:>{width}} : {value}\n")
        return "".join(lines)


def format_candidates(candidates: Sequence[str]) -> str:
    return "".join(f"{entry} " for entry in candidates)


def _json_dump(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, indent=2, sort_keys=True)


def emit_output(ctx: ShellContext, text: str) -> None:
    """Print a command's output buffer. Empty buffers print nothing."""
    if ctx.json_output:
        print(_json_dump({"status": "ok", "output": text}))
        return
    if text:
        print(f"\n{text}")


def emit_error(ctx: ShellContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Print *message* highlighted as an error, or as a JSON error envelope."""
    if ctx.json_output:
        payload: Dict[str, Any] = {"status": "error", "error": message}
        if data:
            payload["details"] = dict(data)
        print(_json_dump(payload))
        return
    print_formatted_text(FormattedText([(ERROR_STYLE, message)]), file=sys.stdout)


def emit_notice(ctx: ShellContext, message: str) -> None:
    """Print a plain informational line that is not a command result."""
    if ctx.json_output:
        print(_json_dump({"status": "error", "error": message}))
        return
    print(f"\n{message}")


__all__ = [
    "ERROR_STYLE",
    "INFO_INDENT",
    "FormatBuilder",
    "emit_error",
    "emit_notice",
    "emit_output",
    "format_candidates",
]
