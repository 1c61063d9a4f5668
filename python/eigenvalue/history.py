"""Persistent command history."""

from __future__ import annotations

import logging
import os
from collections import OrderedDict
from pathlib import Path
from typing import List, Tuple, Union

LOGGER = logging.getLogger("eigenvalue.history")

DEFAULT_CAPACITY = 100
HISTORY_HEADER = "_HiStOrY_V2_"

PathLike = Union[str, "os.PathLike[str]"]


class HistoryStore:
    """Bounded, duplicate free history list with file persistence.

    Entries are kept oldest first. Recording a line that is already present
    moves it to the most recent slot instead of adding a second copy. Every
    record gets a new event number, which is what ``/history`` prints.
    """

    def __init__(self, *, capacity: int = DEFAULT_CAPACITY) -> None:
        self.capacity = max(1, int(capacity or 1))
        self._entries: "OrderedDict[str, int]" = OrderedDict()
        self._next_event = 1

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, line: str) -> bool:
        """Add *line* as the most recent entry. Returns False if it was ignored."""
        text = line.strip()
        if len(text) < 2:
            return False
        if text in self._entries:
            self._entries.move_to_end(text)
        self._entries[text] = self._next_event
        self._next_event += 1
        while len(self._entries) > self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            LOGGER.debug("evicted history entry %r", evicted)
        return True

    def all(self) -> List[Tuple[int, str]]:
        """Return ``(event number, line)`` pairs, most recent first."""
        return [(num, line) for line, num in reversed(self._entries.items())]

    def snapshot(self) -> List[str]:
        """Return the lines oldest first."""
        return list(self._entries)

    def load(self, path: PathLike) -> None:
        target = Path(path).expanduser()
        try:
            data = target.read_text(encoding="utf-8")
        except FileNotFoundError:
            LOGGER.debug("no history at %s", target)
            return
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("failed to read history from %s: %s", target, exc)
            return
        for line in data.splitlines():
            if line == HISTORY_HEADER:
                continue
            self.record(line)
        LOGGER.debug("loaded %d history entries from %s", len(self), target)

    def save(self, path: PathLike) -> bool:
        """Write the entries oldest first. Failures are logged, never raised."""
        target = Path(path).expanduser()
        try:
            if not target.parent.exists():
                target.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
            lines = [HISTORY_HEADER, *self._entries]
            target.write_text("\n".join(lines) + "\n", encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("failed to save history to %s: %s", target, exc)
            return False
        return True


__all__ = ["DEFAULT_CAPACITY", "HISTORY_HEADER", "HistoryStore"]
