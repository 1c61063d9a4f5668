"""Shell context handed to every command."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .history import HistoryStore

LOGGER = logging.getLogger("eigenvalue.context")


@dataclass
class ShellContext:
    """Holds the state a shell session shares with its commands."""

    cache_dir: Optional[Path] = None
    json_output: bool = False
    history: Optional["HistoryStore"] = None
    _quit_requested: bool = field(default=False, init=False, repr=False)
    _quit_callbacks: List[Callable[[], None]] = field(default_factory=list, init=False, repr=False)

    @property
    def quit_requested(self) -> bool:
        return self._quit_requested

    def on_quit(self, callback: Callable[[], None]) -> None:
        """Register *callback* to run when a command requests termination."""
        self._quit_callbacks.append(callback)

    def request_quit(self) -> None:
        """Ask the owning session to shut down after the current line.

        This is the only way a command can end the session. Repeated calls
        after the first are ignored.
        """
        if self._quit_requested:
            return
        self._quit_requested = True
        LOGGER.debug("termination requested")
        for callback in list(self._quit_callbacks):
            callback()

    @property
    def history_path(self) -> Optional[Path]:
        if self.cache_dir is None:
            return None
        return self.cache_dir / "history"
