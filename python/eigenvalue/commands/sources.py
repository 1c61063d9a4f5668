"""Command sources: built-ins and plugins registered through entry points."""

from __future__ import annotations

import logging
from importlib import metadata
from typing import List, Sequence

from .base import Command, CommandSource
from .help import HelpCommand
from .history import HistoryCommand
from .quit import QuitCommand

LOGGER = logging.getLogger("eigenvalue.commands")

ENTRY_POINT_GROUP = "eigenvalue.commands"


def builtin_commands() -> Sequence[Command]:
    return [HelpCommand(), HistoryCommand(), QuitCommand()]


def entry_point_sources(group: str = ENTRY_POINT_GROUP) -> List[CommandSource]:
    """Load command sources published by installed distributions.

    Each entry point must name a callable returning a sequence of commands.
    Entry points that fail to import are logged and skipped.
    """
    sources: List[CommandSource] = []
    for ep in sorted(metadata.entry_points().select(group=group), key=lambda e: e.name):
        try:
            source = ep.load()
        except Exception as exc:
            LOGGER.warning("failed to load command source %s (%s): %s", ep.name, ep.value, exc)
            continue
        if not callable(source):
            LOGGER.warning("command source %s is not callable", ep.name)
            continue
        LOGGER.debug("loaded command source %s from %s", ep.name, ep.value)
        sources.append(source)
    return sources


__all__ = ["ENTRY_POINT_GROUP", "builtin_commands", "entry_point_sources"]
