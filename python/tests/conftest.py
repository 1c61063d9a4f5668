"""
Pytest configuration and fixtures for eigenvalue tests.
"""
import sys
from pathlib import Path
from typing import List, Tuple

import pytest

PYTHON_SRC = Path(__file__).resolve().parents[1]
if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))

from eigenvalue.commands import Command, CommandRegistry, Option  # noqa: E402
from eigenvalue.context import ShellContext  # noqa: E402

ROOM_ID = "!abc:example.org"


class FakeLine:
    """Line buffer with a cursor, standing in for the editing widget."""

    def __init__(self, text: str, cursor: int | None = None) -> None:
        self.text = text
        self.cursor = len(text) if cursor is None else cursor
        self.listings: List[List[str]] = []

    def insert_text(self, text: str) -> None:
        self.text = self.text[: self.cursor] + text + self.text[self.cursor :]
        self.cursor += len(text)

    def show_candidates(self, candidates) -> None:
        self.listings.append(list(candidates))


@pytest.fixture
def completer_calls() -> List[Tuple[str, str, int]]:
    return []


@pytest.fixture
def room_registry(completer_calls) -> CommandRegistry:
    """Registry with ``help`` (no options) and ``room-details <room-id>``."""

    def room_ids(word: str, length: int) -> List[str]:
        completer_calls.append(("room-id", word, length))
        return [ROOM_ID] if ROOM_ID.startswith(word[:length]) else []

    def room_details(ctx: ShellContext, argv: List[str]) -> str:
        return f"room {argv[0]}\n"

    registry = CommandRegistry()
    registry.register(
        [
            Command("help", "Show this help", handler=lambda ctx, argv: ""),
            Command(
                "room-details",
                "Show details of a joined room",
                options=(Option("room-id", "The room's id", completer=room_ids),),
                handler=room_details,
            ),
        ]
    )
    return registry


@pytest.fixture
def ctx(tmp_path) -> ShellContext:
    return ShellContext(cache_dir=tmp_path / "cache")


@pytest.fixture
def fake_line():
    return FakeLine
