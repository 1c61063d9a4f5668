"""Interactive shell session for eigenvalue."""

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.application import run_in_terminal
from prompt_toolkit.enums import EditingMode
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings

from .commands import COMMAND_MARKER, CommandRegistry
from .completion import CompletionEngine, CompletionStatus, CompletionTarget
from .context import ShellContext
from .dispatcher import Dispatcher, Outcome
from .errors import ParseError
from .history import DEFAULT_CAPACITY, HistoryStore
from .output import emit_error, format_candidates
from .parser import Tokenizer

LOGGER = logging.getLogger("eigenvalue.repl")

PROMPT = "Ev> "


class SessionState(enum.Enum):
    IDLE = "idle"
    READING = "reading"
    LINE_READY = "line-ready"


class LineEditor:
    """One prompt_toolkit line editor.

    The session throws the editor away after every submitted line and builds
    a fresh one, re-seeding its recall history from the history store.
    """

    def __init__(
        self,
        *,
        key_bindings: KeyBindings,
        history_lines: Iterable[str] = (),
        input: Any = None,
        output: Any = None,
    ) -> None:
        history = InMemoryHistory()
        for entry in history_lines:
            history.append_string(entry)
        self.session: PromptSession = PromptSession(
            PROMPT,
            history=history,
            key_bindings=key_bindings,
            editing_mode=EditingMode.EMACS,
            complete_while_typing=False,
            input=input,
            output=output,
        )

    def read_line(self) -> Optional[str]:
        # Ctrl-C still arrives as a key press; SIGINT from outside goes to the cli handler.
        return self.session.prompt(handle_sigint=False)

    def interrupt(self) -> None:
        """Make a pending :meth:`read_line` return ``None``."""
        app = self.session.app
        if not app.is_running:
            return
        loop = getattr(app, "loop", None)
        if loop is None:
            app.exit(result=None)
            return
        loop.call_soon_threadsafe(_exit_app, app)


def _exit_app(app: Any) -> None:
    if app.is_running and not app.is_done:
        app.exit(result=None)


class _BufferTarget:
    """Completion target backed by the buffer of a running prompt."""

    def __init__(self, event: Any) -> None:
        self._event = event

    def insert_text(self, text: str) -> None:
        self._event.current_buffer.insert_text(text)

    def show_candidates(self, candidates: Sequence[str]) -> None:
        line = self._event.current_buffer.text

        def _print() -> None:
            print(f"{PROMPT}{line}")
            print(format_candidates(candidates))

        run_in_terminal(_print)


EditorFactory = Callable[["ShellSession"], Any]


def _default_editor_factory(session: "ShellSession") -> LineEditor:
    return LineEditor(key_bindings=session.key_bindings, history_lines=session.history.snapshot())


class ShellSession:
    """Ties the registry, history store and line editor together.

    The loop reads one line at a time, dispatches ``/command`` lines and
    records them in history. Everything runs on the calling thread; a command
    that blocks blocks the prompt.
    """

    def __init__(
        self,
        ctx: ShellContext,
        registry: CommandRegistry,
        *,
        history: Optional[HistoryStore] = None,
        history_size: int = DEFAULT_CAPACITY,
        editor_factory: Optional[EditorFactory] = None,
    ) -> None:
        self.ctx = ctx
        self.registry = registry
        self.history = history if history is not None else HistoryStore(capacity=history_size)
        self.ctx.history = self.history
        self.tokenizer = Tokenizer()
        self.engine = CompletionEngine(registry, Tokenizer())
        self.dispatcher = Dispatcher(ctx, registry)
        self.key_bindings = self._build_key_bindings()
        self._editor_factory: EditorFactory = editor_factory or _default_editor_factory
        self._editor: Any = None
        self._stop_requested = False
        self._closed = False
        self.state = SessionState.IDLE
        self.ctx.on_quit(self.request_stop)
        self._load_history()

    @property
    def history_path(self) -> Optional[Path]:
        return self.ctx.history_path

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested

    def _build_key_bindings(self) -> KeyBindings:
        bindings = KeyBindings()

        @bindings.add("tab")
        def _complete(event) -> None:
            buffer = event.current_buffer
            self.complete(buffer.text, buffer.cursor_position, _BufferTarget(event))

        return bindings

    def _load_history(self) -> None:
        path = self.history_path
        if path is not None:
            self.history.load(path)

    def complete(self, line: str, cursor: int, target: CompletionTarget) -> CompletionStatus:
        try:
            return self.engine.complete(line, cursor, target)
        except Exception:
            LOGGER.exception("completion failed")
            return CompletionStatus.ERROR

    def request_stop(self) -> None:
        """Leave the loop once the line being processed (if any) is done."""
        if self._stop_requested:
            return
        self._stop_requested = True
        LOGGER.debug("stop requested in state %s", self.state.value)
        if self.state is SessionState.READING and self._editor is not None:
            interrupt = getattr(self._editor, "interrupt", None)
            if callable(interrupt):
                interrupt()

    def reset(self) -> None:
        """Drop the current editor and tokenizer state and start a fresh line."""
        self.tokenizer.reset()
        self._editor = self._editor_factory(self)
        self.state = SessionState.IDLE

    def run(self) -> int:
        try:
            self.reset()
            while not self._stop_requested:
                self.state = SessionState.READING
                try:
                    line = self._editor.read_line()
                except EOFError:
                    print()
                    break
                except KeyboardInterrupt:
                    print()
                    self.request_stop()
                    break
                if line is None:
                    break
                self.state = SessionState.LINE_READY
                self.handle_line(line)
                if self._stop_requested:
                    break
                self.reset()
        finally:
            self.state = SessionState.IDLE
            self.close()
        return 0

    def handle_line(self, line: str) -> Optional[Outcome]:
        """Process one submitted line. Returns ``None`` when nothing was dispatched."""
        try:
            tokens = self.tokenizer.tokenize(line)
        except ParseError as exc:
            LOGGER.error("Internal error parsing input: %s", exc)
            emit_error(self.ctx, message=f"Parse error: {exc}")
            return None
        finally:
            self.tokenizer.reset()
        argv = tokens.argv
        if not argv or not argv[0].startswith(COMMAND_MARKER):
            return None
        self.history.record(line)
        return self.dispatcher.run(argv)

    def close(self) -> None:
        """Persist history. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._editor = None
        path = self.history_path
        if path is not None:
            self.history.save(path)


__all__ = ["PROMPT", "LineEditor", "SessionState", "ShellSession"]
