"""eigenvalue CLI entry point."""

from __future__ import annotations

import argparse
import logging
import os
import signal
import sys
from pathlib import Path
from typing import List

from . import __version__
from .commands import CommandRegistry, build_registry, entry_point_sources
from .context import ShellContext
from .dispatcher import Dispatcher
from .history import DEFAULT_CAPACITY
from .repl import ShellSession

LOG = logging.getLogger("eigenvalue.cli")

PROJECT = "eigenvalue"
BLURB = "A matrix client for the terminal"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def default_cache_dir() -> Path:
    override = os.environ.get("EV_CACHE_DIR")
    if override:
        return Path(override).expanduser()
    base = os.environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base).expanduser() / PROJECT


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROJECT, description=BLURB)
    parser.add_argument("--version", action="version", version=f"{PROJECT} {__version__} - {BLURB}")
    parser.add_argument("--json", action="store_true", help="Emit JSON output for command results")
    parser.add_argument("--log-level", default=os.environ.get("EV_LOG", "WARNING"), help="Logging level (default WARNING)")
    parser.add_argument(
        "-c",
        "--command",
        help="Execute a single command non-interactively (quote the command string)",
    )
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=None,
        help="Directory holding the command history (default $XDG_CACHE_HOME/eigenvalue)",
    )
    parser.add_argument(
        "--history-size",
        type=int,
        default=DEFAULT_CAPACITY,
        help=f"Number of history entries to keep (default {DEFAULT_CAPACITY})",
    )
    parser.add_argument(
        "--no-plugins",
        action="store_true",
        help="Only register the built-in commands",
    )
    return parser


def _install_signal_handlers(shell: ShellSession) -> None:
    def _on_signal(signum, _frame) -> None:
        LOG.info("received signal %d, stopping", signum)
        shell.request_stop()

    for signum in (signal.SIGINT, signal.SIGTERM):
        signal.signal(signum, _on_signal)


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    ctx = ShellContext(
        cache_dir=args.cache_dir or default_cache_dir(),
        json_output=args.json,
    )
    sources = [] if args.no_plugins else entry_point_sources()
    registry = build_registry(sources)
    if args.command:
        return _run_single_command(ctx, registry, args.command)
    shell = ShellSession(ctx, registry, history_size=args.history_size)
    _install_signal_handlers(shell)
    try:
        return shell.run()
    except KeyboardInterrupt:
        print()
        return 0


def _run_single_command(ctx: ShellContext, registry: CommandRegistry, command_line: str) -> int:
    outcome = Dispatcher(ctx, registry).run_line(command_line)
    return 0 if outcome.ok else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
