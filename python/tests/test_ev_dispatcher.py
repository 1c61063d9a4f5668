"""Dispatcher tests for the eigenvalue shell."""

from __future__ import annotations

import json
import logging
from typing import List

from eigenvalue.commands import Command, CommandRegistry
from eigenvalue.context import ShellContext
from eigenvalue.dispatcher import INTERNAL_ERROR_MESSAGE, Dispatcher, Outcome
from eigenvalue.errors import ArgumentError, CommandError, NotFoundError


def _raising(exc: Exception):
    def handler(ctx, argv):
        raise exc

    return handler


def _registry(*commands: Command) -> CommandRegistry:
    registry = CommandRegistry()
    registry.register(commands)
    return registry


def test_unknown_command_reports_and_runs_nothing(capsys, room_registry):
    dispatcher = Dispatcher(ShellContext(), room_registry)
    assert dispatcher.run(["/bogus"]) is Outcome.UNKNOWN_COMMAND
    out = capsys.readouterr().out
    assert "Unknown command 'bogus'" in out


def test_lookup_is_case_sensitive(capsys, room_registry):
    dispatcher = Dispatcher(ShellContext(), room_registry)
    assert dispatcher.run(["/HELP"]) is Outcome.UNKNOWN_COMMAND


def test_handler_receives_arguments_after_command_name(capsys):
    seen: List[List[str]] = []

    def handler(ctx, argv):
        seen.append(argv)
        return "done\n"

    dispatcher = Dispatcher(ShellContext(), _registry(Command("echo", "Echo", handler=handler)))
    assert dispatcher.run(["/echo", "a b", "c"]) is Outcome.SUCCESS
    assert seen == [["a b", "c"]]
    assert capsys.readouterr().out == "\ndone\n\n"


def test_empty_output_renders_nothing(capsys):
    dispatcher = Dispatcher(ShellContext(), _registry(Command("noop", "Nothing", handler=lambda ctx, argv: "")))
    assert dispatcher.run(["/noop"]) is Outcome.SUCCESS
    assert capsys.readouterr().out == ""


def test_command_errors_render_message(capsys):
    dispatcher = Dispatcher(
        ShellContext(),
        _registry(
            Command("args", "Bad args", handler=_raising(ArgumentError("expected 1 argument, got 0"))),
            Command("missing", "Missing", handler=_raising(NotFoundError("no room '!x'"))),
            Command("plain", "Plain", handler=_raising(CommandError("nope"))),
        ),
    )
    assert dispatcher.run(["/args"]) is Outcome.FAILURE
    assert dispatcher.run(["/missing"]) is Outcome.FAILURE
    assert dispatcher.run(["/plain"]) is Outcome.FAILURE
    out = capsys.readouterr().out
    assert "Command failed: expected 1 argument, got 0" in out
    assert "Command failed: no room '!x'" in out
    assert "Command failed: nope" in out


def test_handler_without_result_or_error_is_internal_error(capsys):
    dispatcher = Dispatcher(
        ShellContext(),
        _registry(
            Command("silent", "Returns nothing", handler=lambda ctx, argv: None),
            Command("blank", "Empty error", handler=_raising(CommandError())),
        ),
    )
    assert dispatcher.run(["/silent"]) is Outcome.INTERNAL_ERROR
    assert dispatcher.run(["/blank"]) is Outcome.INTERNAL_ERROR
    out = capsys.readouterr().out
    assert out.count(INTERNAL_ERROR_MESSAGE) == 2


def test_crashing_handler_is_logged_and_reported(capsys, caplog):
    def boom(ctx, argv):
        raise KeyError("boom")

    dispatcher = Dispatcher(ShellContext(), _registry(Command("boom", "Crashes", handler=boom)))
    with caplog.at_level(logging.ERROR, logger="eigenvalue.dispatcher"):
        assert dispatcher.run(["/boom"]) is Outcome.INTERNAL_ERROR
    assert "command boom failed" in caplog.text
    assert "Internal error - Command 'boom' failed" in capsys.readouterr().out


def test_non_command_tokens_are_ignored(capsys, room_registry):
    dispatcher = Dispatcher(ShellContext(), room_registry)
    assert dispatcher.run([]) is Outcome.IGNORED
    assert dispatcher.run(["help"]) is Outcome.IGNORED
    assert capsys.readouterr().out == ""


def test_run_line_reports_parse_errors(capsys, room_registry):
    dispatcher = Dispatcher(ShellContext(), room_registry)
    assert dispatcher.run_line('/room-details "!abc') is Outcome.PARSE_ERROR
    assert "Parse error" in capsys.readouterr().out
    assert dispatcher.run_line("/room-details !abc:example.org") is Outcome.SUCCESS
    assert "room !abc:example.org" in capsys.readouterr().out


def test_json_output_envelopes(capsys):
    ctx = ShellContext(json_output=True)
    dispatcher = Dispatcher(
        ctx,
        _registry(
            Command("ok", "Ok", handler=lambda ctx, argv: "fine"),
            Command("bad", "Bad", handler=_raising(ArgumentError("wrong"))),
        ),
    )
    dispatcher.run(["/ok"])
    assert json.loads(capsys.readouterr().out) == {"status": "ok", "output": "fine"}
    dispatcher.run(["/bad"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "error"
    assert payload["error"] == "Command failed: wrong"
    assert payload["details"] == {"command": "bad", "kind": "ArgumentError"}
