from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import pytest

from line_editor.commands import (
    COMMANDS,
    CommandDispatcher,
    UNKNOWN_COMMAND_MESSAGE,
    help_lines,
)


def make_dispatcher() -> Tuple[CommandDispatcher, List[Tuple[str, object]]]:
    dispatcher = CommandDispatcher()
    events: List[Tuple[str, object]] = []
    for name in (
        "command.submit",
        "command.error",
        "document.changed",
        "document.saved",
        "document.loaded",
        "session.exit",
    ):
        dispatcher.context.bus.subscribe(
            name, lambda payload, name=name: events.append((name, payload))
        )
    return dispatcher, events


def test_append_newline_print_scenario() -> None:
    dispatcher, _ = make_dispatcher()

    dispatcher.dispatch("append Hello")
    dispatcher.dispatch("newline")
    dispatcher.dispatch("append World")
    result = dispatcher.dispatch("print")

    assert result.status == "print"
    assert result.command == "print"
    assert result.output == ("Hello", "World")
    assert not result.error


def test_numeric_selectors_match_original_menu() -> None:
    dispatcher, _ = make_dispatcher()

    dispatcher.dispatch("1 abc")
    dispatcher.dispatch("2")
    dispatcher.dispatch("1 def")
    dispatcher.dispatch("6 0 1 XY")
    dispatcher.dispatch("11 1 1 Z")

    assert dispatcher.dispatch("5").output == ("aXYbc", "dZ")


def test_append_keeps_argument_verbatim() -> None:
    dispatcher, _ = make_dispatcher()

    dispatcher.dispatch("append  two  spaces ")

    assert dispatcher.document.snapshot() == (" two  spaces ",)


def test_selectors_are_case_insensitive() -> None:
    dispatcher, _ = make_dispatcher()

    result = dispatcher.dispatch("APPEND x")

    assert result.command == "append"
    assert dispatcher.document.snapshot() == ("x",)


def test_insert_text_may_contain_spaces() -> None:
    dispatcher, _ = make_dispatcher()
    dispatcher.dispatch("append helloworld")

    dispatcher.dispatch("insert 0 5 , dear ")

    assert dispatcher.document.get_line(0) == "hello, dear world"


def test_replace_truncates_line() -> None:
    dispatcher, _ = make_dispatcher()
    dispatcher.dispatch("append hello world")

    result = dispatcher.dispatch("replace 0 6 there")

    assert result.status == "replace"
    assert dispatcher.document.get_line(0) == "hello there"


def test_search_reports_each_match() -> None:
    dispatcher, _ = make_dispatcher()
    dispatcher.dispatch("append ababab")
    dispatcher.dispatch("newline")
    dispatcher.dispatch("append xab")

    result = dispatcher.dispatch("search ab")

    assert result.output == (
        "Found at line 0, position 0",
        "Found at line 0, position 2",
        "Found at line 0, position 4",
        "Found at line 1, position 1",
    )
    assert result.message is None


def test_search_without_matches_says_so() -> None:
    dispatcher, _ = make_dispatcher()
    dispatcher.dispatch("append abc")

    result = dispatcher.dispatch("search zz")

    assert result.output == ()
    assert result.message == "No matches for 'zz'"
    assert not result.error


def test_invalid_line_is_reported_not_raised() -> None:
    dispatcher, events = make_dispatcher()
    dispatcher.dispatch("append only")

    result = dispatcher.dispatch("insert 3 0 x")

    assert result.error
    assert result.status == "invalid_line"
    assert result.message == "Invalid line number"
    assert dispatcher.document.snapshot() == ("only",)
    assert any(name == "command.error" for name, _ in events)


def test_invalid_position_is_reported() -> None:
    dispatcher, _ = make_dispatcher()
    dispatcher.dispatch("append abc")

    result = dispatcher.dispatch("replace 0 9 x")

    assert result.error
    assert result.status == "invalid_position"
    assert dispatcher.document.snapshot() == ("abc",)


@pytest.mark.parametrize(
    "command",
    ["insert", "insert 0", "insert a b c", "replace 1", "load", "save   ", "search"],
)
def test_malformed_arguments_report_usage(command: str) -> None:
    dispatcher, _ = make_dispatcher()

    result = dispatcher.dispatch(command)

    assert result.error
    assert result.status == "usage"
    assert result.message is not None and result.message.startswith("Usage: ")


def test_unknown_command_is_reported() -> None:
    dispatcher, events = make_dispatcher()

    result = dispatcher.dispatch("frobnicate now")

    assert result.error
    assert result.status == "unknown_command"
    assert result.message == UNKNOWN_COMMAND_MESSAGE
    assert ("command.error", "frobnicate") in events


def test_blank_input_is_ignored() -> None:
    dispatcher, events = make_dispatcher()

    result = dispatcher.dispatch("   \n")

    assert result.status == "empty"
    assert not result.error
    assert events == []


def test_save_and_load_through_commands(tmp_path: Path) -> None:
    dispatcher, events = make_dispatcher()
    target = tmp_path / "notes.txt"
    dispatcher.dispatch("append first")
    dispatcher.dispatch("newline")
    dispatcher.dispatch("append second")

    saved = dispatcher.dispatch(f"save {target}")
    dispatcher.dispatch("reset")
    loaded = dispatcher.dispatch(f"load {target}")

    assert saved.message == f"Document saved to {target}"
    assert loaded.message == f"Document loaded from {target}"
    assert dispatcher.document.snapshot() == ("first", "second")
    assert ("document.saved", {"path": str(target), "lines": 2}) in events
    assert ("document.loaded", {"path": str(target), "lines": 2}) in events


def test_failed_load_keeps_document(tmp_path: Path) -> None:
    dispatcher, _ = make_dispatcher()
    dispatcher.dispatch("append keep")
    missing = tmp_path / "missing.txt"

    result = dispatcher.dispatch(f"load {missing}")

    assert result.error
    assert result.status == "file_open_error"
    assert result.message == f"Error opening file for reading: {missing}"
    assert dispatcher.document.snapshot() == ("keep",)


def test_reset_discards_document() -> None:
    dispatcher, events = make_dispatcher()
    dispatcher.dispatch("append x")

    dispatcher.dispatch("reset")

    assert dispatcher.document.is_empty
    changed = [payload for name, payload in events if name == "document.changed"]
    assert isinstance(changed[-1], dict)
    assert changed[-1]["status"] == "reset"
    assert changed[-1]["lines"] == 0


def test_clear_requests_screen_clear_only() -> None:
    dispatcher, _ = make_dispatcher()
    dispatcher.dispatch("append x")

    result = dispatcher.dispatch("8")

    assert result.clear_screen
    assert dispatcher.document.snapshot() == ("x",)


def test_help_lists_every_command() -> None:
    dispatcher, _ = make_dispatcher()

    result = dispatcher.dispatch("help")

    assert result.output == tuple(help_lines())
    assert result.output[0] == "Available commands:"
    assert len(result.output) == len(COMMANDS) + 1
    insert_help = "6. insert <line> <index> <text> - Insert text by line and symbol index"
    assert insert_help in result.output


def test_exit_requests_session_end() -> None:
    dispatcher, events = make_dispatcher()

    result = dispatcher.dispatch("10")

    assert result.exit
    assert result.message == "Exiting the editor."
    assert ("session.exit", None) in events
