"""Command handlers mapping parsed arguments onto ``Document`` operations."""

from __future__ import annotations

import re
from typing import Dict, List, Tuple

from .base import CommandContext, CommandResult, CommandSpec, CommandUsageError

_ADDRESSED_TEXT = re.compile(
    r"^\s*(?P<line>[-+]?\d+)\s+(?P<pos>[-+]?\d+)(?:\s(?P<text>.*))?$", re.DOTALL
)


def _parse_addressed(args: str, usage: str) -> Tuple[int, int, str]:
    match = _ADDRESSED_TEXT.match(args)
    if match is None:
        raise CommandUsageError(usage)
    return int(match["line"]), int(match["pos"]), match["text"] or ""


def _require_path(args: str, usage: str) -> str:
    path = args.strip()
    if not path:
        raise CommandUsageError(usage)
    return path


def _changed(context: CommandContext, status: str) -> CommandResult:
    document = context.document
    context.bus.emit(
        "document.changed",
        {"status": status, "version": document.version, "lines": document.line_count},
    )
    return CommandResult(status=status)


def handle_append(context: CommandContext, args: str) -> CommandResult:
    context.document.append_text(args)
    return _changed(context, "append")


def handle_newline(context: CommandContext, args: str) -> CommandResult:
    del args
    context.document.start_new_line()
    return _changed(context, "newline")


def handle_load(context: CommandContext, args: str) -> CommandResult:
    path = _require_path(args, "load <filename>")
    count = context.document.load_from_file(path)
    context.bus.emit("document.loaded", {"path": path, "lines": count})
    return CommandResult(status="load", message=f"Document loaded from {path}")


def handle_save(context: CommandContext, args: str) -> CommandResult:
    path = _require_path(args, "save <filename>")
    count = context.document.save_to_file(path)
    context.bus.emit("document.saved", {"path": path, "lines": count})
    return CommandResult(status="save", message=f"Document saved to {path}")


def handle_print(context: CommandContext, args: str) -> CommandResult:
    del args
    return CommandResult(status="print", output=tuple(context.document.iter_lines()))


def handle_insert(context: CommandContext, args: str) -> CommandResult:
    line, pos, text = _parse_addressed(args, "insert <line> <index> <text>")
    context.document.insert_substring(line, pos, text)
    return _changed(context, "insert")


def handle_replace(context: CommandContext, args: str) -> CommandResult:
    line, pos, text = _parse_addressed(args, "replace <line> <index> <text>")
    context.document.replace_substring(line, pos, text)
    return _changed(context, "replace")


def handle_search(context: CommandContext, args: str) -> CommandResult:
    if not args:
        raise CommandUsageError("search <text>")
    found = tuple(match.describe() for match in context.document.search(args))
    message = None if found else f"No matches for '{args}'"
    return CommandResult(status="search", output=found, message=message)


def handle_clear_screen(context: CommandContext, args: str) -> CommandResult:
    del context, args
    return CommandResult(status="clear", clear_screen=True)


def handle_reset(context: CommandContext, args: str) -> CommandResult:
    del args
    context.document.clear()
    return _changed(context, "reset")


def handle_help(context: CommandContext, args: str) -> CommandResult:
    del context, args
    return CommandResult(status="help", output=tuple(help_lines()))


def handle_exit(context: CommandContext, args: str) -> CommandResult:
    del args
    context.bus.emit("session.exit", None)
    return CommandResult(status="exit", exit=True, message="Exiting the editor.")


COMMANDS: Tuple[CommandSpec, ...] = (
    CommandSpec(
        name="append",
        number=1,
        usage="append <text>",
        summary="Append text symbols to the end",
        handler=handle_append,
        aliases=("a",),
    ),
    CommandSpec(
        name="newline",
        number=2,
        usage="newline",
        summary="Start a new line",
        handler=handle_newline,
        aliases=("nl",),
    ),
    CommandSpec(
        name="load",
        number=3,
        usage="load <filename>",
        summary="Load text from a file",
        handler=handle_load,
        aliases=("open",),
    ),
    CommandSpec(
        name="save",
        number=4,
        usage="save <filename>",
        summary="Save text to a file",
        handler=handle_save,
        aliases=("write",),
    ),
    CommandSpec(
        name="print",
        number=5,
        usage="print",
        summary="Print the current text",
        handler=handle_print,
        aliases=("p",),
    ),
    CommandSpec(
        name="insert",
        number=6,
        usage="insert <line> <index> <text>",
        summary="Insert text by line and symbol index",
        handler=handle_insert,
        aliases=("i",),
    ),
    CommandSpec(
        name="search",
        number=7,
        usage="search <text>",
        summary="Search for text in the document",
        handler=handle_search,
        aliases=("find",),
    ),
    CommandSpec(
        name="clear",
        number=8,
        usage="clear",
        summary="Clear the console",
        handler=handle_clear_screen,
    ),
    CommandSpec(
        name="help",
        number=9,
        usage="help",
        summary="Print this help information",
        handler=handle_help,
        aliases=("h", "?"),
    ),
    CommandSpec(
        name="exit",
        number=10,
        usage="exit",
        summary="Exit the editor",
        handler=handle_exit,
        aliases=("quit", "q"),
    ),
    CommandSpec(
        name="replace",
        number=11,
        usage="replace <line> <index> <text>",
        summary="Overwrite text from a symbol index to the end of the line",
        handler=handle_replace,
        aliases=("r",),
    ),
    CommandSpec(
        name="reset",
        number=None,
        usage="reset",
        summary="Discard the whole document",
        handler=handle_reset,
    ),
)


def build_command_table() -> Dict[str, CommandSpec]:
    table: Dict[str, CommandSpec] = {}
    for spec in COMMANDS:
        for selector in spec.selectors:
            if selector in table:
                raise ValueError(f"Command selector '{selector}' registered twice")
            table[selector] = spec
    return table


def help_lines() -> List[str]:
    lines = ["Available commands:"]
    for spec in COMMANDS:
        prefix = f"{spec.number}. " if spec.number is not None else "-. "
        lines.append(f"{prefix}{spec.usage} - {spec.summary}")
    return lines


__all__ = ["COMMANDS", "build_command_table", "help_lines"]
