"""Turns one line of user input into exactly one document operation."""

from __future__ import annotations

import re
from typing import Dict, Optional

from line_editor.buffer import Document, EditorError
from line_editor.runtime import telemetry
from line_editor.runtime.config import EditorConfig

from .base import CommandContext, CommandResult, CommandSpec, CommandUsageError
from .handlers import build_command_table

_COMMAND_LINE = re.compile(r"^\s*(?P<name>\S+)(?:\s(?P<args>.*))?$", re.DOTALL)

UNKNOWN_COMMAND_MESSAGE = "The command is not implemented."


class CommandDispatcher:
    """Parses a command selector plus arguments and runs the matching handler.

    Errors raised by the document are reported through the returned
    ``CommandResult`` and the ``command.error`` bus event; they never escape
    ``dispatch``.
    """

    def __init__(
        self,
        context: Optional[CommandContext] = None,
        *,
        config: Optional[EditorConfig] = None,
    ) -> None:
        self.context = context or CommandContext.create(config)
        self._commands: Dict[str, CommandSpec] = build_command_table()

    @property
    def document(self) -> Document:
        return self.context.document

    def resolve(self, selector: str) -> Optional[CommandSpec]:
        return self._commands.get(selector) or self._commands.get(selector.lower())

    def dispatch(self, raw: str) -> CommandResult:
        line = raw.rstrip("\r\n")
        match = _COMMAND_LINE.match(line)
        if match is None:
            return CommandResult(status="empty")

        selector = match["name"]
        args = match["args"] or ""
        self.context.bus.emit("command.submit", line.strip())

        spec = self.resolve(selector)
        if spec is None:
            return self._unknown_command(selector)

        with telemetry.span(
            f"command::{spec.name}",
            component="commands",
            metadata={"command": spec.name, "selector": selector},
        ) as handle:
            try:
                result = spec.handler(self.context, args)
            except CommandUsageError as exc:
                handle.warn(str(exc))
                result = self._report(spec.name, "usage", str(exc))
            except EditorError as exc:
                handle.warn(str(exc))
                result = self._report(spec.name, exc.kind, str(exc))

        result.command = spec.name
        return result

    def _unknown_command(self, selector: str) -> CommandResult:
        telemetry.record_event(
            "command.unknown", level="warning", data={"selector": selector}
        )
        self.context.bus.emit("command.error", selector)
        return CommandResult(
            status="unknown_command",
            message=UNKNOWN_COMMAND_MESSAGE,
            error=True,
        )

    def _report(self, command: str, status: str, message: str) -> CommandResult:
        telemetry.record_event(
            "command.error",
            level="warning",
            data={"command": command, "status": status, "reason": message},
        )
        self.context.bus.emit(
            "command.error", {"command": command, "status": status, "message": message}
        )
        return CommandResult(status=status, message=message, error=True)


__all__ = ["CommandDispatcher", "UNKNOWN_COMMAND_MESSAGE"]
