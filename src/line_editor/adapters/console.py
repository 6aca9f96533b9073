"""Interactive prompt loop hosting the dispatcher on a plain terminal."""

from __future__ import annotations

import os
import sys
from typing import Callable, Iterable, Optional, TextIO

from line_editor.commands import CommandDispatcher, CommandResult, help_lines
from line_editor.runtime import telemetry


def clear_console() -> None:
    os.system("cls" if os.name == "nt" else "clear")


class ConsoleSession:
    """Reads commands line by line until ``exit`` or end of input."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        *,
        input_func: Optional[Callable[[str], str]] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        clear_screen: Callable[[], None] = clear_console,
    ) -> None:
        self.dispatcher = dispatcher
        self._input = input_func or input
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr
        self._clear_screen = clear_screen
        self.prompt = f"\n{dispatcher.context.config.prompt}"

    def run(self) -> int:
        telemetry.record_event("session.start", data={"ui": "console"})
        self._write_lines(self._stdout, help_lines())
        commands = 0
        while True:
            try:
                raw = self._input(self.prompt)
            except (EOFError, KeyboardInterrupt):
                self._stdout.write("\n")
                break
            except UnicodeDecodeError as exc:
                telemetry.record_event(
                    "session.input_error", level="warning", data={"reason": str(exc)}
                )
                self._write_lines(self._stderr, (f"Could not decode input: {exc}",))
                continue
            result = self.dispatcher.dispatch(raw)
            commands += 1
            self.render(result)
            if result.exit:
                break
        telemetry.record_event("session.end", data={"commands": commands})
        return 0

    def render(self, result: CommandResult) -> None:
        if result.clear_screen:
            self._clear_screen()
        self._write_lines(self._stdout, result.output)
        if result.message:
            target = self._stderr if result.error else self._stdout
            self._write_lines(target, (result.message,))
        self._stdout.flush()

    @staticmethod
    def _write_lines(stream: TextIO, lines: Iterable[str]) -> None:
        for line in lines:
            stream.write(f"{line}\n")


__all__ = ["ConsoleSession", "clear_console"]
