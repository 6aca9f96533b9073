"""Shared types for the command layer sitting in front of ``Document``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from line_editor.buffer import Document
from line_editor.runtime.config import EditorConfig


@dataclass(slots=True)
class CommandResult:
    """Outcome of one dispatched command, ready for a front end to render."""

    status: str = "ok"
    command: Optional[str] = None
    message: Optional[str] = None
    output: Tuple[str, ...] = ()
    error: bool = False
    exit: bool = False
    clear_screen: bool = False


class EditorBus:
    """Minimal event bus letting front ends observe dispatcher activity."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class CommandContext:
    """Services every command handler can reach."""

    document: Document
    bus: EditorBus = field(default_factory=EditorBus)
    config: EditorConfig = field(default_factory=EditorConfig)
    extras: Dict[str, object] = field(default_factory=dict)

    @classmethod
    def create(cls, config: Optional[EditorConfig] = None) -> "CommandContext":
        resolved = config or EditorConfig()
        return cls(document=Document(config=resolved), config=resolved)


class CommandUsageError(ValueError):
    """Raised by handlers when the arguments do not fit the command."""

    def __init__(self, usage: str) -> None:
        super().__init__(f"Usage: {usage}")
        self.usage = usage


CommandHandler = Callable[[CommandContext, str], CommandResult]


@dataclass(frozen=True, slots=True)
class CommandSpec:
    name: str
    number: Optional[int]
    usage: str
    summary: str
    handler: CommandHandler
    aliases: Tuple[str, ...] = ()

    @property
    def selectors(self) -> Tuple[str, ...]:
        numbered = (str(self.number),) if self.number is not None else ()
        return (self.name, *self.aliases, *numbered)


__all__ = [
    "CommandContext",
    "CommandHandler",
    "CommandResult",
    "CommandSpec",
    "CommandUsageError",
    "EditorBus",
]
