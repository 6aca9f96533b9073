"""Command parsing and dispatch in front of the document core."""

from .base import (
    CommandContext,
    CommandResult,
    CommandSpec,
    CommandUsageError,
    EditorBus,
)
from .dispatcher import UNKNOWN_COMMAND_MESSAGE, CommandDispatcher
from .handlers import COMMANDS, help_lines

__all__ = [
    "COMMANDS",
    "CommandContext",
    "CommandDispatcher",
    "CommandResult",
    "CommandSpec",
    "CommandUsageError",
    "EditorBus",
    "UNKNOWN_COMMAND_MESSAGE",
    "help_lines",
]
