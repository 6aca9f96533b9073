"""Front ends that host the command dispatcher."""

from .console import ConsoleSession

__all__ = ["ConsoleSession"]
