"""Minimal line-oriented text editor."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "runtime",
]

__version__ = "0.1.0"
