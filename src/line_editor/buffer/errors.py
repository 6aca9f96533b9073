"""Recoverable errors raised by line buffers and documents."""

from __future__ import annotations

import os
from typing import Literal, Union

PathLike = Union[str, "os.PathLike[str]"]


class EditorError(RuntimeError):
    """Base class for every error the dispatcher reports back to the user."""

    kind: str = "editor_error"


class FileOpenError(EditorError):
    """Raised when a document cannot be read from or written to ``path``."""

    kind = "file_open_error"

    def __init__(self, path: PathLike, *, mode: Literal["r", "w"]) -> None:
        action = "reading" if mode == "r" else "writing"
        super().__init__(f"Error opening file for {action}: {os.fspath(path)}")
        self.path = os.fspath(path)
        self.mode = mode


class InvalidLineIndex(EditorError):
    """Raised when a line index does not address an existing line."""

    kind = "invalid_line"

    def __init__(self, line_index: int, line_count: int) -> None:
        super().__init__("Invalid line number")
        self.line_index = line_index
        self.line_count = line_count


class InvalidPosition(EditorError):
    """Raised when a column falls outside ``0..length`` of its line."""

    kind = "invalid_position"

    def __init__(self, position: int, length: int) -> None:
        super().__init__("Invalid position")
        self.position = position
        self.length = length


class LineTooLongError(EditorError):
    """Raised on load when a line exceeds the configured limit."""

    kind = "line_too_long"

    def __init__(self, line_number: int, length: int, limit: int) -> None:
        super().__init__(
            f"Line {line_number} is {length} characters long (limit {limit})"
        )
        self.line_number = line_number
        self.length = length
        self.limit = limit


__all__ = [
    "EditorError",
    "FileOpenError",
    "InvalidLineIndex",
    "InvalidPosition",
    "LineTooLongError",
]
