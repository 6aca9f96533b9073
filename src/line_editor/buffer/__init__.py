"""Line buffers, the document that owns them, and their errors."""

from .document import Document
from .errors import (
    EditorError,
    FileOpenError,
    InvalidLineIndex,
    InvalidPosition,
    LineTooLongError,
)
from .line import INITIAL_CAPACITY, LineBuffer
from .search import SearchMatch, iter_offsets
from .validation import ensure_line_index, ensure_position

__all__ = [
    "Document",
    "LineBuffer",
    "INITIAL_CAPACITY",
    "SearchMatch",
    "iter_offsets",
    "EditorError",
    "FileOpenError",
    "InvalidLineIndex",
    "InvalidPosition",
    "LineTooLongError",
    "ensure_line_index",
    "ensure_position",
]
