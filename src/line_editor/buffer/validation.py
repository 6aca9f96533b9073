"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .errors import InvalidLineIndex, InvalidPosition


def ensure_line_index(line_index: int, line_count: int) -> int:
    if line_index < 0 or line_index >= line_count:
        raise InvalidLineIndex(line_index, line_count)
    return line_index


def ensure_position(position: int, length: int) -> int:
    if position < 0 or position > length:
        raise InvalidPosition(position, length)
    return position
