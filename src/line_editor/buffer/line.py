"""Growable character storage for a single document line."""

from __future__ import annotations

from typing import List

from .validation import ensure_position

INITIAL_CAPACITY = 10


class LineBuffer:
    """One line of text backed by a list of characters.

    ``capacity`` mirrors a terminated character array: it always leaves room
    for ``length + 1`` slots and grows to twice the requested minimum
    whenever it runs short. It never shrinks, even when a replace truncates
    the line.
    """

    __slots__ = ("_chars", "_capacity")

    def __init__(self, text: str = "", *, capacity: int = INITIAL_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._chars: List[str] = []
        self._capacity = capacity
        if text:
            self.append(text)

    @property
    def text(self) -> str:
        return "".join(self._chars)

    @property
    def length(self) -> int:
        return len(self._chars)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._chars)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"LineBuffer({self.text!r}, capacity={self._capacity})"

    def ensure_capacity(self, min_capacity: int) -> None:
        if min_capacity > self._capacity:
            self._capacity = min_capacity * 2

    def append(self, text: str) -> None:
        self.ensure_capacity(self.length + len(text) + 1)
        self._chars.extend(text)

    def insert_substring(self, pos: int, substring: str) -> None:
        """Insert ``substring`` at ``pos``, shifting the tail to the right."""

        ensure_position(pos, self.length)
        self.ensure_capacity(self.length + len(substring) + 1)
        self._chars[pos:pos] = substring

    def replace_substring(self, pos: int, replacement: str) -> None:
        """Overwrite from ``pos`` with ``replacement`` and drop everything after it.

        The line ends up exactly ``pos + len(replacement)`` characters long.
        """

        ensure_position(pos, self.length)
        self.ensure_capacity(pos + len(replacement) + 1)
        del self._chars[pos:]
        self._chars.extend(replacement)


__all__ = ["INITIAL_CAPACITY", "LineBuffer"]
