"""Substring scanning used by ``Document.search``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class SearchMatch:
    line: int
    offset: int

    def describe(self) -> str:
        return f"Found at line {self.line}, position {self.offset}"


def iter_offsets(text: str, pattern: str) -> Iterator[int]:
    """Yield non-overlapping offsets of ``pattern`` in ``text``, left to right.

    Scanning resumes after the end of each match, so ``"ab"`` in ``"ababab"``
    yields 0, 2 and 4 while ``"aa"`` in ``"aaaa"`` yields 0 and 2. An empty
    pattern yields nothing.
    """

    if not pattern:
        return
    step = len(pattern)
    offset = text.find(pattern)
    while offset != -1:
        yield offset
        offset = text.find(pattern, offset + step)


__all__ = ["SearchMatch", "iter_offsets"]
