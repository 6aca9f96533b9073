"""Core document data structure: an ordered list of line buffers."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, TextIO

from line_editor.runtime import telemetry
from line_editor.runtime.config import EditorConfig

from .errors import FileOpenError, LineTooLongError, PathLike
from .line import LineBuffer
from .search import SearchMatch, iter_offsets
from .validation import ensure_line_index


@dataclass(slots=True, eq=False)
class Document:
    """Owns every line of the edited text.

    The last line is the *current* line: ``append_text`` always writes to it
    and ``start_new_line`` retires it in favour of a fresh empty line. Callers
    only ever see line contents as ``str``; the buffers never leave the
    document.
    """

    _lines: List[LineBuffer] = field(default_factory=list)
    config: EditorConfig = field(default_factory=EditorConfig)
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], *, config: Optional[EditorConfig] = None
    ) -> "Document":
        document = cls(config=config or EditorConfig())
        document._rebuild(lines)
        document.dirty = False
        return document

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def current_line(self) -> Optional[str]:
        if not self._lines:
            return None
        return self._lines[-1].text

    @property
    def text(self) -> str:
        return "\n".join(self.iter_lines())

    def __len__(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[ensure_line_index(index, len(self._lines))].text

    def snapshot(self) -> Sequence[str]:
        return tuple(self.iter_lines())

    def iter_lines(self) -> Iterator[str]:
        """Yield line contents in index order, read at iteration time."""

        for line in self._lines:
            yield line.text

    def print_lines(self, stream: Optional[TextIO] = None) -> int:
        out = stream if stream is not None else sys.stdout
        count = 0
        for content in self.iter_lines():
            out.write(f"{content}\n")
            count += 1
        return count

    # -- mutation -----------------------------------------------------------

    def append_text(self, text: str) -> None:
        if not self._lines:
            self._lines.append(LineBuffer())
        self._lines[-1].append(text)
        self._touch()

    def start_new_line(self) -> None:
        self._lines.append(LineBuffer())
        self._touch()

    def clear(self) -> None:
        self._lines.clear()
        self._touch()

    def insert_substring(self, line_index: int, pos: int, substring: str) -> None:
        self._line_at(line_index).insert_substring(pos, substring)
        self._touch()

    def replace_substring(self, line_index: int, pos: int, replacement: str) -> None:
        self._line_at(line_index).replace_substring(pos, replacement)
        self._touch()

    # -- search -------------------------------------------------------------

    def search(self, pattern: str) -> Iterator[SearchMatch]:
        """Yield every non-overlapping occurrence of ``pattern``, line by line."""

        for index, line in enumerate(self._lines):
            for offset in iter_offsets(line.text, pattern):
                yield SearchMatch(line=index, offset=offset)

    # -- persistence --------------------------------------------------------

    def save_to_file(self, path: PathLike) -> int:
        """Write one line per document line, replacing ``path``.

        The content is encoded before the file is opened, so text the
        configured encoding cannot represent leaves an existing file as it was.
        Returns the number of lines written.
        """

        with telemetry.span(
            "document::save",
            component="document",
            metadata={"path": os.fspath(path)},
        ) as handle:
            count = self.line_count
            try:
                payload = "".join(f"{text}\n" for text in self.iter_lines()).encode(
                    self.config.encoding
                )
                with open(path, "wb") as out:
                    out.write(payload)
            except (OSError, UnicodeEncodeError, LookupError) as exc:
                raise FileOpenError(path, mode="w") from exc
            handle.add_metadata("lines", count)
        self.dirty = False
        telemetry.record_event(
            "document.save", data={"path": os.fspath(path), "lines": count}
        )
        return count

    def load_from_file(self, path: PathLike) -> int:
        """Replace the content with the lines of ``path``.

        The file is read completely before anything is discarded, so a
        missing file or an over-long line leaves the document untouched.
        Returns the number of lines loaded.
        """

        with telemetry.span(
            "document::load",
            component="document",
            metadata={"path": os.fspath(path)},
        ) as handle:
            staged = self._read_lines(path)
            self._rebuild(staged)
            handle.add_metadata("lines", len(staged))
        self.dirty = False
        telemetry.record_event(
            "document.load", data={"path": os.fspath(path), "lines": len(staged)}
        )
        return len(staged)

    def _read_lines(self, path: PathLike) -> List[str]:
        limit = self.config.max_line_length
        staged: List[str] = []
        try:
            # "\n" and "\r\n" end a line; a lone "\r" stays in the content.
            with open(path, "r", encoding=self.config.encoding, newline="\n") as source:
                for number, raw in enumerate(source):
                    if raw.endswith("\r\n"):
                        content = raw[:-2]
                    else:
                        content = raw.removesuffix("\n")
                    if limit is not None and len(content) > limit:
                        if self.config.overlong_lines == "error":
                            raise LineTooLongError(number, len(content), limit)
                        content = content[:limit]
                    staged.append(content)
        except (OSError, UnicodeDecodeError, LookupError) as exc:
            raise FileOpenError(path, mode="r") from exc
        return staged

    def _rebuild(self, lines: Iterable[str]) -> None:
        self.clear()
        for index, content in enumerate(lines):
            if index:
                self.start_new_line()
            self.append_text(content)

    def _line_at(self, line_index: int) -> LineBuffer:
        return self._lines[ensure_line_index(line_index, len(self._lines))]

    def _touch(self) -> None:
        self.version += 1
        self.dirty = True


__all__ = ["Document"]
