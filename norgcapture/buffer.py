"""Line buffer over a document on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class Buffer:
    """In-memory lines of a document, written back with :meth:`save`.

    The buffer is read once when opened; every mutation happens in memory
    and the file is only touched again by ``save``.
    """

    def __init__(
        self, path: Path, lines: Iterable[str] = (), *, trailing_newline: bool = True
    ) -> None:
        self.path = path
        self._lines: list[str] = list(lines)
        self.trailing_newline = trailing_newline
        self.cursor: tuple[int, int] = (0, 0)
        self.modified = False

    @classmethod
    def open(cls, path: Path) -> "Buffer":
        """Load ``path``; a missing file yields an empty buffer.

        Lines are split on ``\\n`` only, so form feeds and other separators
        stay inside their line.
        """

        if not path.exists():
            return cls(path)
        text = path.read_text(encoding="utf-8")
        if not text:
            return cls(path)
        lines, trailing_newline = split_lines(text)
        return cls(path, lines, trailing_newline=trailing_newline)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def line_count(self) -> int:
        return len(self._lines)

    def insert_lines(self, at: int, lines: Iterable[str]) -> None:
        """Insert ``lines`` before line ``at`` (``at == line_count()`` appends)."""

        self._check_line(at)
        self._lines[at:at] = list(lines)
        self.modified = True

    def insert_text(self, line: int, col: int, text: str) -> None:
        """Insert ``text`` at ``(line, col)``, splitting it across lines.

        The text before ``col`` prefixes the first inserted line and the rest
        of the original line follows the last one. Inserting at
        ``line_count()`` starts a new last line.
        """

        self._check_line(line)
        current = self._lines[line] if line < len(self._lines) else ""
        if col < 0 or col > len(current):
            raise ValueError(f"Column {col} is outside line {line} of {self.path}.")

        pieces = text.split("\n")
        pieces[0] = current[:col] + pieces[0]
        pieces[-1] = pieces[-1] + current[col:]
        self._lines[line : line + 1] = pieces
        self.modified = True

    def set_cursor(self, line: int, col: int) -> None:
        self.cursor = (line, col)

    def save(self) -> None:
        """Write the buffer back with the line ending it was read with."""

        content = "\n".join(self._lines)
        if self._lines and self.trailing_newline:
            content += "\n"
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(content, encoding="utf-8")
        self.modified = False

    def _check_line(self, line: int) -> None:
        if line < 0 or line > len(self._lines):
            raise ValueError(
                f"Line {line} is outside {self.path} ({len(self._lines)} lines)."
            )


def split_lines(text: str) -> tuple[list[str], bool]:
    """Split ``text`` on ``\\n`` and report whether it ended with one."""

    lines = text.split("\n")
    trailing_newline = text.endswith("\n")
    if trailing_newline:
        lines.pop()
    return lines, trailing_newline
