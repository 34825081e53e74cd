"""Snippet engine contract and the built-in prompt-driven engine."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Protocol, Sequence

import click

from .buffer import Buffer

PromptFunc = Callable[[str, str], str]

TAB_STOP_MARKER = "{}"

# Escaped character, ``${n}`` / ``${n:default}``, or bare ``$n``.
_TOKEN_RE = re.compile(r"\\(.)|\$\{(\d+)(?::([^}]*))?\}|\$(\d+)", re.S)


class SnippetEngine(Protocol):
    """Builds snippets from bodies and expands them into a buffer."""

    def build_snippet(self, body: str, tab_stops: Sequence[int]) -> Any:  # pragma: no cover - Protocol
        """Return an engine-specific snippet for ``body``."""

    def expand(self, snippet: Any, buffer: Buffer, *, line: int, col: int) -> None:  # pragma: no cover - Protocol
        """Insert ``snippet`` into ``buffer`` at ``(line, col)``."""


@dataclass(slots=True, frozen=True)
class Snippet:
    """Snippet body using ``${n}`` tab stops, with ``\\`` escapes."""

    body: str
    tab_stops: tuple[int, ...]

    @classmethod
    def parse(cls, body: str) -> "Snippet":
        stops: set[int] = set()
        for match in _TOKEN_RE.finditer(body):
            number = match.group(2) or match.group(4)
            if number is not None:
                stops.add(int(number))
        return cls(body=body, tab_stops=tuple(sorted(stops)))


def to_snippet_body(text: str) -> tuple[str, tuple[int, ...]]:
    """Turn every ``{}`` in ``text`` into successive tab stops ``${1}``, ``${2}``...

    Backslashes and dollar signs are escaped so the rest of ``text`` is
    expanded literally.
    """

    escaped = text.replace("\\", "\\\\").replace("$", "\\$")
    parts = escaped.split(TAB_STOP_MARKER)
    body = parts[0]
    for number, part in enumerate(parts[1:], start=1):
        body += f"${{{number}}}" + part
    return body, tuple(range(1, len(parts)))


def _click_prompt(label: str, default: str) -> str:
    return click.prompt(label, default=default, show_default=bool(default))


class PromptSnippetEngine:
    """Expand snippets by asking for each tab stop on the terminal.

    When ``interactive`` is false every tab stop takes its default (or stays
    empty), which keeps captures usable from scripts.
    """

    def __init__(self, prompt: PromptFunc | None = None, *, interactive: bool = True) -> None:
        self._prompt = prompt or _click_prompt
        self.interactive = interactive

    def build_snippet(self, body: str, tab_stops: Sequence[int]) -> Snippet:
        return Snippet(body=body, tab_stops=tuple(tab_stops))

    def expand(self, snippet: Any, buffer: Buffer, *, line: int, col: int) -> None:
        if isinstance(snippet, str):
            snippet = Snippet.parse(snippet)
        if not isinstance(snippet, Snippet):
            raise TypeError(f"Unsupported snippet type: {type(snippet).__name__}")

        defaults = self._defaults(snippet.body)
        values: dict[int, str] = {}
        for number in snippet.tab_stops:
            default = defaults.get(number, "")
            if self.interactive:
                values[number] = self._prompt(f"Tab stop {number}", default)
            else:
                values[number] = default

        text, first_stop = self._render(snippet, values)
        buffer.insert_text(line, col, text)

        head = text[:first_stop]
        row = head.count("\n")
        if row:
            cursor_col = len(head) - head.rfind("\n") - 1
        else:
            cursor_col = col + len(head)
        buffer.set_cursor(line + row, cursor_col)

    @staticmethod
    def _defaults(body: str) -> dict[int, str]:
        defaults: dict[int, str] = {}
        for match in _TOKEN_RE.finditer(body):
            if match.group(2) is not None and match.group(3):
                defaults.setdefault(int(match.group(2)), match.group(3))
        return defaults

    @staticmethod
    def _render(snippet: Snippet, values: dict[int, str]) -> tuple[str, int]:
        """Return the expanded text and the offset where the first tab stop lands."""

        first = min(snippet.tab_stops) if snippet.tab_stops else None
        first_offset: int | None = None
        out: list[str] = []
        length = 0
        position = 0

        for match in _TOKEN_RE.finditer(snippet.body):
            literal = snippet.body[position : match.start()]
            out.append(literal)
            length += len(literal)
            position = match.end()

            if match.group(1) is not None:
                out.append(match.group(1))
                length += 1
                continue

            number = int(match.group(2) or match.group(4))
            if number == first and first_offset is None:
                first_offset = length
            value = values.get(number, "")
            out.append(value)
            length += len(value)

        tail = snippet.body[position:]
        out.append(tail)
        length += len(tail)

        text = "".join(out)
        return text, length if first_offset is None else first_offset
