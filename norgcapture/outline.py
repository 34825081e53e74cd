"""Heading extraction and lookup for Norg documents.

The outline is kept flat: headings are stored in document order and the
hierarchy is derived from their levels and line ranges when needed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from .errors import ConfigurationError, NotFoundError

MAX_LEVEL = 6
WILDCARD_LEVEL = -1
CLOSING_FENCE = "---"

_HEADING_RE = re.compile(r"^\s*(\*+)\s+(\S.*)$")
_WEAK_DELIMITER_RE = re.compile(r"^\s*-{3,}\s*$")
_STRONG_DELIMITER_RE = re.compile(r"^\s*={3,}\s*$")
_VERBATIM_START_RE = re.compile(r"^\s*@(?!end\b)[\w.-]+")
_VERBATIM_END_RE = re.compile(r"^\s*@end\s*$")

_LEVELED_TARGET_RE = re.compile(r"^(\*{1,6}) (.+)$")
_WILDCARD_TARGET_RE = re.compile(r"^# (.+)$")


@dataclass(slots=True, frozen=True)
class HeadingNode:
    """Raw outline node: heading line ``start`` up to ``end`` (exclusive)."""

    level: int
    start: int
    end: int


@dataclass(slots=True, frozen=True)
class Heading:
    """A heading with its title and the line range it governs.

    ``end`` is the line before which content appended to the heading goes.
    """

    start: int
    end: int
    title: str
    level: int


def is_closing_fence(line: str) -> bool:
    return bool(_WEAK_DELIMITER_RE.match(line))


def query_heading_nodes(lines: Sequence[str]) -> list[HeadingNode]:
    """Scan ``lines`` and return heading nodes in document order.

    A node runs until the next heading of the same or a shallower level. A
    ``---`` line closes the innermost open heading and is part of it, a
    ``===`` line closes every open heading and is part of none. Ranged
    verbatim blocks (``@code`` ... ``@end``) are skipped; an ``@`` line with
    no ``@end`` after it is ordinary text.
    """

    starts: list[tuple[int, int]] = []
    ends: dict[int, int] = {}
    # Stack of (level, start) for headings that are still open.
    open_headings: list[tuple[int, int]] = []
    in_verbatim = False
    last_end = max(
        (index for index, line in enumerate(lines) if _VERBATIM_END_RE.match(line)),
        default=-1,
    )

    for index, line in enumerate(lines):
        if in_verbatim:
            if _VERBATIM_END_RE.match(line):
                in_verbatim = False
            continue
        if index < last_end and _VERBATIM_START_RE.match(line):
            in_verbatim = True
            continue

        match = _HEADING_RE.match(line)
        if match:
            level = min(len(match.group(1)), MAX_LEVEL)
            while open_headings and open_headings[-1][0] >= level:
                _, start = open_headings.pop()
                ends[start] = index
            open_headings.append((level, index))
            starts.append((level, index))
        elif _WEAK_DELIMITER_RE.match(line):
            if open_headings:
                _, start = open_headings.pop()
                ends[start] = index + 1
        elif _STRONG_DELIMITER_RE.match(line):
            while open_headings:
                _, start = open_headings.pop()
                ends[start] = index

    for _, start in open_headings:
        ends[start] = len(lines)

    return [HeadingNode(level=level, start=start, end=ends[start]) for level, start in starts]


def _title_from_line(line: str) -> str:
    match = _HEADING_RE.match(line)
    if match is None:  # pragma: no cover - nodes always start on a heading line
        return line.strip()
    return match.group(2).strip()


def extract_headings(lines: Sequence[str]) -> tuple[Heading, ...]:
    """Return every heading of the document in document order.

    When a heading's node ends with the closing fence that closed it, the
    range is pulled back by one line so nothing is inserted after the fence.
    A fence shared with a nested node that ends on the same line closed that
    nested heading and is left alone.
    """

    nodes = query_heading_nodes(lines)
    headings: list[Heading] = []
    for node in nodes:
        end = node.end
        if (
            end - 1 > node.start
            and is_closing_fence(lines[end - 1])
            and not any(o.end == node.end and o.start > node.start for o in nodes)
        ):
            end -= 1
        headings.append(
            Heading(
                start=node.start,
                end=end,
                title=_title_from_line(lines[node.start]),
                level=node.level,
            )
        )
    return tuple(headings)


def parse_target(reference: str) -> tuple[int, str]:
    """Split a target reference into ``(level, title)``.

    ``"** Tasks"`` targets a level-2 heading titled ``Tasks``; ``"# Tasks"``
    matches the title at any level and yields ``WILDCARD_LEVEL``.
    """

    match = _LEVELED_TARGET_RE.match(reference)
    if match:
        return len(match.group(1)), match.group(2).strip()

    match = _WILDCARD_TARGET_RE.match(reference)
    if match:
        return WILDCARD_LEVEL, match.group(1).strip()

    raise ConfigurationError(
        f"Invalid target '{reference}': expected '* Title' (1-6 stars) or '# Title'."
    )


def find_heading(reference: str, headings: Sequence[Heading]) -> Heading:
    """Return the first heading matching ``reference`` in document order."""

    level, title = parse_target(reference)
    for heading in headings:
        if heading.title != title:
            continue
        if level == WILDCARD_LEVEL or heading.level == level:
            return heading
    raise NotFoundError(f"No heading matching '{reference}' found.")
