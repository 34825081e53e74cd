"""Insertion point planning for captures appended to existing documents."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Sequence

from .outline import Heading


class InsertPosition(str, enum.Enum):
    """Where captured text goes relative to its target."""

    TOP = "top"
    BOTTOM = "bottom"


@dataclass(slots=True, frozen=True)
class InsertionPlan:
    """Resolved insertion point for a capture.

    ``fences`` closing-fence lines go at ``anchor``; content (preceded by a
    blank line when ``blank_line`` is set) goes at ``line``. All indexes are
    0-based with insert-before semantics.
    """

    anchor: int
    fences: int = 0
    blank_line: bool = False

    @property
    def line(self) -> int:
        return self.anchor + self.fences


def enclosing_level(headings: Sequence[Heading], line: int) -> int | None:
    """Return the deepest level among headings whose range ends at ``line``."""

    deepest: int | None = None
    for heading in headings:
        if heading.end == line and (deepest is None or heading.level > deepest):
            deepest = heading.level
    return deepest


def plan_insertion(
    headings: Sequence[Heading],
    target: Heading | None,
    insert_position: InsertPosition,
    line_count: int,
    *,
    blank_line: bool = False,
) -> InsertionPlan:
    """Compute where appended content goes.

    Without a target the content goes at the top or the end of the document.
    With a target it goes right after the heading line, or at the end of the
    heading's range. Appending at the end of a range may land inside deeper
    headings that end on the same line; one closing fence per extra level is
    then planned so the content belongs to the target and not to whichever
    nested heading occupies the end of its range.
    """

    if target is None:
        anchor = 0 if insert_position is InsertPosition.TOP else line_count
        return InsertionPlan(anchor=anchor, blank_line=blank_line)

    if insert_position is InsertPosition.TOP:
        return InsertionPlan(anchor=target.start + 1, blank_line=blank_line)

    anchor = target.end
    fences = 0
    deepest = enclosing_level(headings, anchor)
    if deepest is not None and deepest > target.level:
        fences = deepest - target.level
    return InsertionPlan(anchor=anchor, fences=fences, blank_line=blank_line)


def plan_new_file() -> InsertionPlan:
    """Plan for a freshly created file: content at the very first line."""

    return InsertionPlan(anchor=0)
