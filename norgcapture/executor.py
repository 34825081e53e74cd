"""Capture execution: from a capture name to an updated document."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

import structlog

from .buffer import Buffer, split_lines
from .errors import CaptureError, ConfigurationError, WorkspaceMismatch
from .outline import CLOSING_FENCE, extract_headings, find_heading
from .placeholders import Clock, resolve_placeholders, substitute
from .planner import InsertionPlan, plan_insertion, plan_new_file
from .registry import CaptureKind, CaptureRegistry, ResolvedCapture
from .snippets import SnippetEngine, to_snippet_body
from .workspace import WorkspaceManager

logger = structlog.get_logger(__name__)


@dataclass(slots=True, frozen=True)
class CaptureResult:
    """Outcome of a successful capture."""

    name: str
    path: Path
    workspace: str | None
    line: int
    cursor: tuple[int, int]


class CaptureExecutor:
    """Run captures against a workspace.

    ``snippet_engine`` is optional: without one, content is inserted as plain
    text and captures that only define a raw ``snippet`` cannot run.
    """

    def __init__(
        self,
        registry: CaptureRegistry,
        workspaces: WorkspaceManager,
        *,
        auto_switch: bool = False,
        snippet_engine: SnippetEngine | None = None,
        now: Clock | None = None,
        environ: Mapping[str, str] | None = None,
        open_buffer: Callable[[Path], Buffer] = Buffer.open,
    ) -> None:
        self.registry = registry
        self.workspaces = workspaces
        self.auto_switch = auto_switch
        self.snippet_engine = snippet_engine
        self._now = now
        self._environ = environ
        self._open_buffer = open_buffer

    def run(self, name: str) -> CaptureResult:
        """Execute the capture called ``name``.

        Every check that does not need to touch the workspace (definition,
        workspace constraint, target syntax, target lookup) happens before the
        file is created. Once mutations start there is no rollback.
        """

        log = logger.bind(capture=name)
        try:
            capture = self.registry.resolve(name)
            self._enforce_workspace(capture)

            placeholders = resolve_placeholders(
                capture, now=self._now, environ=self._environ
            )
            relative_path = substitute(capture.path.resolve(), placeholders)
            location = self.workspaces.resolve_path(relative_path)
            buffer = self._open_buffer(location)

            payload = self._payload(capture, placeholders)
            plan = self._plan(
                capture, buffer, blank_line=self.snippet_engine is not None
            )
        except CaptureError as exc:
            log.error("Capture aborted", error=str(exc))
            raise

        log.debug(
            "Planned capture",
            path=str(location),
            anchor=plan.anchor,
            fences=plan.fences,
            line=plan.line,
        )

        self.workspaces.create_file(relative_path)
        self._apply(buffer, plan, payload)
        buffer.save()

        log.info("Capture complete", path=str(location), line=plan.line)
        return CaptureResult(
            name=name,
            path=location,
            workspace=self.workspaces.get_current_workspace(),
            line=plan.line,
            cursor=buffer.cursor,
        )

    def _enforce_workspace(self, capture: ResolvedCapture) -> None:
        required = capture.workspace
        if required is None:
            return

        current = self.workspaces.get_current_workspace()
        if self.auto_switch and current != required:
            if self.workspaces.set_workspace(required):
                logger.info("Switched workspace for capture", workspace=required)
                current = required

        if current != required:
            raise WorkspaceMismatch(
                f"Cannot execute this capture outside of the workspace: {required}"
            )

    def _payload(
        self, capture: ResolvedCapture, placeholders: Mapping[str, str]
    ) -> Any:
        """Return the snippet to expand, or the plain lines to insert."""

        if self.snippet_engine is None:
            if capture.content is None:
                raise ConfigurationError(
                    f"Capture '{capture.name}' defines a snippet but no snippet "
                    "engine is available."
                )
            text = substitute(capture.content.resolve(), placeholders)
            lines, _ = split_lines(text)
            return lines

        if capture.snippet is not None:
            return capture.snippet

        text = substitute(capture.content.resolve(), placeholders)
        body, tab_stops = to_snippet_body(text)
        return self.snippet_engine.build_snippet(body, tab_stops)

    def _plan(
        self, capture: ResolvedCapture, buffer: Buffer, *, blank_line: bool
    ) -> InsertionPlan:
        if capture.kind is CaptureKind.NEW_FILE:
            return plan_new_file()

        headings = extract_headings(buffer.lines)
        target = None
        if capture.target is not None:
            target = find_heading(capture.target.resolve(), headings)

        return plan_insertion(
            headings,
            target,
            capture.insert_position,
            buffer.line_count(),
            blank_line=blank_line,
        )

    def _apply(self, buffer: Buffer, plan: InsertionPlan, payload: Any) -> None:
        # Closing fences first, then the blank line, then the snippet anchor.
        if plan.fences:
            buffer.insert_lines(plan.anchor, [CLOSING_FENCE] * plan.fences)

        if self.snippet_engine is None:
            buffer.insert_lines(plan.line, payload)
            buffer.set_cursor(plan.line, 0)
            return

        if plan.blank_line:
            buffer.insert_lines(plan.line, [""])
        buffer.set_cursor(plan.line, 0)
        self.snippet_engine.expand(payload, buffer, line=plan.line, col=0)
