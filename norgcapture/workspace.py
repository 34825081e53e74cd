"""Workspace selection and file creation inside workspace roots."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

import structlog

from .errors import ConfigurationError, WorkspaceMismatch

logger = structlog.get_logger(__name__)


class WorkspaceManager:
    """Named workspace roots and the currently selected one."""

    def __init__(
        self, workspaces: Mapping[str, Path], current: str | None = None
    ) -> None:
        self.workspaces = {name: Path(root).expanduser() for name, root in workspaces.items()}
        self._current: str | None = None
        if current is not None and not self.set_workspace(current):
            raise ConfigurationError(f"Unknown workspace '{current}'.")

    def get_current_workspace(self) -> str | None:
        return self._current

    def set_workspace(self, name: str) -> bool:
        """Select ``name``; return ``False`` when no such workspace exists."""

        if name not in self.workspaces:
            logger.error("Unable to switch to unknown workspace", workspace=name)
            return False
        if name != self._current:
            logger.debug("Switched workspace", workspace=name, previous=self._current)
        self._current = name
        return True

    @property
    def root(self) -> Path:
        if self._current is None:
            raise WorkspaceMismatch("No workspace is selected.")
        return self.workspaces[self._current]

    def resolve_path(self, path: str) -> Path:
        """Return the absolute location of ``path`` inside the current workspace."""

        root = self.root.resolve()
        candidate = (root / path).resolve()
        if not candidate.is_relative_to(root):
            raise ConfigurationError(
                f"Path '{path}' points outside workspace '{self._current}'."
            )
        return candidate

    def create_file(self, path: str) -> Path:
        """Create ``path`` (and its parent folders) if missing; return its location."""

        location = self.resolve_path(path)
        if not location.exists():
            location.parent.mkdir(parents=True, exist_ok=True)
            location.touch()
            logger.info("Created file", path=str(location), workspace=self._current)
        return location
