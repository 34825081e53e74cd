"""Utilities for opening a captured file in the user's editor."""

from __future__ import annotations

from pathlib import Path

import click


class EditorError(RuntimeError):
    """Raised when the editor cannot be launched."""


def open_file(path: Path, editor: str | None = None) -> None:
    """Open ``path`` in ``editor`` (or ``$VISUAL``/``$EDITOR``) and wait."""

    try:
        click.edit(filename=str(path), editor=editor)
    except click.ClickException as exc:
        raise EditorError(f"Failed to launch editor: {exc.message}") from exc
    except OSError as exc:  # pragma: no cover - editor launch failure rare
        raise EditorError(f"Failed to launch editor: {exc}") from exc
