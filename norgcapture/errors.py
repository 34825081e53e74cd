"""Error types raised while resolving and executing captures."""

from __future__ import annotations


class CaptureError(RuntimeError):
    """Base error for capture failures; every one aborts the invocation."""


class ConfigurationError(CaptureError):
    """Raised when a capture definition or target reference is malformed."""


class NotFoundError(CaptureError):
    """Raised when a capture name or target heading cannot be found."""


class WorkspaceMismatch(CaptureError):
    """Raised when a capture cannot run in the current workspace."""


__all__ = [
    "CaptureError",
    "ConfigurationError",
    "NotFoundError",
    "WorkspaceMismatch",
]
