"""Built-in norgcapture plugins."""

from __future__ import annotations

from . import prompt

BUILTIN_PLUGINS = (prompt,)

__all__ = ["BUILTIN_PLUGINS"]
