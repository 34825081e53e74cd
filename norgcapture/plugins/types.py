"""Type definitions for norgcapture plugin contracts."""

from __future__ import annotations

from typing import Any, Mapping, Protocol


class PluginSettingsGetter(Protocol):
    """Callable returning the ``[plugins.<id>]`` table of the configuration."""

    def __call__(
        self,
        plugin_id: str,
        *,
        default: Mapping[str, Any] | None = None,
    ) -> Mapping[str, Any]:  # pragma: no cover - Protocol
        """Return the settings for ``plugin_id``."""
