"""Configuration helpers for norgcapture plugins."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from ..config import NorgCaptureConfig
from .types import PluginSettingsGetter

_EMPTY_MAPPING: Mapping[str, Any] = MappingProxyType({})


def build_settings_getter(config: NorgCaptureConfig) -> PluginSettingsGetter:
    """Return a callable that fetches plugin-specific configuration blocks."""

    def get_settings(
        plugin_id: str,
        *,
        default: Mapping[str, Any] | None = None,
    ) -> Mapping[str, Any]:
        data = config.plugins.get(plugin_id)
        if data is not None:
            return MappingProxyType(dict(data))
        if default is not None:
            return MappingProxyType(dict(default))
        return _EMPTY_MAPPING

    return get_settings


__all__ = ["build_settings_getter"]
