"""norgcapture plugin infrastructure based on pluggy."""

from __future__ import annotations

from ._markers import ENTRY_POINT_GROUP, PLUGIN_NAMESPACE, hookimpl, hookspec
from .manager import (
    PluginRegistrationError,
    get_plugin_manager,
    load_capture_contributions,
    load_snippet_engine,
    reset_plugin_manager_cache,
)
from .types import PluginSettingsGetter

__all__ = [
    "ENTRY_POINT_GROUP",
    "PLUGIN_NAMESPACE",
    "PluginRegistrationError",
    "PluginSettingsGetter",
    "get_plugin_manager",
    "hookimpl",
    "hookspec",
    "load_capture_contributions",
    "load_snippet_engine",
    "reset_plugin_manager_cache",
]
