"""Pluggy markers and constants for the norgcapture plugin namespace."""

from __future__ import annotations

import pluggy

PLUGIN_NAMESPACE = "norgcapture"
ENTRY_POINT_GROUP = "norgcapture.plugins"

hookspec = pluggy.HookspecMarker(PLUGIN_NAMESPACE)
hookimpl = pluggy.HookimplMarker(PLUGIN_NAMESPACE)

__all__ = ["PLUGIN_NAMESPACE", "ENTRY_POINT_GROUP", "hookspec", "hookimpl"]
