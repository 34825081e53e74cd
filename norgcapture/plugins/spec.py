"""Hook specifications for norgcapture plugins."""

from __future__ import annotations

from collections.abc import Mapping

from ..config import NorgCaptureConfig
from ..registry import CaptureDefinition
from ..snippets import SnippetEngine
from ._markers import hookspec
from .types import PluginSettingsGetter


class NorgCaptureHookSpec:
    """Collection of pluggy hook specifications."""

    @hookspec
    def capture_definitions(
        self, config: NorgCaptureConfig
    ) -> Mapping[str, CaptureDefinition]:
        """Return additional captures keyed by name.

        Plugin captures may use callables for ``path``, ``content``,
        ``target`` and ``data``, and raw snippets for ``snippet``.
        """

    @hookspec(firstresult=True)
    def snippet_engine(
        self, config: NorgCaptureConfig, get_settings: PluginSettingsGetter
    ) -> SnippetEngine | None:
        """Return the snippet engine used to expand capture content."""
