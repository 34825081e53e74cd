"""Built-in snippet engine plugin that prompts for each tab stop."""

from __future__ import annotations

from ...config import NorgCaptureConfig
from ...snippets import PromptSnippetEngine
from .._markers import hookimpl
from ..types import PluginSettingsGetter

PLUGIN_ID = "prompt"


@hookimpl(trylast=True)
def snippet_engine(
    config: NorgCaptureConfig, get_settings: PluginSettingsGetter
) -> PromptSnippetEngine:
    """Expose the prompt engine; other plugins' engines take precedence."""

    settings = get_settings(PLUGIN_ID, default={"interactive": True})
    interactive = settings.get("interactive", True)
    return PromptSnippetEngine(interactive=bool(interactive))
