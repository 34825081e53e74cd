"""Helpers for creating and working with the norgcapture plugin manager."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from functools import lru_cache
from typing import Tuple

import pluggy
import structlog

from ..config import NorgCaptureConfig
from ..registry import CaptureDefinition
from ..snippets import SnippetEngine
from ._markers import ENTRY_POINT_GROUP, PLUGIN_NAMESPACE
from .config import build_settings_getter
from .spec import NorgCaptureHookSpec

logger = structlog.get_logger(__name__)


class PluginRegistrationError(RuntimeError):
    """Raised when a plugin fails validation or registration."""


def create_plugin_manager(*, load_entry_points: bool = True) -> pluggy.PluginManager:
    """Instantiate a pluggy ``PluginManager`` configured for norgcapture."""

    manager = pluggy.PluginManager(PLUGIN_NAMESPACE)
    manager.add_hookspecs(NorgCaptureHookSpec)

    if load_entry_points:
        load_plugin_entry_points(manager)

    return manager


def register_modules(
    manager: pluggy.PluginManager,
    modules: Sequence[object],
) -> None:
    """Register in-process plugin modules with the manager."""

    for module in modules:
        try:
            manager.register(module)
        except pluggy.PluginValidationError as exc:
            raise PluginRegistrationError(str(exc)) from exc


def load_plugin_entry_points(
    manager: pluggy.PluginManager,
    *,
    group: str = ENTRY_POINT_GROUP,
) -> None:
    """Load plugin entry points via ``importlib.metadata`` integration."""

    manager.load_setuptools_entrypoints(group)


def iter_plugin_modules() -> Tuple[object, ...]:
    """Return plugin modules bundled with norgcapture."""

    return _builtin_plugin_modules()


@lru_cache(maxsize=1)
def _builtin_plugin_modules() -> Tuple[object, ...]:
    from .builtin import BUILTIN_PLUGINS

    return BUILTIN_PLUGINS


@lru_cache(maxsize=1)
def _build_plugin_manager() -> pluggy.PluginManager:
    manager = create_plugin_manager()
    register_modules(manager, iter_plugin_modules())
    return manager


def get_plugin_manager() -> pluggy.PluginManager:
    """Return the cached plugin manager instance."""

    return _build_plugin_manager()


def reset_plugin_manager_cache() -> None:
    """Clear cached plugin manager so future calls rebuild state."""

    _build_plugin_manager.cache_clear()
    _builtin_plugin_modules.cache_clear()


def iter_capture_contributions(
    manager: pluggy.PluginManager,
    config: NorgCaptureConfig,
) -> Iterator[tuple[str, CaptureDefinition]]:
    """Yield ``(name, definition)`` pairs contributed by all plugins."""

    for contributions in manager.hook.capture_definitions(config=config):
        if not contributions:
            continue
        if not isinstance(contributions, Mapping):
            raise PluginRegistrationError(
                "Plugin hook did not return a mapping of capture definitions."
            )
        for name, definition in contributions.items():
            if not isinstance(definition, CaptureDefinition):
                raise PluginRegistrationError(
                    f"Capture '{name}' must be a CaptureDefinition instance."
                )
            yield name, definition


def load_capture_contributions(
    config: NorgCaptureConfig,
) -> dict[str, CaptureDefinition]:
    """Collect capture definitions from all registered plugins."""

    manager = get_plugin_manager()

    captures: dict[str, CaptureDefinition] = {}
    for name, definition in iter_capture_contributions(manager, config):
        if name in captures:
            raise PluginRegistrationError(
                f"Duplicate capture contributed by plugins: '{name}'."
            )
        captures[name] = definition

    return captures


def load_snippet_engine(config: NorgCaptureConfig) -> SnippetEngine | None:
    """Return the first snippet engine provided by a plugin, if any."""

    manager = get_plugin_manager()
    engine = manager.hook.snippet_engine(
        config=config, get_settings=build_settings_getter(config)
    )
    if engine is None:
        logger.debug("No snippet engine available; captures insert plain text")
    return engine


__all__ = [
    "PluginRegistrationError",
    "create_plugin_manager",
    "get_plugin_manager",
    "iter_capture_contributions",
    "iter_plugin_modules",
    "load_capture_contributions",
    "load_plugin_entry_points",
    "load_snippet_engine",
    "register_modules",
    "reset_plugin_manager_cache",
]
