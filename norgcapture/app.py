"""Application bootstrap and context container for norgcapture."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog

from .config import ConfigError, NorgCaptureConfig, load_config
from .errors import ConfigurationError
from .executor import CaptureExecutor
from .plugins import load_capture_contributions, load_snippet_engine
from .registry import CaptureRegistry
from .workspace import WorkspaceManager

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class AppContext:
    """Aggregates core services for the CLI lifecycle."""

    config: NorgCaptureConfig
    registry: CaptureRegistry
    workspaces: WorkspaceManager
    executor: CaptureExecutor


def build_registry(config: NorgCaptureConfig) -> CaptureRegistry:
    """Captures from the configuration file, then plugin contributions.

    A capture defined in the configuration file wins over a plugin capture
    of the same name.
    """

    registry = CaptureRegistry(config.captures)
    registry.register_all(load_capture_contributions(config).items())
    return registry


def bootstrap(config_path: Path | None, *, workspace: str | None = None) -> AppContext:
    """Load configuration and wire the registry, workspaces and executor."""

    # Defer error mapping to the CLI, which knows how to present messages.
    config = load_config(config_path)

    try:
        workspaces = WorkspaceManager(
            config.workspaces, current=workspace or config.default_workspace
        )
    except ConfigurationError as exc:
        raise ConfigError(str(exc)) from exc

    registry = build_registry(config)

    engine = load_snippet_engine(config) if config.prefer_snippet_engine else None
    executor = CaptureExecutor(
        registry,
        workspaces,
        auto_switch=config.auto_switch,
        snippet_engine=engine,
    )

    logger.debug(
        "Bootstrapped",
        config=str(config.source_path),
        workspace=workspaces.get_current_workspace(),
        captures=len(registry),
        snippet_engine=type(engine).__name__ if engine is not None else None,
    )
    return AppContext(
        config=config, registry=registry, workspaces=workspaces, executor=executor
    )
