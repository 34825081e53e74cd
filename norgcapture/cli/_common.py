"""Shared helpers for norgcapture CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from ..app import AppContext, bootstrap
from ..config import ConfigError, MissingConfigError
from ..errors import CaptureError
from ..plugins import PluginRegistrationError

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}


class NorgCaptureCliError(click.ClickException):
    """Shared Click exception wrapper for CLI failures."""


def get_app(ctx: click.Context) -> AppContext:
    """Return a cached AppContext for the current CLI invocation."""

    app: AppContext | None = ctx.obj.get("app")
    if app is not None:
        return app

    config_path_opt: Path | None = ctx.obj.get("config_path")
    workspace_opt: str | None = ctx.obj.get("workspace")

    try:
        app = bootstrap(config_path_opt, workspace=workspace_opt)
    except MissingConfigError as exc:
        raise NorgCaptureCliError(
            "Configuration not found. Run 'norgcap config' once to set up norgcapture."
        ) from exc
    except (ConfigError, CaptureError, PluginRegistrationError) as exc:
        raise NorgCaptureCliError(str(exc)) from exc

    ctx.obj["app"] = app
    return app
