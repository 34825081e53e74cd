"""Config command for the norgcapture CLI."""

from __future__ import annotations

from pathlib import Path

import click

from .. import config as config_module
from ..editor import EditorError, open_file
from ._common import NorgCaptureCliError


@click.command(name="config")
@click.pass_context
def config(ctx: click.Context) -> None:
    """Open the norgcapture configuration file in the editor."""

    selected_path: Path | None = ctx.obj.get("config_path")
    config_path = selected_path or config_module.DEFAULT_CONFIG_PATH

    created = config_module.bootstrap_config_file(config_path)

    try:
        open_file(config_path)
    except EditorError as exc:
        raise NorgCaptureCliError(str(exc)) from exc

    if created:
        click.echo(f"Created configuration at {config_path}")
    else:
        click.echo(f"Opened configuration at {config_path}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(config)
