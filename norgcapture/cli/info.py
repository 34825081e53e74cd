"""Info command for the norgcapture CLI."""

from __future__ import annotations

import click

from ..config import NorgCaptureConfig
from ._common import get_app


@click.command(name="info")
@click.pass_context
def info(ctx: click.Context) -> None:
    """Display workspaces, settings and capture counts."""

    app = get_app(ctx)
    config: NorgCaptureConfig = app.config
    current = app.workspaces.get_current_workspace()
    engine = app.executor.snippet_engine

    click.echo("norgcapture info:\n")
    click.echo(f"  Configuration  : {config.source_path}")
    click.echo(f"  Workspace      : {current or '(none)'}")
    click.echo(f"  Captures       : {len(app.registry)}")
    click.echo(f"  Auto switch    : {'yes' if config.auto_switch else 'no'}")
    engine_name = type(engine).__name__ if engine is not None else "(plain text)"
    click.echo(f"  Snippet engine : {engine_name}")
    click.echo("\nWorkspaces:\n")
    for name, root in sorted(config.workspaces.items()):
        marker = "*" if name == current else " "
        click.echo(f"  {marker} {name:<12} {root}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(info)
