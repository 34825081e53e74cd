"""List command for the norgcapture CLI."""

from __future__ import annotations

import click

from ._common import get_app


@click.command(name="ls")
@click.option(
    "-a",
    "--all",
    "show_all",
    is_flag=True,
    help="Include captures bound to other workspaces.",
)
@click.pass_context
def ls(ctx: click.Context, show_all: bool) -> None:
    """List the captures available in the current workspace."""

    app = get_app(ctx)
    workspace = None if show_all else app.workspaces.get_current_workspace()

    for name in app.registry.list_names(workspace):
        definition = app.registry.definition(name)
        bound = definition.workspace if definition is not None else None
        suffix = f"  [workspace: {bound}]" if bound else ""
        click.echo(f"{name}{suffix}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(ls)
