"""Capture command for the norgcapture CLI."""

from __future__ import annotations

import click
from click.shell_completion import CompletionItem

from ..app import bootstrap
from ..config import ConfigError
from ..editor import EditorError, open_file
from ..errors import CaptureError
from ..plugins import PluginRegistrationError
from ._common import NorgCaptureCliError, get_app


def complete_capture_names(
    ctx: click.Context, param: click.Parameter, incomplete: str
) -> list[CompletionItem]:
    """Complete capture names from the registry of the selected configuration."""

    root_params = ctx.find_root().params
    try:
        app = bootstrap(
            root_params.get("config_path_opt"),
            workspace=root_params.get("workspace_opt"),
        )
    except (ConfigError, CaptureError, PluginRegistrationError):
        return []

    return [
        CompletionItem(name)
        for name in app.registry.list_names()
        if name.startswith(incomplete)
    ]


@click.command(name="capture")
@click.argument("name", shell_complete=complete_capture_names)
@click.option(
    "-e",
    "--edit",
    "open_editor",
    is_flag=True,
    help="Open the captured file in the editor afterwards.",
)
@click.pass_context
def capture(ctx: click.Context, name: str, open_editor: bool) -> None:
    """Run the capture called NAME."""

    app = get_app(ctx)

    try:
        result = app.executor.run(name)
    except CaptureError as exc:
        raise NorgCaptureCliError(str(exc)) from exc

    line, col = result.cursor
    click.echo(
        f"Captured '{result.name}' into {result.path} "
        f"(workspace: {result.workspace}, line {line + 1}, column {col + 1})"
    )

    if open_editor:
        try:
            open_file(result.path, app.config.editor)
        except EditorError as exc:
            raise NorgCaptureCliError(str(exc)) from exc


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(capture)
