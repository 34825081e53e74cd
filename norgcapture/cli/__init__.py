"""norgcapture CLI package."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import click

from ..utils.log import setup_logging
from . import capture, config_cmd, headings, info, ls, show
from ._common import CONTEXT_SETTINGS, NorgCaptureCliError

__all__ = ["cli", "main", "NorgCaptureCliError"]


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "-c",
    "--config",
    "config_path_opt",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration TOML file.",
)
@click.option(
    "-w",
    "--workspace",
    "workspace_opt",
    default=None,
    help="Workspace to start in (defaults to 'default_workspace').",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path_opt: Path | None,
    workspace_opt: str | None,
    verbose: bool,
) -> None:
    """Capture templates for Norg notes workspaces."""

    ctx.ensure_object(dict)
    invoked = ctx.invoked_subcommand

    if invoked is None:
        click.echo(ctx.command.get_help(ctx))
        ctx.exit(0)

    setup_logging(verbose)
    ctx.obj["config_path"] = config_path_opt
    ctx.obj["workspace"] = workspace_opt


for register_command in (
    capture.register,
    ls.register,
    show.register,
    headings.register,
    config_cmd.register,
    info.register,
):
    register_command(cli)


def main(argv: Sequence[str] | None = None) -> int:
    args = list(argv) if argv is not None else None
    try:
        return cli.main(args=args, prog_name="norgcap", standalone_mode=False) or 0
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except SystemExit as exc:
        return int(exc.code or 0)
