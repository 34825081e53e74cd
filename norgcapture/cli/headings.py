"""Headings command for the norgcapture CLI."""

from __future__ import annotations

from pathlib import Path

import click

from ..buffer import Buffer
from ..errors import CaptureError
from ..outline import Heading, extract_headings, find_heading
from ._common import NorgCaptureCliError


def _format_heading(heading: Heading) -> str:
    indent = "  " * (heading.level - 1)
    marker = "*" * heading.level
    return f"{heading.start + 1:>5}-{heading.end:<5} {indent}{marker} {heading.title}"


@click.command(name="headings")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-t",
    "--target",
    default=None,
    help="Only show the heading a target such as '** Tasks' or '# Tasks' resolves to.",
)
def headings(path: Path, target: str | None) -> None:
    """Print the outline of the Norg document at PATH."""

    outline = extract_headings(Buffer.open(path).lines)

    if target is not None:
        try:
            outline = (find_heading(target, outline),)
        except CaptureError as exc:
            raise NorgCaptureCliError(str(exc)) from exc

    for heading in outline:
        click.echo(_format_heading(heading))


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(headings)
