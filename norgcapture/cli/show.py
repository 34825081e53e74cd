"""Show command for the norgcapture CLI."""

from __future__ import annotations

from typing import Any

import click
import yaml

from ..errors import CaptureError
from ..registry import ResolvedCapture, Value
from ._common import NorgCaptureCliError, get_app

COMPUTED_MARKER = "<computed>"


def _display(value: Value[Any] | None) -> Any:
    if value is None:
        return None
    if value.computed:
        return COMPUTED_MARKER
    resolved = value.resolve()
    return dict(resolved) if hasattr(resolved, "items") else resolved


def render_capture(capture: ResolvedCapture) -> str:
    """Render a resolved capture as YAML, in configuration-file terms."""

    payload: dict[str, Any] = {
        "path": _display(capture.path),
        "type": capture.kind.value,
        "insert_position": capture.insert_position.value,
    }
    if capture.content is not None:
        payload["content"] = _display(capture.content)
    if capture.snippet is not None:
        payload["snippet"] = (
            capture.snippet if isinstance(capture.snippet, str) else COMPUTED_MARKER
        )
    if capture.workspace is not None:
        payload["workspace"] = capture.workspace
    if capture.target is not None:
        payload["target"] = _display(capture.target)
    data = _display(capture.data)
    if data:
        payload["data"] = data

    return yaml.safe_dump({capture.name: payload}, sort_keys=False, allow_unicode=True)


@click.command(name="show")
@click.argument("name")
@click.pass_context
def show(ctx: click.Context, name: str) -> None:
    """Show the capture called NAME with its defaults filled in."""

    app = get_app(ctx)

    try:
        capture = app.registry.resolve(name)
    except CaptureError as exc:
        raise NorgCaptureCliError(str(exc)) from exc

    click.echo(render_capture(capture), nl=False)


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(show)
