"""Placeholder resolution and substitution for capture templates."""

from __future__ import annotations

import os
import re
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Mapping

from .utils.datetime_fmt import (
    now_local,
    to_iso_date,
    to_iso_datetime,
    to_locale_date,
    to_locale_datetime,
)

if TYPE_CHECKING:  # pragma: no cover - type check only
    from .registry import ResolvedCapture

Clock = Callable[[], datetime]

BUILTIN_KEYS = ("name", "date", "datetime", "isodate", "isodatetime")
UNKNOWN_USER = "unknown"
_IDENTITY_VARIABLES = ("USER", "LOGNAME")


def _identity(environ: Mapping[str, str]) -> str:
    for variable in _IDENTITY_VARIABLES:
        value = environ.get(variable, "").strip()
        if value:
            return value
    return UNKNOWN_USER


def builtin_placeholders(
    *,
    now: Clock | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Return the built-in placeholder values for the current moment."""

    moment = (now or now_local)()
    env = os.environ if environ is None else environ
    return {
        "name": _identity(env),
        "date": to_locale_date(moment),
        "datetime": to_locale_datetime(moment),
        "isodate": to_iso_date(moment),
        "isodatetime": to_iso_datetime(moment),
    }


def resolve_placeholders(
    capture: "ResolvedCapture",
    *,
    now: Clock | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Build the placeholder set for ``capture``.

    Built-ins are computed first and then overlaid by the capture's own
    ``data`` mapping, so user data wins on key collisions.
    """

    placeholders = builtin_placeholders(now=now, environ=environ)
    for key, value in capture.data.resolve().items():
        placeholders[str(key)] = str(value)
    return placeholders


def substitute(text: str, placeholders: Mapping[str, str]) -> str:
    """Replace every ``{key}`` in ``text`` with its placeholder value.

    Replacement happens in a single pass over ``text``; substituted values are
    never scanned again. Tokens without a matching key, and the empty ``{}``
    tab-stop marker, are left untouched.
    """

    keys = [key for key in placeholders if key]
    if not keys:
        return text

    # Longest first so overlapping alternatives never shadow each other.
    alternatives = "|".join(re.escape(key) for key in sorted(keys, key=len, reverse=True))
    pattern = re.compile(r"\{(" + alternatives + r")\}")
    return pattern.sub(lambda match: placeholders[match.group(1)], text)
