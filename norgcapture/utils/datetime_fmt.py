"""Datetime formatting used by the built-in capture placeholders."""

from __future__ import annotations

from datetime import datetime

# Locale-dependent renderings, as strftime produces them for the current locale.
_LOCALE_DATE_FORMAT = "%x"
_LOCALE_DATETIME_FORMAT = "%c"

_ISO_DATE_FORMAT = "%Y-%m-%d"
# Offset without a colon, e.g. "2024-03-05T09:15:00+0100".
_ISO_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def now_local() -> datetime:
    """Return the current time as an aware datetime in the local timezone."""

    return datetime.now().astimezone()


def _aware(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.astimezone()


def to_locale_date(dt: datetime) -> str:
    return _aware(dt).strftime(_LOCALE_DATE_FORMAT)


def to_locale_datetime(dt: datetime) -> str:
    return _aware(dt).strftime(_LOCALE_DATETIME_FORMAT)


def to_iso_date(dt: datetime) -> str:
    """Format ``dt`` as ``YYYY-MM-DD``."""

    return _aware(dt).strftime(_ISO_DATE_FORMAT)


def to_iso_datetime(dt: datetime) -> str:
    """Format ``dt`` as ``YYYY-MM-DDTHH:MM:SS+HHMM``.

    Naive datetimes are interpreted in the local timezone so the offset is
    always present.
    """

    return _aware(dt).strftime(_ISO_DATETIME_FORMAT)
