"""Tests for placeholder resolution and substitution."""

from __future__ import annotations

from norgcapture.placeholders import (
    BUILTIN_KEYS,
    builtin_placeholders,
    resolve_placeholders,
    substitute,
)
from norgcapture.registry import CaptureDefinition, CaptureRegistry


def _resolved(**fields):
    registry = CaptureRegistry({"c": CaptureDefinition(path="p.norg", content="x", **fields)})
    return registry.resolve("c")


def test_builtins_use_clock_and_environment(clock) -> None:
    values = builtin_placeholders(now=clock, environ={"USER": "ada"})

    assert set(values) == set(BUILTIN_KEYS)
    assert values["name"] == "ada"
    assert values["isodate"] == "2024-03-05"
    assert values["isodatetime"] == "2024-03-05T09:15:00+0100"
    assert values["date"]
    assert values["datetime"]


def test_identity_falls_back_to_logname_then_literal(clock) -> None:
    assert builtin_placeholders(now=clock, environ={"LOGNAME": "grace"})["name"] == "grace"
    assert builtin_placeholders(now=clock, environ={})["name"] == "unknown"


def test_capture_data_overrides_builtins(clock) -> None:
    capture = _resolved(data={"name": "Grace", "project": "garden"})

    values = resolve_placeholders(capture, now=clock, environ={"USER": "ada"})

    assert values["name"] == "Grace"
    assert values["project"] == "garden"
    assert values["isodate"] == "2024-03-05"


def test_computed_data_is_evaluated(clock) -> None:
    capture = _resolved(data=lambda: {"sprint": 42})

    values = resolve_placeholders(capture, now=clock, environ={})

    assert values["sprint"] == "42"


def test_substitute_replaces_every_occurrence() -> None:
    text = "{isodate}/{isodate}.norg by {name}"

    result = substitute(text, {"isodate": "2024-03-05", "name": "ada"})

    assert result == "2024-03-05/2024-03-05.norg by ada"


def test_substitute_leaves_unknown_tokens_and_tab_stops() -> None:
    result = substitute("* {} {unknown} {name}", {"name": "ada"})

    assert result == "* {} {unknown} ada"


def test_substitute_does_not_expand_substituted_values() -> None:
    result = substitute("{a} {b}", {"a": "{b}", "b": "x"})

    assert result == "{b} x"


def test_substitute_is_idempotent_without_nested_tokens() -> None:
    placeholders = {"name": "ada", "isodate": "2024-03-05"}
    text = "- {name} on {isodate} {}"

    once = substitute(text, placeholders)

    assert substitute(once, placeholders) == once


def test_substitute_ignores_empty_keys() -> None:
    assert substitute("* {}", {"": "nope"}) == "* {}"
