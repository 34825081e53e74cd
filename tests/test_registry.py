"""Tests for capture definitions and the capture registry."""

from __future__ import annotations

import pytest
from norgcapture.errors import ConfigurationError, NotFoundError
from norgcapture.planner import InsertPosition
from norgcapture.registry import (
    CaptureDefinition,
    CaptureKind,
    CaptureRegistry,
    ComputedValue,
    LiteralValue,
)


def test_resolve_fills_defaults() -> None:
    registry = CaptureRegistry({"note": CaptureDefinition(path="a.norg", content="* {}")})

    capture = registry.resolve("note")

    assert capture.name == "note"
    assert capture.kind is CaptureKind.NEW_FILE
    assert capture.insert_position is InsertPosition.BOTTOM
    assert capture.data.resolve() == {}
    assert capture.workspace is None
    assert capture.target is None


def test_resolve_does_not_mutate_stored_definition() -> None:
    definition = CaptureDefinition(path="a.norg", content="x")
    registry = CaptureRegistry({"note": definition})

    registry.resolve("note")

    stored = registry.definition("note")
    assert stored is definition
    assert stored.kind is None
    assert stored.insert_position is None
    assert stored.data is None


def test_resolve_unknown_capture() -> None:
    with pytest.raises(NotFoundError):
        CaptureRegistry().resolve("missing")


def test_resolve_requires_path() -> None:
    registry = CaptureRegistry({"bad": CaptureDefinition(content="x")})

    with pytest.raises(ConfigurationError, match="requires a path"):
        registry.resolve("bad")


def test_resolve_requires_content_or_snippet() -> None:
    registry = CaptureRegistry({"bad": CaptureDefinition(path="a.norg")})

    with pytest.raises(ConfigurationError, match="content or a snippet"):
        registry.resolve("bad")


def test_resolve_rejects_content_and_snippet_together() -> None:
    registry = CaptureRegistry(
        {"bad": CaptureDefinition(path="a.norg", content="x", snippet="${1}")}
    )

    with pytest.raises(ConfigurationError):
        registry.resolve("bad")


def test_callables_become_computed_values() -> None:
    calls: list[str] = []

    def make_path() -> str:
        calls.append("path")
        return "computed.norg"

    definition = CaptureDefinition(path=make_path, content="x", target="* Tasks")

    assert isinstance(definition.path, ComputedValue)
    assert isinstance(definition.target, LiteralValue)
    assert calls == []
    assert definition.path.resolve() == "computed.norg"
    assert calls == ["path"]


def test_enum_fields_accept_configuration_strings() -> None:
    definition = CaptureDefinition(
        path="a.norg", content="x", kind="text", insert_position="top"
    )

    assert definition.kind is CaptureKind.APPEND_TO_DOCUMENT
    assert definition.insert_position is InsertPosition.TOP


def test_invalid_enum_value_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="insert_position"):
        CaptureDefinition(path="a.norg", content="x", insert_position="middle")


def test_from_mapping_parses_configuration_table() -> None:
    definition = CaptureDefinition.from_mapping(
        {
            "path": "index.norg",
            "content": "- {}",
            "type": "text",
            "target": "** Tasks",
            "workspace": "notes",
            "data": {"priority": 2, "owner": "ada"},
        }
    )

    assert definition.kind is CaptureKind.APPEND_TO_DOCUMENT
    assert definition.workspace == "notes"
    assert definition.target.resolve() == "** Tasks"
    assert definition.data.resolve() == {"priority": "2", "owner": "ada"}


@pytest.mark.parametrize(
    "raw",
    [
        {"path": "a.norg", "content": "x", "kind": "file"},
        {"path": "a.norg", "content": "x", "type": "folder"},
        {"path": 3, "content": "x"},
        {"path": "a.norg", "content": "x", "data": "nope"},
        {"path": "a.norg", "content": "x", "data": {"nested": {"a": 1}}},
    ],
)
def test_from_mapping_rejects_invalid_tables(raw: dict) -> None:
    with pytest.raises(ConfigurationError):
        CaptureDefinition.from_mapping(raw)


def test_list_names_filters_by_workspace() -> None:
    registry = CaptureRegistry(
        {
            "journal": CaptureDefinition(path="j.norg", content="x", workspace="diary"),
            "task": CaptureDefinition(path="t.norg", content="x", workspace="work"),
            "idea": CaptureDefinition(path="i.norg", content="x"),
        }
    )

    assert registry.list_names() == ["idea", "journal", "task"]
    assert registry.list_names("diary") == ["idea", "journal"]


def test_register_keeps_existing_definition() -> None:
    original = CaptureDefinition(path="a.norg", content="x")
    registry = CaptureRegistry({"note": original})

    added = registry.register("note", CaptureDefinition(path="b.norg", content="y"))

    assert added is False
    assert registry.definition("note") is original
    assert registry.register("other", CaptureDefinition(path="c.norg", content="z"))
    assert "other" in registry
    assert len(registry) == 2
