"""Capture definitions and the registry that resolves them by name."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Callable, Generic, Iterable, Mapping, TypeVar, Union

import structlog

from .errors import ConfigurationError, NotFoundError
from .planner import InsertPosition

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class CaptureKind(str, enum.Enum):
    """What a capture does with its content."""

    NEW_FILE = "file"
    APPEND_TO_DOCUMENT = "text"


@dataclass(slots=True, frozen=True)
class LiteralValue(Generic[T]):
    """A field value given directly in the definition."""

    value: T

    @property
    def computed(self) -> bool:
        return False

    def resolve(self) -> T:
        return self.value


@dataclass(slots=True, frozen=True)
class ComputedValue(Generic[T]):
    """A field value produced by calling ``factory`` at capture time."""

    factory: Callable[[], T]

    @property
    def computed(self) -> bool:
        return True

    def resolve(self) -> T:
        return self.factory()


Value = Union[LiteralValue[T], ComputedValue[T]]

_EMPTY_DATA: Value[Mapping[str, str]] = LiteralValue(MappingProxyType({}))


def as_value(raw: Any) -> Value[Any] | None:
    """Wrap ``raw`` as a literal or computed value; ``None`` stays ``None``."""

    if raw is None or isinstance(raw, (LiteralValue, ComputedValue)):
        return raw
    if callable(raw):
        return ComputedValue(raw)
    if isinstance(raw, Mapping):
        return LiteralValue(MappingProxyType({str(k): str(v) for k, v in raw.items()}))
    return LiteralValue(raw)


def _as_enum(enum_cls: type[enum.Enum], raw: Any, field_name: str) -> Any:
    if raw is None or isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(raw)
    except ValueError as exc:
        allowed = ", ".join(repr(member.value) for member in enum_cls)
        raise ConfigurationError(
            f"Invalid '{field_name}' value {raw!r}; expected one of {allowed}."
        ) from exc


@dataclass(slots=True, frozen=True)
class CaptureDefinition:
    """A capture as authored in configuration or contributed by a plugin.

    ``path``, ``content``, ``target`` and ``data`` accept plain values or
    zero-argument callables evaluated at capture time. ``snippet`` is handed
    to the snippet engine untouched.
    """

    path: Value[str] | None = None
    content: Value[str] | None = None
    snippet: Any = None
    workspace: str | None = None
    kind: CaptureKind | None = None
    target: Value[str] | None = None
    insert_position: InsertPosition | None = None
    data: Value[Mapping[str, str]] | None = None

    def __post_init__(self) -> None:
        for name in ("path", "content", "target", "data"):
            object.__setattr__(self, name, as_value(getattr(self, name)))
        object.__setattr__(self, "kind", _as_enum(CaptureKind, self.kind, "type"))
        object.__setattr__(
            self,
            "insert_position",
            _as_enum(InsertPosition, self.insert_position, "insert_position"),
        )

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "CaptureDefinition":
        """Build a definition from a configuration table.

        Keys follow the configuration file: ``type`` maps to ``kind``. Unknown
        keys and values of the wrong type raise ``ConfigurationError``.
        """

        allowed = {f.name for f in fields(cls)} - {"kind"} | {"type"}
        unknown = sorted(set(raw) - allowed)
        if unknown:
            raise ConfigurationError(f"Unknown capture keys: {', '.join(unknown)}.")

        kwargs: dict[str, Any] = {}
        for key, value in raw.items():
            if key == "data":
                if not isinstance(value, Mapping):
                    raise ConfigurationError("'data' must be a table of strings.")
                for data_key, data_value in value.items():
                    if isinstance(data_value, (dict, list)):
                        raise ConfigurationError(
                            f"'data.{data_key}' must be a string, number or boolean."
                        )
                kwargs["data"] = value
                continue
            if not isinstance(value, str):
                raise ConfigurationError(f"'{key}' must be a string.")
            kwargs["kind" if key == "type" else key] = value

        return cls(**kwargs)


@dataclass(slots=True, frozen=True)
class ResolvedCapture:
    """Capture definition with defaults filled in, ready for execution."""

    name: str
    path: Value[str]
    content: Value[str] | None
    snippet: Any
    workspace: str | None
    kind: CaptureKind
    target: Value[str] | None
    insert_position: InsertPosition
    data: Value[Mapping[str, str]] = field(default=_EMPTY_DATA)


class CaptureRegistry:
    """Named capture definitions, resolved with defaults on demand."""

    def __init__(self, definitions: Mapping[str, CaptureDefinition] | None = None) -> None:
        self._definitions: dict[str, CaptureDefinition] = dict(definitions or {})

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def definition(self, name: str) -> CaptureDefinition | None:
        """Return the stored definition for ``name`` as authored."""

        return self._definitions.get(name)

    def register(self, name: str, definition: CaptureDefinition) -> bool:
        """Add ``definition`` unless ``name`` is taken; return whether it was added."""

        if name in self._definitions:
            logger.info("Capture already defined, keeping existing", capture=name)
            return False
        self._definitions[name] = definition
        return True

    def register_all(self, definitions: Iterable[tuple[str, CaptureDefinition]]) -> None:
        for name, definition in definitions:
            self.register(name, definition)

    def list_names(self, workspace: str | None = None) -> list[str]:
        """Return capture names, sorted.

        With ``workspace`` only the captures bound to it or to no workspace at
        all are returned.
        """

        return sorted(
            name
            for name, definition in self._definitions.items()
            if workspace is None
            or definition.workspace is None
            or definition.workspace == workspace
        )

    def resolve(self, name: str) -> ResolvedCapture:
        """Return the capture called ``name`` with its defaults filled in.

        Raises
        ------
        NotFoundError
            If no capture is called ``name``.
        ConfigurationError
            If the capture lacks a ``path`` or does not define exactly one of
            ``content`` and ``snippet``.
        """

        definition = self._definitions.get(name)
        if definition is None:
            raise NotFoundError(f"No capture called '{name}' found.")

        if definition.path is None:
            raise ConfigurationError(f"Capture '{name}' requires a path.")

        has_content = definition.content is not None
        has_snippet = definition.snippet is not None
        if not has_content and not has_snippet:
            raise ConfigurationError(
                f"Capture '{name}' requires either a content or a snippet field."
            )
        if has_content and has_snippet:
            raise ConfigurationError(
                f"Capture '{name}' defines both content and snippet; keep only one."
            )

        return ResolvedCapture(
            name=name,
            path=definition.path,
            content=definition.content,
            snippet=definition.snippet,
            workspace=definition.workspace,
            kind=definition.kind or CaptureKind.NEW_FILE,
            target=definition.target,
            insert_position=definition.insert_position or InsertPosition.BOTTOM,
            data=definition.data or _EMPTY_DATA,
        )
