"""Configuration management for norgcapture."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigurationError
from .registry import CaptureDefinition

DEFAULT_CONFIG_DIR = Path("~/.config/norgcapture").expanduser()
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class MissingConfigError(ConfigError):
    """Raised when the configuration file cannot be found."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration file not found at {path}")
        self.path = path


class InvalidConfigError(ConfigError):
    """Raised when the configuration file misses required keys or values."""


@dataclass(slots=True)
class NorgCaptureConfig:
    """In-memory representation of the norgcapture configuration file."""

    workspaces: dict[str, Path] = field(default_factory=dict)
    default_workspace: str | None = None
    auto_switch: bool = False
    prefer_snippet_engine: bool = True
    editor: str | None = None
    captures: dict[str, CaptureDefinition] = field(default_factory=dict)
    plugins: dict[str, dict[str, Any]] = field(default_factory=dict)
    source_path: Path | None = None


def _optional_bool(section: dict[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise InvalidConfigError(f"'{key}' must be a boolean when provided")
    return value


def _optional_str(section: dict[str, Any], key: str) -> str | None:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise InvalidConfigError(f"'{key}' must be a non-empty string when provided")
    return value.strip()


def load_config(path: Path | None = None) -> NorgCaptureConfig:
    """Load configuration from ``path`` or the default location.

    Parameters
    ----------
    path:
        Optional location of the configuration file. When ``None`` the default
        path (``~/.config/norgcapture/config.toml``) is used.

    Raises
    ------
    MissingConfigError
        If the file cannot be found.
    InvalidConfigError
        If settings, workspaces or captures are malformed.
    """

    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.exists():
        raise MissingConfigError(config_path)

    try:
        with config_path.open("rb") as fh:
            raw = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidConfigError(f"Invalid TOML in {config_path}: {exc}") from exc

    section = raw.get("norgcapture", {})
    if not isinstance(section, dict):
        raise InvalidConfigError("'norgcapture' section must be a table")

    config_dir = config_path.parent

    # Workspace roots may be absolute or relative; relative paths are
    # resolved against the configuration directory.
    workspaces_raw = raw.get("workspaces", {})
    if not isinstance(workspaces_raw, dict):
        raise InvalidConfigError("'workspaces' must be a table of paths")
    workspaces: dict[str, Path] = {}
    for name, root in workspaces_raw.items():
        if not isinstance(root, str) or not root.strip():
            raise InvalidConfigError(f"Workspace '{name}' must be a non-empty path")
        root_path = Path(root.strip()).expanduser()
        workspaces[name] = (
            root_path if root_path.is_absolute() else config_dir / root_path
        ).resolve()

    default_workspace = _optional_str(section, "default_workspace")
    if default_workspace is not None and default_workspace not in workspaces:
        raise InvalidConfigError(
            f"'default_workspace' refers to unknown workspace '{default_workspace}'"
        )
    if default_workspace is None and len(workspaces) == 1:
        default_workspace = next(iter(workspaces))

    captures_raw = raw.get("captures", {})
    if not isinstance(captures_raw, dict):
        raise InvalidConfigError("'captures' must be a table of capture tables")
    captures: dict[str, CaptureDefinition] = {}
    for name, capture_raw in captures_raw.items():
        if not isinstance(capture_raw, dict):
            raise InvalidConfigError(f"Capture '{name}' must be a table")
        try:
            captures[name] = CaptureDefinition.from_mapping(capture_raw)
        except ConfigurationError as exc:
            raise InvalidConfigError(f"Capture '{name}': {exc}") from exc
        workspace = captures[name].workspace
        if workspace is not None and workspace not in workspaces:
            raise InvalidConfigError(
                f"Capture '{name}' refers to unknown workspace '{workspace}'"
            )

    plugins_section = raw.get("plugins")
    plugins: dict[str, dict[str, Any]] = {}
    if isinstance(plugins_section, dict):
        for key, value in plugins_section.items():
            plugins[key] = dict(value) if isinstance(value, dict) else {}

    return NorgCaptureConfig(
        workspaces=workspaces,
        default_workspace=default_workspace,
        auto_switch=_optional_bool(section, "auto_switch", False),
        prefer_snippet_engine=_optional_bool(section, "prefer_snippet_engine", True),
        editor=_optional_str(section, "editor"),
        captures=captures,
        plugins=plugins,
        source_path=config_path,
    )


def bootstrap_config_file(path: Path) -> bool:
    """Create a default config file if missing.

    Returns True when the file was created, False if it already existed.
    """

    if path.exists():
        return False

    config_dir = path.parent
    config_dir.mkdir(parents=True, exist_ok=True)
    default_content = (
        "[norgcapture]\n"
        "auto_switch = false\n"
        "prefer_snippet_engine = true\n"
        'default_workspace = "notes"\n'
        "\n"
        "[workspaces]\n"
        'notes = "~/notes"\n'
        "\n"
        "[captures.journal]\n"
        'path = "journal/{isodate}.norg"\n'
        'content = "* {}\\n"\n'
    )
    path.write_text(default_content, encoding="utf-8")
    return True
