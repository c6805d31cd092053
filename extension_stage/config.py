"""Configuration models and loader for the staging helper.

This module provides the dataclass describing a staging run and a loader for
optional TOML files that override the built-in extension manifest.

Usage
-----
Load a staging configuration for a checkout::

    from pathlib import Path
    from extension_stage.config import load_config

    config = load_config(Path("extension-staging.toml"), Path.cwd())
    print(f"Bundle directory: {config.dest_root()}")

Configuration schema::

    [common]
    name = "DoubleTrack Browser extension"
    source_dir = "."
    dist_dir = "dist"

    [[actions]]
    source = "src/manifest.json"
    destination = "manifest.json"
    required = true
    kind = "file"

    [[actions]]
    source = "rust_core/pkg"
    destination = "wasm"
    required = false
    kind = "directory"
    hint = "build Rust first"
"""

from __future__ import annotations

import dataclasses
import typing as typ
from pathlib import Path, PurePosixPath

import tomllib

from .actions import DEFAULT_ACTIONS, ActionKind, StagingAction
from .errors import ConfigError

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "StagingConfig",
    "default_config",
    "discover_config",
    "load_config",
]

DEFAULT_CONFIG_NAME = "extension-staging.toml"

_COMMON_KEYS = {"name", "source_dir", "dist_dir"}
_ACTION_KEYS = {"source", "destination", "required", "kind", "hint"}


@dataclasses.dataclass(slots=True)
class StagingConfig:
    """Concrete configuration consumed by :func:`stage_extension`.

    Parameters
    ----------
    workspace : Path
        Checkout root that relative directories are resolved against.
    source_dir : str, default="."
        Directory beneath :attr:`workspace` holding the build outputs.
    dist_dir : str, default="dist"
        Directory beneath :attr:`workspace` receiving the bundle.
    name : str, default="browser extension"
        Human readable name used in progress banners.
    actions : list[StagingAction]
        Ordered staging actions. Defaults to :data:`DEFAULT_ACTIONS`.

    Examples
    --------
    >>> config = StagingConfig(workspace=Path("/tmp/workspace"))
    >>> config.dest_root().as_posix()
    '/tmp/workspace/dist'
    """

    workspace: Path
    source_dir: str = "."
    dist_dir: str = "dist"
    name: str = "browser extension"
    actions: list[StagingAction] = dataclasses.field(
        default_factory=lambda: list(DEFAULT_ACTIONS)
    )

    def source_root(self) -> Path:
        """Return the absolute source root."""
        return (self.workspace / self.source_dir).absolute()

    def dest_root(self) -> Path:
        """Return the absolute destination root."""
        return (self.workspace / self.dist_dir).absolute()


def default_config(workspace: Path) -> StagingConfig:
    """Return the built-in configuration rooted at ``workspace``."""
    return StagingConfig(workspace=Path(workspace))


def discover_config(workspace: Path) -> Path | None:
    """Return ``workspace/extension-staging.toml`` when it exists."""
    candidate = Path(workspace) / DEFAULT_CONFIG_NAME
    return candidate if candidate.is_file() else None


def load_config(config_file: Path, workspace: Path) -> StagingConfig:
    """Load staging configuration from ``config_file``.

    Parameters
    ----------
    config_file : Path
        Path to the TOML configuration file.
    workspace : Path
        Checkout root that relative directories are resolved against.

    Returns
    -------
    StagingConfig
        Configuration with the ``[common]`` overrides applied. When the file
        declares no ``[[actions]]`` the built-in manifest is used.

    Raises
    ------
    FileNotFoundError
        Raised when the configuration file is absent at ``config_file``.
    ConfigError
        Raised when the file cannot be parsed or declares invalid values.
    """
    config_file = Path(config_file)
    if not config_file.is_file():
        message = f"Configuration file not found at {config_file}"
        raise FileNotFoundError(message)

    data = _load_toml(config_file)
    common = _table(data, "common", config_file)
    _reject_unknown(common, _COMMON_KEYS, "[common]", config_file)

    base = default_config(workspace)
    actions = (
        _make_actions(data["actions"], config_file)
        if "actions" in data
        else base.actions
    )
    return StagingConfig(
        workspace=Path(workspace),
        source_dir=_string(common, "source_dir", base.source_dir, config_file),
        dist_dir=_string(common, "dist_dir", base.dist_dir, config_file),
        name=_string(common, "name", base.name, config_file),
        actions=actions,
    )


def _load_toml(path: Path) -> dict[str, typ.Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        message = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(message) from exc


def _table(
    data: dict[str, typ.Any], key: str, config_path: Path
) -> dict[str, typ.Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        message = f"[{key}] must be a table in {config_path}"
        raise ConfigError(message)
    return value


def _string(
    section: dict[str, typ.Any], key: str, default: str, config_path: Path
) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value:
        message = f"'{key}' must be a non-empty string in {config_path}"
        raise ConfigError(message)
    return value


def _reject_unknown(
    section: dict[str, typ.Any], allowed: set[str], label: str, config_path: Path
) -> None:
    """Ensure ``section`` only uses keys from ``allowed``.

    Examples
    --------
    >>> _reject_unknown({"name": "x"}, {"name"}, "[common]", Path("cfg"))
    """
    if unknown := sorted(set(section) - allowed):
        joined = ", ".join(unknown)
        message = f"Unknown key(s) {joined} in {label} of {config_path}"
        raise ConfigError(message)


def _make_actions(entries: object, config_path: Path) -> list[StagingAction]:
    if not isinstance(entries, list) or not entries:
        message = f"[[actions]] must be a non-empty array of tables in {config_path}"
        raise ConfigError(message)
    return [
        _make_action(entry, index, config_path)
        for index, entry in enumerate(entries, start=1)
    ]


def _make_action(entry: object, index: int, config_path: Path) -> StagingAction:
    if not isinstance(entry, dict):
        message = (
            "Action entries must be tables of key/value pairs "
            f"(entry #{index} in {config_path})"
        )
        raise ConfigError(message)
    _reject_unknown(entry, _ACTION_KEYS, f"action #{index}", config_path)

    source = entry.get("source")
    if not isinstance(source, str) or not source:
        message = (
            "Missing required action key 'source' "
            f"in entry #{index} of {config_path}"
        )
        raise ConfigError(message)

    destination = entry.get("destination", PurePosixPath(source).name)
    if not isinstance(destination, str) or not destination:
        message = (
            "Action key 'destination' must be a non-empty string "
            f"(entry #{index} in {config_path})"
        )
        raise ConfigError(message)

    required = entry.get("required", True)
    if not isinstance(required, bool):
        message = (
            "Action key 'required' must be a boolean "
            f"(entry #{index} in {config_path})"
        )
        raise ConfigError(message)

    hint = entry.get("hint")
    if hint is not None and not isinstance(hint, str):
        message = (
            "Action key 'hint' must be a string "
            f"(entry #{index} in {config_path})"
        )
        raise ConfigError(message)

    return StagingAction(
        source=source,
        destination=destination,
        required=required,
        kind=_parse_kind(entry.get("kind", "file"), index, config_path),
        hint=hint or None,
    )


def _parse_kind(value: object, index: int, config_path: Path) -> ActionKind:
    try:
        return ActionKind(value)
    except ValueError as exc:
        choices = ", ".join(kind.value for kind in ActionKind)
        message = (
            f"Unsupported action kind {value!r}; expected one of {choices} "
            f"(entry #{index} in {config_path})"
        )
        raise ConfigError(message) from exc
