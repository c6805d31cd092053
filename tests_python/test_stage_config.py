"""Configuration loader tests for the staging helper."""

from __future__ import annotations

from pathlib import Path

import pytest

from extension_stage import (
    DEFAULT_ACTIONS,
    ActionKind,
    ConfigError,
    StagingConfig,
    default_config,
    discover_config,
    load_config,
)


def _write_config(workspace: Path, body: str) -> Path:
    config_file = workspace / "extension-staging.toml"
    config_file.write_text(body, encoding="utf-8")
    return config_file


def test_default_config_uses_builtin_manifest(workspace: Path) -> None:
    """Without a file the configuration should stage the built-in actions."""

    config = default_config(workspace)

    assert config.actions == list(DEFAULT_ACTIONS)
    assert config.source_root() == workspace
    assert config.dest_root() == workspace / "dist"


def test_roots_resolve_relative_directories(workspace: Path) -> None:
    """``source_dir`` and ``dist_dir`` are resolved against the workspace."""

    config = StagingConfig(workspace=workspace, source_dir="build", dist_dir="out/bundle")

    assert config.source_root() == workspace / "build"
    assert config.dest_root() == workspace / "out" / "bundle"


def test_load_config_reads_common_and_actions(workspace: Path) -> None:
    """``load_config`` should apply ``[common]`` and keep action order."""

    config_file = _write_config(
        workspace,
        """\
[common]
name = "DoubleTrack Browser"
dist_dir = "build/dist"

[[actions]]
source = "src/manifest.json"

[[actions]]
source = "rust_core/pkg"
destination = "wasm"
required = false
kind = "directory"
hint = "build Rust first"
""",
    )

    config = load_config(config_file, workspace)

    assert config.name == "DoubleTrack Browser"
    assert config.dist_dir == "build/dist"
    assert config.source_dir == "."
    assert [action.source for action in config.actions] == [
        "src/manifest.json",
        "rust_core/pkg",
    ]
    manifest, wasm = config.actions
    assert manifest.destination == "manifest.json", "destination defaults to file name"
    assert manifest.required is True
    assert manifest.kind is ActionKind.FILE
    assert wasm.required is False
    assert wasm.kind is ActionKind.DIRECTORY
    assert wasm.hint == "build Rust first"
    assert manifest.hint is None


def test_load_config_without_actions_keeps_defaults(workspace: Path) -> None:
    """A file that only overrides ``[common]`` keeps the built-in manifest."""

    config_file = _write_config(workspace, '[common]\nsource_dir = "checkout"\n')

    config = load_config(config_file, workspace)

    assert config.actions == list(DEFAULT_ACTIONS)
    assert config.source_root() == workspace / "checkout"


def test_load_config_requires_file(workspace: Path) -> None:
    """A missing configuration file should raise ``FileNotFoundError``."""

    with pytest.raises(FileNotFoundError, match="Configuration file not found"):
        load_config(workspace / "absent.toml", workspace)


def test_discover_config_finds_workspace_file(workspace: Path) -> None:
    """The conventional file name should be picked up when present."""

    assert discover_config(workspace) is None

    config_file = _write_config(workspace, "")

    assert discover_config(workspace) == config_file


@pytest.mark.parametrize(
    ("body", "fragment"),
    [
        ("[common\n", "Invalid TOML"),
        ('common = "x"\n', "[common] must be a table"),
        ('[common]\nbin_name = "x"\n', "Unknown key(s) bin_name"),
        ('[common]\ndist_dir = ""\n', "'dist_dir' must be a non-empty string"),
        ("actions = []\n", "non-empty array of tables"),
        ("actions = [1]\n", "entry #1"),
        ('[[actions]]\ndestination = "x"\n', "Missing required action key 'source'"),
        ('[[actions]]\nsource = "a"\nrequired = "yes"\n', "'required' must be a boolean"),
        ('[[actions]]\nsource = "a"\nkind = "symlink"\n', "Unsupported action kind"),
        ('[[actions]]\nsource = "a"\ndestination = ""\n', "'destination' must be"),
        ('[[actions]]\nsource = "a"\noutput = "x"\n', "Unknown key(s) output"),
        ('[[actions]]\nsource = "a"\nhint = 3\n', "'hint' must be a string"),
    ],
)
def test_load_config_rejects_invalid_files(
    workspace: Path, body: str, fragment: str
) -> None:
    """Malformed configuration should raise ``ConfigError`` with context."""

    config_file = _write_config(workspace, body)

    with pytest.raises(ConfigError) as exc:
        load_config(config_file, workspace)

    assert fragment in str(exc.value)
