"""Shared fixtures for the extension staging test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from stage_test_helpers import write_extension_sources


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create an isolated checkout and make it the working directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def dest_root(workspace: Path) -> Path:
    """Return the (not yet created) bundle directory inside ``workspace``."""
    return workspace / "dist"


@pytest.fixture
def populated_workspace(workspace: Path) -> Path:
    """Populate ``workspace`` with the static assets the manifest requires."""
    write_extension_sources(workspace)
    return workspace
