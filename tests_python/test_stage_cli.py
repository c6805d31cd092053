"""Behavioural tests for the staging CLI entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import stage
from stage_test_helpers import write_extension_sources


def test_cli_stages_with_builtin_manifest(
    populated_workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Invoked without arguments the CLI stages the current directory."""

    stage.main()

    dist = populated_workspace / "dist"
    assert (dist / "manifest.json").exists()
    assert (dist / "icons" / "icon-48.png").exists()
    captured = capsys.readouterr()
    assert "Build complete!" in captured.out
    assert "Staged 8 artefact(s)" in captured.err


def test_cli_writes_report(populated_workspace: Path, tmp_path: Path) -> None:
    """``--report`` exports the build report as JSON."""

    report_path = tmp_path / "report.json"

    stage.main(workspace=populated_workspace, report=report_path)

    data = json.loads(report_path.read_text(encoding="utf-8"))
    assert data["status"] == "success"
    assert data["counts"]["skipped_missing"] == 6


def test_cli_discovers_workspace_config(
    populated_workspace: Path,
) -> None:
    """``extension-staging.toml`` in the workspace overrides the defaults."""

    (populated_workspace / "extension-staging.toml").write_text(
        '[common]\ndist_dir = "bundle"\n', encoding="utf-8"
    )

    stage.main(workspace=populated_workspace)

    assert (populated_workspace / "bundle" / "manifest.json").exists()
    assert not (populated_workspace / "dist").exists()


def test_cli_exits_when_manifest_missing(
    workspace: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A missing required artefact exits with status 1 and an annotation."""

    write_extension_sources(workspace, manifest=False)
    report_path = tmp_path / "report.json"

    with pytest.raises(SystemExit) as exc:
        stage.main(workspace=workspace, report=report_path)

    assert exc.value.code == 1, "CLI should exit with status 1 on required failures"
    assert "::error title=Build Failure::Required artefact not found." in (
        capsys.readouterr().err
    )
    data = json.loads(report_path.read_text(encoding="utf-8"))
    assert data["status"] == "aborted"
    assert len(data["outcomes"]) == 1


def test_cli_exits_when_config_missing(workspace: Path) -> None:
    """An explicit configuration path that does not exist is fatal."""

    with pytest.raises(SystemExit) as exc:
        stage.main(workspace=workspace, config=workspace / "absent.toml")

    assert exc.value.code == 1


def test_cli_parses_flags(workspace: Path) -> None:
    """The cyclopts application forwards ``--workspace`` to the command."""

    with pytest.raises(SystemExit) as exc:
        stage.app(["--workspace", str(workspace / "missing")])

    assert exc.value.code == 1, "missing source root should fail the build"


def test_cli_keeps_build_failure_when_report_cannot_be_written(
    workspace: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """An unwritable report path is annotated without hiding the build failure."""

    write_extension_sources(workspace, manifest=False)
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        stage.main(workspace=workspace, report=blocker / "report.json")

    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "::error title=Build Failure::Required artefact not found." in err
    assert "::warning title=Report Not Written::" in err


def test_cli_fails_when_report_cannot_be_written(
    populated_workspace: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A successful build still exits non-zero when its report is lost."""

    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        stage.main(workspace=populated_workspace, report=blocker / "report.json")

    assert exc.value.code == 1
    assert (populated_workspace / "dist" / "manifest.json").exists()
    assert "::warning title=Report Not Written::" in capsys.readouterr().err
