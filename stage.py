# /// script
# requires-python = ">=3.11"
# dependencies = [
#   "cyclopts>=2.9",
# ]
# ///

"""Command-line entry point for the extension staging helper.

Examples
--------
Stage the extension bundle from a checkout with the built-in manifest::

    uv run stage.py

Use a project-specific manifest and keep a JSON report of the run::

    uv run stage.py --config extension-staging.toml --report dist-report.json
"""

from __future__ import annotations

import sys
from pathlib import Path

import cyclopts

from extension_stage import (
    BuildReport,
    StageError,
    default_config,
    discover_config,
    load_config,
    stage_extension,
    summarise,
    write_report,
)

app = cyclopts.App(help="Stage browser-extension build outputs into a bundle.")


@app.default
def main(
    *,
    config: Path | None = None,
    workspace: Path | None = None,
    report: Path | None = None,
) -> None:
    """Stage the extension bundle.

    Parameters
    ----------
    config:
        Optional TOML configuration file. Defaults to
        ``extension-staging.toml`` in the workspace when present, otherwise
        the built-in manifest.
    workspace:
        Checkout root containing the build outputs. Defaults to the current
        directory.
    report:
        Optional path receiving a JSON description of the build.
    """
    root = Path(workspace) if workspace is not None else Path.cwd()
    try:
        config_path = Path(config) if config is not None else discover_config(root)
        staging_config = (
            load_config(config_path, root)
            if config_path is not None
            else default_config(root)
        )
        result = stage_extension(staging_config)
    except (FileNotFoundError, StageError) as exc:
        print(f"::error title=Build Failure::{exc}", file=sys.stderr)
        if report is not None and (aborted := getattr(exc, "report", None)):
            _export_report(Path(report), aborted)
        raise SystemExit(1) from exc

    if report is not None and not _export_report(Path(report), result):
        raise SystemExit(1)
    print(summarise(result), file=sys.stderr)


def _export_report(path: Path, result: BuildReport) -> bool:
    """Write ``result`` to ``path``; print an annotation instead of raising."""
    try:
        write_report(path, result)
    except (OSError, StageError) as exc:
        print(f"::warning title=Report Not Written::{exc}", file=sys.stderr)
        return False
    return True


if __name__ == "__main__":
    app()
