"""Core extension staging pipeline."""

from __future__ import annotations

import dataclasses
import os
import sys
import typing as typ
from pathlib import Path

from ..actions import ActionKind
from ..errors import (
    DestRootNotWritableError,
    DirectoryEnsureError,
    RequiredArtefactMissingError,
    RequiredCopyFailedError,
    SourceRootNotFoundError,
    StageError,
)
from ..fs_utils import copy_file, copy_tree, ensure_directory, resolve_destination
from .report import ActionOutcome, BuildReport, BuildStatus, OutcomeKind
from .resolution import SourcePresence, locate_source

if typ.TYPE_CHECKING:
    from ..actions import StagingAction
    from ..config import StagingConfig

__all__ = ["run_build", "stage_extension"]


@dataclasses.dataclass(slots=True)
class _ActionResult:
    outcome: ActionOutcome
    presence: SourcePresence | None
    error: OSError | None = None


def run_build(
    source_root: Path, dest_root: Path, actions: typ.Sequence[StagingAction]
) -> BuildReport:
    """Stage ``actions`` from ``source_root`` into ``dest_root``.

    Parameters
    ----------
    source_root : Path
        Existing directory holding the artefacts. It is never modified.
    dest_root : Path
        Bundle directory; created when absent.
    actions : Sequence[StagingAction]
        Ordered actions. Execution and report order follow this sequence.

    Returns
    -------
    BuildReport
        Finalised report with one outcome per action.

    Raises
    ------
    SourceRootNotFoundError
        Raised when ``source_root`` is not an existing directory.
    DestinationEscapesRootError
        Raised before any copy when an action targets a path outside
        ``dest_root``.
    DestRootNotWritableError
        Raised when ``dest_root`` cannot be created or written to.
    RequiredArtefactMissingError
        Raised when a required source is absent. No later action runs.
    RequiredCopyFailedError
        Raised when copying a required source fails. No later action runs.
    """

    if not source_root.is_dir():
        raise SourceRootNotFoundError(source_root)

    destinations = [
        resolve_destination(dest_root, action.destination) for action in actions
    ]
    _prepare_dest_root(dest_root)

    report = BuildReport(source_root=source_root, dest_root=dest_root)
    for action, destination in zip(actions, destinations, strict=True):
        result = _execute_action(source_root, action, destination)
        outcome = report.record(result.outcome)
        _emit_progress(result, dest_root)
        if outcome.kind is OutcomeKind.FAILED and action.required:
            report.finalise(BuildStatus.ABORTED)
            raise _abort_error(result, report) from result.error

    return report.finalise(BuildStatus.SUCCESS)


def stage_extension(config: StagingConfig) -> BuildReport:
    """Build the bundle described by ``config`` with start and finish banners."""

    print(f"Building {config.name}...")
    report = run_build(config.source_root(), config.dest_root(), config.actions)
    print(
        f"Build complete! Load {_display_path(config.dest_root(), config.workspace)}/"
        " folder in chrome://extensions/"
    )
    return report


def _prepare_dest_root(dest_root: Path) -> None:
    try:
        ensure_directory(dest_root)
    except DirectoryEnsureError as exc:
        raise DestRootNotWritableError(dest_root, exc.cause) from exc
    if not os.access(dest_root, os.W_OK | os.X_OK):
        raise DestRootNotWritableError(dest_root)


def _execute_action(
    source_root: Path, action: StagingAction, destination: Path
) -> _ActionResult:
    """Run ``action`` and describe the result without raising for I/O errors."""

    presence: SourcePresence | None = None
    try:
        presence, source_path = locate_source(source_root, action)
        if presence is SourcePresence.MISSING:
            kind = (
                OutcomeKind.FAILED if action.required else OutcomeKind.SKIPPED_MISSING
            )
            return _ActionResult(
                ActionOutcome(action, kind, destination, "source not found"), presence
            )
        ensure_directory(destination.parent)
        if action.kind is ActionKind.DIRECTORY:
            copy_tree(source_path, destination)
        else:
            copy_file(source_path, destination)
    except DirectoryEnsureError as exc:
        return _failed(action, destination, presence, exc.cause, str(exc))
    except OSError as exc:
        return _failed(action, destination, presence, exc, str(exc))
    outcome = ActionOutcome(action, OutcomeKind.SUCCESS, destination)
    return _ActionResult(outcome, presence)


def _failed(
    action: StagingAction,
    destination: Path,
    presence: SourcePresence | None,
    error: OSError,
    detail: str,
) -> _ActionResult:
    outcome = ActionOutcome(action, OutcomeKind.FAILED, destination, detail)
    return _ActionResult(outcome, presence, error)


def _abort_error(result: _ActionResult, report: BuildReport) -> StageError:
    action = result.outcome.action
    if result.presence is SourcePresence.MISSING:
        return RequiredArtefactMissingError(action, report)
    return RequiredCopyFailedError(action, typ.cast(OSError, result.error), report)


def _emit_progress(result: _ActionResult, dest_root: Path) -> None:
    outcome = result.outcome
    action = outcome.action
    if outcome.kind is OutcomeKind.SUCCESS:
        print(
            f"Staged '{action.source}' ->"
            f" '{_display_path(outcome.destination, dest_root.parent)}'",
        )
    elif outcome.kind is OutcomeKind.SKIPPED_MISSING:
        hint = f" ({action.hint})" if action.hint else ""
        print(
            "::warning title=Artefact Skipped::Optional artefact missing: "
            f"{action.source}{hint}",
            file=sys.stderr,
        )
    elif not action.required:
        print(
            "::warning title=Artefact Copy Failed::Optional artefact not staged: "
            f"{action.source} ({outcome.detail})",
            file=sys.stderr,
        )
    elif result.presence is SourcePresence.MISSING:
        print(
            "::error title=Artefact Missing::Required artefact missing: "
            f"{action.source}",
            file=sys.stderr,
        )
    else:
        print(
            "::error title=Artefact Copy Failed::Required artefact not staged: "
            f"{action.source} ({outcome.detail})",
            file=sys.stderr,
        )


def _display_path(path: Path, base: Path) -> str:
    try:
        return path.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return path.as_posix()
