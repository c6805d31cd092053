"""Error types shared across the staging package."""

from __future__ import annotations

import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    from .actions import StagingAction
    from .staging.report import BuildReport

__all__ = [
    "BuildAbortedError",
    "ConfigError",
    "DestRootNotWritableError",
    "DestinationEscapesRootError",
    "DirectoryEnsureError",
    "RequiredArtefactMissingError",
    "RequiredCopyFailedError",
    "SourceRootNotFoundError",
    "StageError",
]


class StageError(RuntimeError):
    """Raised when the staging pipeline cannot continue."""


class ConfigError(StageError):
    """Raised when a staging configuration file is malformed."""


class SourceRootNotFoundError(StageError):
    """Raised when the source root is absent or not a directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        super().__init__(f"Source root not found: {root.as_posix()}")


class DirectoryEnsureError(StageError):
    """Raised when a directory cannot be created for a reason other than existing."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Unable to create directory {path.as_posix()}: {cause}")


class DestRootNotWritableError(StageError):
    """Raised when the destination root cannot be created or written to."""

    def __init__(self, root: Path, cause: OSError | None = None) -> None:
        self.root = root
        self.cause = cause
        message = f"Destination root is not writable: {root.as_posix()}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)


class DestinationEscapesRootError(StageError):
    """Raised when an action's destination resolves outside the destination root."""

    def __init__(self, destination: str) -> None:
        self.destination = destination
        super().__init__(f"Destination escapes destination root: {destination}")


class BuildAbortedError(StageError):
    """Raised when a required action fails and the build stops.

    Attributes
    ----------
    action : StagingAction
        The required action that failed.
    report : BuildReport
        The finalised report; its last outcome describes ``action``.
    """

    def __init__(self, message: str, action: StagingAction, report: BuildReport) -> None:
        self.action = action
        self.report = report
        super().__init__(message)


class RequiredArtefactMissingError(BuildAbortedError):
    """Raised when the source of a required action does not exist."""

    def __init__(self, action: StagingAction, report: BuildReport) -> None:
        message = (
            "Required artefact not found. "
            f"Source={action.source!r} Root={report.source_root.as_posix()}"
        )
        super().__init__(message, action, report)


class RequiredCopyFailedError(BuildAbortedError):
    """Raised when copying a required artefact fails with an I/O error."""

    def __init__(
        self, action: StagingAction, cause: OSError, report: BuildReport
    ) -> None:
        self.cause = cause
        message = (
            f"Required artefact copy failed: {action.source!r} -> "
            f"{action.destination!r} ({cause})"
        )
        super().__init__(message, action, report)
