"""Public interface for the extension staging package."""

from .actions import DEFAULT_ACTIONS, ActionKind, StagingAction
from .config import StagingConfig, default_config, discover_config, load_config
from .errors import (
    BuildAbortedError,
    ConfigError,
    DestinationEscapesRootError,
    DestRootNotWritableError,
    DirectoryEnsureError,
    RequiredArtefactMissingError,
    RequiredCopyFailedError,
    SourceRootNotFoundError,
    StageError,
)
from .staging import (
    ActionOutcome,
    BuildReport,
    BuildStatus,
    OutcomeKind,
    run_build,
    stage_extension,
    summarise,
    write_report,
)

__all__ = [
    "ActionKind",
    "ActionOutcome",
    "BuildAbortedError",
    "BuildReport",
    "BuildStatus",
    "ConfigError",
    "DEFAULT_ACTIONS",
    "DestRootNotWritableError",
    "DestinationEscapesRootError",
    "DirectoryEnsureError",
    "OutcomeKind",
    "RequiredArtefactMissingError",
    "RequiredCopyFailedError",
    "SourceRootNotFoundError",
    "StageError",
    "StagingAction",
    "StagingConfig",
    "default_config",
    "discover_config",
    "load_config",
    "run_build",
    "stage_extension",
    "summarise",
    "write_report",
]
