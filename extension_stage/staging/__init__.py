"""Staging pipeline package exposing the build orchestrator."""

from .pipeline import run_build, stage_extension
from .report import (
    ActionOutcome,
    BuildReport,
    BuildStatus,
    OutcomeKind,
    summarise,
    write_report,
)
from .resolution import SourcePresence, locate_source

__all__ = [
    "ActionOutcome",
    "BuildReport",
    "BuildStatus",
    "OutcomeKind",
    "SourcePresence",
    "locate_source",
    "run_build",
    "stage_extension",
    "summarise",
    "write_report",
]
