"""Structured build reports and their exported forms."""

from __future__ import annotations

import dataclasses
import enum
import json
import typing as typ
from pathlib import Path

from ..fs_utils import ensure_directory

if typ.TYPE_CHECKING:
    from ..actions import StagingAction

__all__ = [
    "ActionOutcome",
    "BuildReport",
    "BuildStatus",
    "OutcomeKind",
    "summarise",
    "write_report",
]


class OutcomeKind(enum.StrEnum):
    """Per-action result recorded in a :class:`BuildReport`."""

    SUCCESS = "success"
    SKIPPED_MISSING = "skipped_missing"
    FAILED = "failed"


class BuildStatus(enum.StrEnum):
    """Overall result of a build."""

    SUCCESS = "success"
    ABORTED = "aborted"


@dataclasses.dataclass(slots=True, frozen=True)
class ActionOutcome:
    """Outcome of executing a single :class:`StagingAction`."""

    action: StagingAction
    kind: OutcomeKind
    destination: Path
    detail: str | None = None


@dataclasses.dataclass(slots=True)
class BuildReport:
    """Ordered record of every action executed during a build.

    Outcomes are appended in execution order. ``status`` stays ``None``
    until :meth:`finalise` is called at the end of the build or on abort.
    """

    source_root: Path
    dest_root: Path
    outcomes: list[ActionOutcome] = dataclasses.field(default_factory=list)
    status: BuildStatus | None = None

    def record(self, outcome: ActionOutcome) -> ActionOutcome:
        """Append ``outcome`` to the report."""
        if self.status is not None:
            message = "Cannot record outcomes on a finalised report."
            raise RuntimeError(message)
        self.outcomes.append(outcome)
        return outcome

    def finalise(self, status: BuildStatus) -> BuildReport:
        """Mark the report complete with ``status``."""
        self.status = status
        return self

    def outcome_kinds(self) -> list[OutcomeKind]:
        """Return the outcome kinds in execution order."""
        return [outcome.kind for outcome in self.outcomes]

    def _count(self, kind: OutcomeKind) -> int:
        return sum(1 for outcome in self.outcomes if outcome.kind is kind)

    @property
    def staged(self) -> int:
        return self._count(OutcomeKind.SUCCESS)

    @property
    def skipped(self) -> int:
        return self._count(OutcomeKind.SKIPPED_MISSING)

    @property
    def failed(self) -> int:
        return self._count(OutcomeKind.FAILED)

    def as_dict(self) -> dict[str, typ.Any]:
        """Return a JSON-serialisable description of the report.

        Examples
        --------
        >>> report = BuildReport(Path("/src"), Path("/dist"))
        >>> sorted(report.finalise(BuildStatus.SUCCESS).as_dict())
        ['counts', 'dest_root', 'outcomes', 'source_root', 'status']
        """

        return {
            "source_root": self.source_root.as_posix(),
            "dest_root": self.dest_root.as_posix(),
            "status": str(self.status) if self.status is not None else None,
            "counts": {
                "success": self.staged,
                "skipped_missing": self.skipped,
                "failed": self.failed,
            },
            "outcomes": [
                {
                    "source": outcome.action.source,
                    "destination": outcome.action.destination,
                    "kind": str(outcome.action.kind),
                    "required": outcome.action.required,
                    "hint": outcome.action.hint,
                    "outcome": str(outcome.kind),
                    "path": outcome.destination.as_posix(),
                    "detail": outcome.detail,
                }
                for outcome in self.outcomes
            ],
        }


def summarise(report: BuildReport) -> str:
    """Return a one-line summary of ``report``.

    Examples
    --------
    >>> report = BuildReport(Path("/src"), Path("/dist"))
    >>> summarise(report.finalise(BuildStatus.SUCCESS))
    "Staged 0 artefact(s) into '/dist' (0 skipped, 0 failed)."
    """

    return (
        f"Staged {report.staged} artefact(s) into '{report.dest_root.as_posix()}' "
        f"({report.skipped} skipped, {report.failed} failed)."
    )


def write_report(path: Path, report: BuildReport) -> None:
    """Write ``report`` to ``path`` as indented JSON."""

    ensure_directory(path.parent)
    path.write_text(
        json.dumps(report.as_dict(), indent=2) + "\n", encoding="utf-8"
    )
