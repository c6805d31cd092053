"""Source lookup helpers used by the staging pipeline."""

from __future__ import annotations

import enum
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    from ..actions import StagingAction

__all__ = ["SourcePresence", "locate_source"]


class SourcePresence(enum.StrEnum):
    """Result of checking whether an action's source exists."""

    FOUND = "found"
    MISSING = "missing"


def locate_source(
    source_root: Path, action: StagingAction
) -> tuple[SourcePresence, Path]:
    """Return whether ``action``'s source exists alongside its absolute path.

    Only existence is checked. A source of the wrong kind (for example a
    directory where a file is expected) counts as found, so the copy fails
    and is reported as a copy failure rather than a missing artefact.

    Raises
    ------
    OSError
        Raised for lookup failures other than absence, such as permission
        errors or over-long names. Callers treat these as copy failures.

    Examples
    --------
    >>> from extension_stage.actions import StagingAction
    >>> locate_source(Path("/nonexistent"), StagingAction.file("a.txt"))[0]
    <SourcePresence.MISSING: 'missing'>
    """

    candidate = source_root / action.source
    try:
        # ``stat`` follows symlinks, so dangling links count as missing.
        candidate.stat()
    except (FileNotFoundError, NotADirectoryError):
        return SourcePresence.MISSING, candidate
    return SourcePresence.FOUND, candidate
