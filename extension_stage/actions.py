"""Staging action records and the built-in extension manifest.

A :class:`StagingAction` names one artefact to copy from the source root into
the destination root. The build executes actions strictly in the order they
are declared, so later actions may rely on directories produced by earlier
ones.

Usage
-----
Declare a custom manifest::

    from extension_stage.actions import StagingAction

    actions = (
        StagingAction.file("src/manifest.json", "manifest.json"),
        StagingAction.directory("icons", "icons", required=False),
    )
"""

from __future__ import annotations

import dataclasses
import enum
from pathlib import PurePosixPath

__all__ = ["DEFAULT_ACTIONS", "ActionKind", "StagingAction"]


class ActionKind(enum.StrEnum):
    """Copy strategy applied to an action's source."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclasses.dataclass(slots=True, frozen=True)
class StagingAction:
    """Describe a single artefact to be staged.

    Parameters
    ----------
    source : str
        Path of the artefact relative to the source root.
    destination : str
        Path of the staged artefact relative to the destination root.
    required : bool, default=True
        When ``True`` a missing source or failed copy aborts the build.
        Optional actions are reported and skipped instead.
    kind : ActionKind, default=ActionKind.FILE
        ``FILE`` copies a single file; ``DIRECTORY`` copies a tree.
    hint : str | None, optional
        Advice appended to the warning when an optional source is missing,
        typically naming the toolchain that produces it.

    Examples
    --------
    >>> action = StagingAction.file("src/popup/popup.html", "popup.html")
    >>> action.required, action.kind
    (True, <ActionKind.FILE: 'file'>)
    """

    source: str
    destination: str
    required: bool = True
    kind: ActionKind = ActionKind.FILE
    hint: str | None = None

    @classmethod
    def file(
        cls,
        source: str,
        destination: str | None = None,
        *,
        required: bool = True,
        hint: str | None = None,
    ) -> StagingAction:
        """Return a single-file action; ``destination`` defaults to the file name."""
        target = destination or PurePosixPath(source).name
        return cls(source, target, required, ActionKind.FILE, hint)

    @classmethod
    def directory(
        cls,
        source: str,
        destination: str | None = None,
        *,
        required: bool = True,
        hint: str | None = None,
    ) -> StagingAction:
        """Return a recursive directory action."""
        target = destination or PurePosixPath(source).name
        return cls(source, target, required, ActionKind.DIRECTORY, hint)


def _flatten(
    pairs: tuple[tuple[str, str], ...], *, required: bool, hint: str | None = None
) -> tuple[StagingAction, ...]:
    return tuple(
        StagingAction.file(f"src/{source}", destination, required=required, hint=hint)
        for source, destination in pairs
    )


_HTML_FILES = (
    ("popup/popup.html", "popup.html"),
    ("options/options.html", "options.html"),
    ("dashboard/dashboard.html", "dashboard.html"),
)

_CSS_FILES = (
    ("popup/popup.css", "popup.css"),
    ("options/options.css", "options.css"),
    ("dashboard/dashboard.css", "dashboard.css"),
)

# Emitted by the application-layer compiler, which may not have run yet.
_COMPILED_SCRIPTS = (
    ("background/Background.res.js", "background.js"),
    ("content/Content.res.js", "content.js"),
    ("popup/Popup.res.js", "popup.js"),
    ("options/Options.res.js", "options.js"),
    ("dashboard/Dashboard.res.js", "dashboard.js"),
)

DEFAULT_ACTIONS: tuple[StagingAction, ...] = (
    StagingAction.file("src/manifest.json", "manifest.json"),
    *_flatten(_HTML_FILES, required=True),
    *_flatten(_CSS_FILES, required=True),
    *_flatten(_COMPILED_SCRIPTS, required=False, hint="build ReScript first"),
    StagingAction.directory(
        "rust_core/pkg", "wasm", required=False, hint="build Rust first"
    ),
    StagingAction.directory("icons", "icons", required=False),
)
