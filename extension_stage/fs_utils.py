"""Filesystem helpers for staging."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

from .errors import DestinationEscapesRootError, DirectoryEnsureError

__all__ = ["copy_file", "copy_tree", "ensure_directory", "resolve_destination"]


def ensure_directory(path: Path) -> Path:
    """Create ``path`` (and its parents) unless it already exists.

    Parameters
    ----------
    path : Path
        Directory that must exist once the call returns.

    Returns
    -------
    Path
        The ensured directory, unchanged.

    Raises
    ------
    DirectoryEnsureError
        Raised on genuine I/O failures such as permission errors or when a
        non-directory already occupies ``path``.

    Examples
    --------
    >>> target = Path("/tmp/ensure-example")
    >>> ensure_directory(target) == ensure_directory(target)
    True
    """

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryEnsureError(path, exc) from exc
    return path


def resolve_destination(dest_root: Path, destination: str) -> Path:
    """Return ``destination`` resolved beneath ``dest_root``.

    The check is lexical: ``..`` segments are collapsed but symlinks are not
    followed, so a ``dist/icons`` link pointing elsewhere is still accepted.

    Parameters
    ----------
    dest_root : Path
        Root directory under which staged artefacts must reside.
    destination : str
        Relative artefact target path supplied by an action.

    Returns
    -------
    Path
        Absolute destination located below ``dest_root``.

    Raises
    ------
    DestinationEscapesRootError
        Raised when ``destination`` is empty or resolves outside ``dest_root``.
    """

    root = Path(os.path.normpath(dest_root.absolute()))
    target = Path(os.path.normpath(root / destination))
    if target == root or not target.is_relative_to(root):
        raise DestinationEscapesRootError(destination)
    return target


def copy_file(source: Path, destination: Path) -> None:
    """Copy ``source`` over ``destination`` byte for byte.

    The copy is written to a sibling temporary file and swapped into place,
    so a failed copy leaves any previously staged file untouched.
    """

    if destination.is_dir() and not destination.is_symlink():
        # shutil.copy2 would otherwise nest the file inside the directory.
        message = f"Destination is a directory: {destination.as_posix()}"
        raise IsADirectoryError(message)
    handle, temp_name = tempfile.mkstemp(
        prefix=f".{destination.name}.", dir=destination.parent
    )
    os.close(handle)
    temp_path = Path(temp_name)
    try:
        shutil.copy2(source, temp_path)
        os.replace(temp_path, destination)
    finally:
        temp_path.unlink(missing_ok=True)


def copy_tree(source: Path, destination: Path) -> None:
    """Merge the tree at ``source`` into ``destination``.

    Files at matching relative paths are overwritten. Files that exist only
    in ``destination`` are left in place.
    """

    shutil.copytree(source, destination, dirs_exist_ok=True)
