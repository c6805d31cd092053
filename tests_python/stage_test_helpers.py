"""Shared helpers for the staging test suites."""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "COMPILED_SCRIPTS",
    "CSS_FILES",
    "HTML_FILES",
    "snapshot_tree",
    "write_extension_sources",
]

HTML_FILES = {
    "src/popup/popup.html": "popup.html",
    "src/options/options.html": "options.html",
    "src/dashboard/dashboard.html": "dashboard.html",
}

CSS_FILES = {
    "src/popup/popup.css": "popup.css",
    "src/options/options.css": "options.css",
    "src/dashboard/dashboard.css": "dashboard.css",
}

COMPILED_SCRIPTS = {
    "src/background/Background.res.js": "background.js",
    "src/content/Content.res.js": "content.js",
    "src/popup/Popup.res.js": "popup.js",
    "src/options/Options.res.js": "options.js",
    "src/dashboard/Dashboard.res.js": "dashboard.js",
}


def _write(path: Path, payload: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)


def write_extension_sources(
    root: Path,
    *,
    manifest: bool = True,
    scripts: bool = False,
    wasm: bool = False,
    icons: bool = True,
) -> None:
    """Populate ``root`` with a checkout laid out like the extension repository.

    Parameters
    ----------
    root : Path
        Workspace root directory to populate.
    manifest : bool
        Write ``src/manifest.json``.
    scripts : bool
        Write the compiled application-layer scripts.
    wasm : bool
        Write a native-module package under ``rust_core/pkg``.
    icons : bool
        Write an ``icons`` directory with two images.
    """
    if manifest:
        _write(root / "src" / "manifest.json", b'{"manifest_version": 3}\n')
    for source in (*HTML_FILES, *CSS_FILES):
        _write(root / source, f"/* {source} */\n".encode())
    if scripts:
        for source in COMPILED_SCRIPTS:
            _write(root / source, f"// {source}\n".encode())
    if wasm:
        _write(root / "rust_core" / "pkg" / "a.wasm", b"\x00asm\x01\x00\x00\x00")
        _write(root / "rust_core" / "pkg" / "b.js", b"export default {};\n")
    if icons:
        _write(root / "icons" / "icon-48.png", b"\x89PNG-48")
        _write(root / "icons" / "icon-128.png", b"\x89PNG-128")


def snapshot_tree(root: Path) -> dict[str, bytes]:
    """Return a mapping of relative file paths beneath ``root`` to their bytes."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }
