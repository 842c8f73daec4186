"""Locate the target compiler executable.

The wrapper is normally installed next to the compiler it drives, so the
wrapper's own directory is searched first and ``PATH`` second.
"""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path


def _exe_name(name: str) -> str:
    """Append ``.exe`` on Windows when *name* has no suffix."""
    if sys.platform == "win32" and not Path(name).suffix:
        return name + ".exe"
    return name


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def wrapper_dir(argv0: str) -> Path | None:
    """Return the directory holding the running wrapper, if it can be found.

    A bare ``argv0`` (invoked through ``PATH``) is resolved with
    ``shutil.which`` first; symlinks are followed so that a linked wrapper
    finds the compiler beside the real file.
    """
    if not argv0:
        return None
    candidate = Path(argv0)
    if candidate.parent == Path(".") and not candidate.exists():
        found = shutil.which(argv0)
        if found is None:
            return None
        candidate = Path(found)
    return candidate.resolve().parent


def locate_binary(exe_name: str, argv0: str) -> Path | None:
    """Find *exe_name* beside the wrapper, then on ``PATH``.

    Returns:
        Path to an executable file, or ``None`` when no candidate qualifies.
    """
    name = _exe_name(exe_name)

    bin_dir = wrapper_dir(argv0)
    if bin_dir is not None:
        local = bin_dir / name
        if _is_executable(local):
            return local

    found = shutil.which(name)
    if found:
        return Path(found)
    return None
