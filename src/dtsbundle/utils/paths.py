# src/dtsbundle/utils/paths.py
"""
paths – Small, centralized path helpers for dtsbundle.

Provides:
  • absolute(path)               – normalized absolute Path (no symlink resolution)
  • is_hidden_path(Path)         – dot-segment detection
  • relative_posix(path, base)   – '/'-separated relative path for reports
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def absolute(path: PathLike, base: PathLike | None = None) -> Path:
    """Return *path* as a normalized absolute Path, joined to *base* if relative.

    Symlinks are left untouched so that identities stay stable across the
    discovery and graph phases.
    """
    raw = os.fspath(path)
    if base is not None and not os.path.isabs(raw):
        raw = os.path.join(os.fspath(base), raw)
    return Path(os.path.abspath(raw))


def is_hidden_path(p: Path) -> bool:
    """Return True if *p* has any hidden segment (leading-dot component)."""
    return any(part.startswith(".") and part not in (".", "..") for part in p.parts)


def relative_posix(path: PathLike, base: PathLike) -> str:
    """Relative path of *path* from *base* using '/' separators."""
    return os.path.relpath(os.fspath(path), os.fspath(base)).replace("\\", "/")
