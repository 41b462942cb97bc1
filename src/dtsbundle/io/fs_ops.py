from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from dtsbundle.constants import DTS_SUFFIX
from dtsbundle.logging.helpers import get_logger


class OutputFileService:
    """Filesystem side effects of a bundling run: output directory, write, cleanup."""

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('io.fs')

    def ensure_directory(self, path: Path) -> None:
        """Create *path* (and ancestors) if absent."""
        if not path.exists():
            path.mkdir(parents=True, exist_ok=True)

    def write_output(self, path: Path, content: str) -> None:
        """Write the bundle in one go; newlines are written untranslated."""
        self.ensure_directory(path.parent)
        with path.open('w', encoding='utf-8', newline='') as fp:
            fp.write(content)

    def remove_source_typings(self, sources: Iterable[Path], out_file: Path) -> List[Path]:
        """Delete project declaration files, never touching *out_file*.

        Returns:
            The list of removed paths, in the order given.
        """
        removed: List[Path] = []
        for p in sources:
            if p == out_file or not p.name.endswith(DTS_SUFFIX) or not p.is_file():
                continue
            p.unlink()
            self._log.debug(' - removed %s', p)
            removed.append(p)
        return removed
