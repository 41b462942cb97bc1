from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Set

from dtsbundle.constants import DTS_SUFFIX
from dtsbundle.logging.helpers import get_logger
from dtsbundle.utils.paths import absolute, is_hidden_path


class DeclarationDiscovery:
    """Find every declaration file below a base directory.

    The result only classifies files as project-owned; it never drives the
    graph traversal.
    """

    def __init__(self, *, suffix: str = DTS_SUFFIX, logger: Optional[logging.Logger] = None) -> None:
        self._suffix = suffix
        self._log = logger or get_logger('io.discovery')

    def gather_files(self, base_dir: Path) -> List[Path]:
        root = absolute(base_dir)
        if not root.is_dir():
            self._log.error('⚠  %s is not a directory – no source typings', root)
            return []

        collected: Set[Path] = set()
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = [d for d in dirnames if not d.startswith('.')]
            for fn in filenames:
                if not fn.endswith(self._suffix):
                    continue
                fp = Path(dirpath, fn)
                if is_hidden_path(fp.relative_to(root)):
                    continue
                collected.add(absolute(fp))

        return sorted(collected, key=str)


def find_declaration_files(base_dir: Path) -> List[Path]:
    """Return the sorted absolute paths of all `*.d.ts` files under *base_dir*."""
    return DeclarationDiscovery().gather_files(base_dir)
