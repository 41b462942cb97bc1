from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Deque, Optional, Protocol, Set

from dtsbundle.core.models import FileMap, FileParseResult
from dtsbundle.logging.helpers import get_trace_logger


class _Parser(Protocol):
    def parse(self, file: Path) -> FileParseResult:
        ...


def build_file_map(entry: Path, parser: _Parser, *, logger: Optional[logging.Logger] = None) -> FileMap:
    """Parse every file reachable from *entry* through references and relative imports.

    Breadth-first; each file is parsed exactly once, cycles included. The
    returned mapping preserves discovery order and its first item is the
    entry file.
    """
    trace = logger or get_trace_logger()
    trace.debug('\n### parse files ###')

    file_map: FileMap = {}
    queue: Deque[Path] = deque([entry])
    seen: Set[Path] = set()

    while queue:
        target = queue.popleft()
        if target in seen:
            continue
        seen.add(target)

        parse = parser.parse(target)
        file_map[parse.file] = parse

        for nxt in (*parse.references, *parse.relative_imports):
            if nxt not in seen and nxt not in queue:
                queue.append(nxt)

    return file_map
