from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional

from dtsbundle.core.errors import DuplicateExportError
from dtsbundle.core.models import FileMap, FileParseResult
from dtsbundle.logging.helpers import get_trace_logger


class ExportIndex:
    """Ambient module name -> the single file that declares it.

    Ambient module names form one global namespace across all discovered
    files; the index is built once per run and passed explicitly.
    """

    def __init__(self) -> None:
        self._owners: Dict[str, FileParseResult] = {}

    @classmethod
    def build(cls, file_map: FileMap, *, logger: Optional[logging.Logger] = None) -> 'ExportIndex':
        trace = logger or get_trace_logger()
        trace.debug('\n### map exports ###')
        index = cls()
        for parse in file_map.values():
            for name in parse.ambient_exports:
                index.add(name, parse)
                trace.debug('- %s -> %s', name, parse.file)
        return index

    def add(self, name: str, owner: FileParseResult) -> None:
        existing = self._owners.get(name)
        if existing is not None:
            raise DuplicateExportError(name, existing.file, owner.file)
        self._owners[name] = owner

    def owner_of(self, name: str) -> Optional[FileParseResult]:
        return self._owners.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._owners

    def __len__(self) -> int:
        return len(self._owners)

    def __iter__(self) -> Iterator[str]:
        return iter(self._owners)
