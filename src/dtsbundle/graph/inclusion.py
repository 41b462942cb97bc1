from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Deque, Dict, Optional

from dtsbundle.core.errors import GraphIntegrityError
from dtsbundle.core.models import ExcludePredicate, FileMap, FileParseResult, InclusionResult
from dtsbundle.graph.exports import ExportIndex
from dtsbundle.logging.helpers import get_trace_logger
from dtsbundle.utils.paths import relative_posix

_QUEUED = 'queued'
_EXCLUDED = 'excluded'
_EXTERNAL = 'external'


class InclusionResolver:
    """Decide which reachable files end up in the bundle.

    Starting from the entry parse result, external-import edges are followed
    through the export index and relative-import edges through the file map.
    A file is enqueued at most once. Every edge that reaches a file not yet
    queued is judged on its own: the exclude predicate may drop it, or it
    may be deferred as an external dependency. Such a file is still pulled
    into the bundle by any later edge that enqueues it, at which point it
    leaves the excluded or external-dependency list.
    """

    def __init__(
        self,
        *,
        file_map: FileMap,
        export_index: ExportIndex,
        base_dir: Path,
        is_excluded: ExcludePredicate,
        externals: bool,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._file_map = file_map
        self._exports = export_index
        self._base_dir = base_dir
        self._is_excluded = is_excluded
        self._externals = bool(externals)
        self._trace = logger or get_trace_logger()

    def resolve(self, entry: FileParseResult) -> InclusionResult:
        self._trace.debug('\n### determine typings to include ###')
        result = InclusionResult()
        status: Dict[Path, str] = {entry.file: _QUEUED}
        queue: Deque[FileParseResult] = deque([entry])

        while queue:
            parse = queue.popleft()
            self._trace.debug('%s (%s)', parse.name, parse.file)
            result.used.append(parse)

            for name in parse.external_imports:
                owner = self._exports.owner_of(name)
                if owner is None or status.get(owner.file) == _QUEUED:
                    continue
                if self._is_excluded(self._rel(owner.file), True):
                    self._trace.debug(' - exclude external filter %s', name)
                    self._set_aside(result, status, owner.file, _EXCLUDED)
                elif not self._externals:
                    self._trace.debug(' - exclude external %s', name)
                    self._set_aside(result, status, owner.file, _EXTERNAL)
                else:
                    self._trace.debug(' - include external %s', name)
                    self._enqueue(result, status, queue, owner)

            for file in parse.relative_imports:
                target = self._file_map.get(file)
                if target is None:
                    raise GraphIntegrityError(f'imported file was never parsed: {file} (from {parse.file})')
                if status.get(target.file) == _QUEUED:
                    continue
                if self._is_excluded(self._rel(target.file), False):
                    self._trace.debug(' - exclude internal filter %s', file)
                    self._set_aside(result, status, target.file, _EXCLUDED)
                else:
                    self._trace.debug(' - import relative %s', file)
                    self._enqueue(result, status, queue, target)

        return result

    @staticmethod
    def _set_aside(result: InclusionResult, status: Dict[Path, str], file: Path, kind: str) -> None:
        # the first reason a file was left out is the one reported
        if file in status:
            return
        status[file] = kind
        if kind == _EXCLUDED:
            result.excluded.append(file)
        else:
            result.external_dependencies.append(file)

    @staticmethod
    def _enqueue(
        result: InclusionResult,
        status: Dict[Path, str],
        queue: Deque[FileParseResult],
        parse: FileParseResult,
    ) -> None:
        previous = status.get(parse.file)
        if previous == _EXCLUDED:
            result.excluded.remove(parse.file)
        elif previous == _EXTERNAL:
            result.external_dependencies.remove(parse.file)
        status[parse.file] = _QUEUED
        queue.append(parse)

    def _rel(self, path: Path) -> str:
        return relative_posix(path, self._base_dir)


def resolve_inclusion(
    entry: FileParseResult,
    file_map: FileMap,
    export_index: ExportIndex,
    *,
    base_dir: Path,
    is_excluded: ExcludePredicate,
    externals: bool,
    logger: Optional[logging.Logger] = None,
) -> InclusionResult:
    """Functional wrapper around InclusionResolver."""
    return InclusionResolver(
        file_map=file_map,
        export_index=export_index,
        base_dir=base_dir,
        is_excluded=is_excluded,
        externals=externals,
        logger=logger,
    ).resolve(entry)
