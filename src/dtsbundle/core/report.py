from __future__ import annotations

"""
Detailed bundling run report.

The report is filled by the pipeline as it goes and returned by `bundle()`.
With `--report FILE` the CLI dumps it as JSON; in verbose mode the
statistics section is also printed through the trace channel.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


@dataclass
class BundleReport:
    started_at: float = field(default_factory=time.perf_counter)
    finished_at: float | None = None
    duration_s: float | None = None

    main_file: Optional[Path] = None
    out_file: Optional[Path] = None
    bytes_written: int = 0

    source_typings: List[Path] = field(default_factory=list)
    used_typings: List[Path] = field(default_factory=list)
    excluded_typings: List[Path] = field(default_factory=list)
    external_typings: List[Path] = field(default_factory=list)
    external_dependencies: List[Path] = field(default_factory=list)
    removed_sources: List[Path] = field(default_factory=list)

    time_by_stage: Dict[str, float] = field(
        default_factory=lambda: {
            "discover": 0.0,
            "parse": 0.0,
            "exports": 0.0,
            "inclusion": 0.0,
            "rewrite": 0.0,
            "assemble": 0.0,
            "write": 0.0,
        }
    )

    def add_time(self, stage: str, seconds: float) -> None:
        self.time_by_stage[stage] = self.time_by_stage.get(stage, 0.0) + seconds

    @property
    def used_source_typings(self) -> List[Path]:
        used = set(self.used_typings)
        return [p for p in self.source_typings if p in used]

    @property
    def unused_source_typings(self) -> List[Path]:
        used = set(self.used_typings)
        return [p for p in self.source_typings if p not in used]

    @property
    def used_external_typings(self) -> List[Path]:
        used = set(self.used_typings)
        return [p for p in self.external_typings if p in used]

    @property
    def unused_external_typings(self) -> List[Path]:
        used = set(self.used_typings)
        return [p for p in self.external_typings if p not in used]

    def finish(self) -> None:
        self.finished_at = time.perf_counter()
        self.duration_s = self.finished_at - self.started_at

    def log_statistics(self, trace: logging.Logger) -> None:
        trace.debug('\n### statistics ###')
        sections = (
            ('used sourceTypings', self.used_source_typings),
            ('unused sourceTypings', self.unused_source_typings),
            ('excludedTypings', self.excluded_typings),
            ('used external typings', self.used_external_typings),
            ('unused external typings', self.unused_external_typings),
            ('external dependencies', self.external_dependencies),
        )
        for title, paths in sections:
            trace.debug(title)
            for p in paths:
                trace.debug(' - %s', p)

    def to_json(self, *, indent: int = 2) -> str:
        def _paths(items: List[Path]) -> List[str]:
            return [str(p) for p in items]

        return json.dumps(
            {
                "duration_s": self.duration_s,
                "main_file": str(self.main_file) if self.main_file else None,
                "out_file": str(self.out_file) if self.out_file else None,
                "bytes_written": self.bytes_written,
                "source_typings": _paths(self.source_typings),
                "used_typings": _paths(self.used_typings),
                "unused_source_typings": _paths(self.unused_source_typings),
                "excluded_typings": _paths(self.excluded_typings),
                "external_typings": _paths(self.external_typings),
                "external_dependencies": _paths(self.external_dependencies),
                "removed_sources": _paths(self.removed_sources),
                "time_by_stage": self.time_by_stage,
            },
            indent=indent,
        )


class StageTimer:
    def __init__(self, report: BundleReport, stage: str):
        self._report = report
        self._stage = stage
        self._t0: float | None = None

    def __enter__(self):
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._t0 is not None:
            self._report.add_time(self._stage, time.perf_counter() - self._t0)
        return False
