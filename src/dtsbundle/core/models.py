from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Pattern, Union

from dtsbundle.constants import DEFAULT_INDENT, DEFAULT_PREFIX, DEFAULT_SEPARATOR

# (relative_path, is_external_edge) -> excluded?
ExcludePredicate = Callable[[str, bool], bool]
ExcludeSpec = Union[ExcludePredicate, Pattern[str], str, None]


class RewriteKind(str, Enum):
    IMPORT = 'import'
    AMBIENT = 'ambient'


@dataclass(frozen=True)
class SpecifierCapture:
    """The four spans of a line whose module specifier may be substituted.

    `target` is set for relative imports only and holds the resolved
    declaration file, `.d.ts` suffix included.
    """
    lead: str
    quote: str
    specifier: str
    trail: str
    kind: RewriteKind
    target: Optional[Path] = None

    def render(self, specifier: str) -> str:
        return f'{self.lead}{self.quote}{specifier}{self.trail}'


@dataclass
class LineRecord:
    original: str
    modified: Optional[str] = None
    capture: Optional[SpecifierCapture] = None

    @property
    def text(self) -> str:
        return self.modified if self.modified is not None else self.original


@dataclass
class FileParseResult:
    """Everything the bundler knows about one declaration file.

    `lines` is the arena of kept lines; the two `rewritable_*` lists hold
    indices into it, so a rewrite updates exactly one slot.
    """
    file: Path
    name: str
    indent_unit: str
    exported_name: str
    is_source: bool = False
    references: List[Path] = field(default_factory=list)
    external_imports: List[str] = field(default_factory=list)
    relative_imports: List[Path] = field(default_factory=list)
    ambient_exports: List[str] = field(default_factory=list)
    lines: List[LineRecord] = field(default_factory=list)
    rewritable_ambient_lines: List[int] = field(default_factory=list)
    rewritable_import_lines: List[int] = field(default_factory=list)

    def add_reference(self, path: Path) -> None:
        _push_unique(self.references, path)

    def add_external_import(self, name: str) -> None:
        _push_unique(self.external_imports, name)

    def add_relative_import(self, path: Path) -> None:
        _push_unique(self.relative_imports, path)

    def add_ambient_export(self, name: str) -> None:
        _push_unique(self.ambient_exports, name)

    def append_line(self, record: LineRecord, *, rewritable: Optional[RewriteKind] = None) -> int:
        """Append *record* to the arena and optionally register it for rewriting."""
        self.lines.append(record)
        idx = len(self.lines) - 1
        if rewritable is RewriteKind.AMBIENT:
            self.rewritable_ambient_lines.append(idx)
        elif rewritable is RewriteKind.IMPORT:
            self.rewritable_import_lines.append(idx)
        return idx

    def rewritable_lines(self) -> Iterator[LineRecord]:
        """Yield ambient header candidates first, then import candidates."""
        for idx in self.rewritable_ambient_lines:
            yield self.lines[idx]
        for idx in self.rewritable_import_lines:
            yield self.lines[idx]

    def texts(self) -> List[str]:
        return [ln.text for ln in self.lines]


FileMap = Dict[Path, FileParseResult]


@dataclass
class InclusionResult:
    """Partition of the reachable files; the three lists are disjoint."""
    used: List[FileParseResult] = field(default_factory=list)
    excluded: List[Path] = field(default_factory=list)
    external_dependencies: List[Path] = field(default_factory=list)

    def is_used(self, path: Path) -> bool:
        return any(p.file == path for p in self.used)


@dataclass(frozen=True)
class BundleOptions:
    """User-facing options of a bundling run.

    Only `main` and `name` are required; every other field mirrors the
    defaults of the command line.
    """
    main: str
    name: str
    base_dir: Optional[str] = None
    out: Optional[str] = None
    newline: Optional[str] = None
    indent: str = DEFAULT_INDENT
    prefix: str = DEFAULT_PREFIX
    separator: str = DEFAULT_SEPARATOR
    externals: bool = False
    exclude: ExcludeSpec = None
    remove_source: bool = False
    comments: bool = False
    verbose: bool = False


@dataclass(frozen=True)
class BundleSettings:
    """Validated, absolute-path view of BundleOptions used by the pipeline."""
    main_file: Path
    export_name: str
    base_dir: Path
    out_file: Path
    newline: str
    indent: str
    prefix: str
    separator: str
    externals: bool
    is_excluded: ExcludePredicate
    remove_source: bool
    comments: bool
    verbose: bool
    exclude_repr: str = ''


def _push_unique(items: list, value) -> None:
    if value not in items:
        items.append(value)


def never_excluded(_rel: str, _external: bool) -> bool:
    return False


def regex_predicate(pattern: Union[str, Pattern[str]]) -> ExcludePredicate:
    """Build an exclude predicate testing *pattern* against the relative path."""
    rx = re.compile(pattern) if isinstance(pattern, str) else pattern

    def _matches(rel: str, _external: bool) -> bool:
        return rx.search(rel) is not None

    return _matches
