from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, FrozenSet, List, Optional

from dtsbundle.constants import DEFAULT_INDENT, DTS_SUFFIX
from dtsbundle.core.models import FileParseResult, LineRecord, RewriteKind, SpecifierCapture
from dtsbundle.io.indent import detect_indent
from dtsbundle.io.readers import DeclarationReader, split_lines
from dtsbundle.logging.helpers import get_trace_logger
from dtsbundle.parsing.patterns import is_file_specifier
from dtsbundle.parsing.scanner import LineEvent, LineKind, LineScanner
from dtsbundle.processing.naming import NamingContext
from dtsbundle.utils.paths import absolute, relative_posix


@dataclass(frozen=True)
class ParseContext:
    """Run-level facts every file parse needs."""
    naming: NamingContext
    source_files: FrozenSet[Path]
    default_indent: str = DEFAULT_INDENT
    externals: bool = False
    comments: bool = False

    def is_source(self, path: Path) -> bool:
        return path in self.source_files


class DeclarationFileParser:
    """Turn one declaration file into a FileParseResult.

    The parser is created once per run. Besides the per-file results it
    accumulates `external_typings`: referenced files that are not part of
    the project (reported in verbose statistics).
    """

    def __init__(
        self,
        context: ParseContext,
        *,
        reader: Optional[DeclarationReader] = None,
        indent_detector: Callable[[str], str] = detect_indent,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._ctx = context
        self._reader = reader or DeclarationReader()
        self._detect_indent = indent_detector
        self._trace = logger or get_trace_logger()
        self.external_typings: List[Path] = []

    def parse(self, file: Path) -> FileParseResult:
        naming = self._ctx.naming
        name = naming.module_name(file)
        self._trace.debug('%s (%s)', name, file)

        code = self._reader.read_text(file)
        is_source = self._ctx.is_source(file)
        res = FileParseResult(
            file=file,
            name=name,
            indent_unit=self._detect_indent(code) or self._ctx.default_indent,
            exported_name=naming.export_name_for(file),
            is_source=is_source,
        )

        scanner = LineScanner(keep_comments=self._ctx.comments, strip_declare=is_source, source=file)
        for event in scanner.scan(split_lines(code)):
            kind = event.kind
            if kind is LineKind.PRIVATE:
                continue
            if kind is LineKind.REFERENCE:
                self._on_reference(res, event)
            elif kind is LineKind.IMPORT:
                self._on_import(res, event)
            elif kind is LineKind.AMBIENT:
                self._on_ambient(res, event)
            else:
                res.append_line(LineRecord(original=event.text))
        return res

    def _on_reference(self, res: FileParseResult, event: LineEvent) -> None:
        ref = event.reference or ''
        ref_path = absolute(ref, base=res.file.parent)
        if self._ctx.is_source(ref_path):
            self._trace.debug(' - reference source typing %s (%s)', ref, ref_path)
        else:
            rel = relative_posix(ref_path, self._ctx.naming.base_dir)
            self._trace.debug(' - reference external typing %s (%s) (relative: %s)', ref, ref_path, rel)
            if ref_path not in self.external_typings:
                self.external_typings.append(ref_path)
        res.add_reference(ref_path)

    def _on_import(self, res: FileParseResult, event: LineEvent) -> None:
        lead, quote, specifier, trail = event.spans
        if is_file_specifier(specifier):
            target = absolute(specifier + DTS_SUFFIX, base=res.file.parent)
            capture = SpecifierCapture(lead, quote, specifier, trail, RewriteKind.IMPORT, target=target)
            res.append_line(LineRecord(original=event.text, capture=capture), rewritable=RewriteKind.IMPORT)
            self._trace.debug(' - import relative %s (%s)', specifier, target)
            res.add_relative_import(target)
            return

        capture = SpecifierCapture(lead, quote, specifier, trail, RewriteKind.IMPORT)
        res.append_line(
            LineRecord(original=event.text, capture=capture),
            rewritable=RewriteKind.IMPORT if self._ctx.externals else None,
        )
        self._trace.debug(' - import external %s', specifier)
        res.add_external_import(specifier)

    def _on_ambient(self, res: FileParseResult, event: LineEvent) -> None:
        lead, quote, specifier, trail = event.spans
        self._trace.debug(' - declare %s', specifier)
        res.add_ambient_export(specifier)
        capture = SpecifierCapture(lead, quote, specifier, trail, RewriteKind.AMBIENT)
        res.append_line(LineRecord(original=event.text, capture=capture), rewritable=RewriteKind.AMBIENT)
