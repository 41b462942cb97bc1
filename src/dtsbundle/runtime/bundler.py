from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Mapping, Optional, Union

from dtsbundle.core.interfaces.fs import DiscoveryProtocol, IndentDetectorProtocol, OutputFileServiceProtocol
from dtsbundle.core.models import BundleOptions, BundleSettings, FileMap, InclusionResult
from dtsbundle.core.report import BundleReport, StageTimer
from dtsbundle.graph.builder import build_file_map
from dtsbundle.graph.exports import ExportIndex
from dtsbundle.graph.inclusion import InclusionResolver
from dtsbundle.io.discovery import DeclarationDiscovery
from dtsbundle.io.fs_ops import OutputFileService
from dtsbundle.io.indent import detect_indent
from dtsbundle.io.readers import DeclarationReader
from dtsbundle.logging.helpers import get_logger, get_trace_logger, set_trace_enabled
from dtsbundle.parsing.file_parser import DeclarationFileParser, ParseContext
from dtsbundle.processing.naming import NamingContext
from dtsbundle.processing.rewriter import IdentifierRewriter
from dtsbundle.rendering.assembler import OutputAssembler
from dtsbundle.runtime.config import merge_options, resolve_options


def _package_version() -> str:
    from dtsbundle import __version__

    return __version__


class Bundler:
    """Run the whole pipeline for one set of settings.

    discover -> parse (graph closure) -> export index -> inclusion ->
    rewrite -> assemble -> write (-> remove sources)

    Every collaborator touching the filesystem can be injected; nothing is
    cached between runs.
    """

    def __init__(
        self,
        settings: BundleSettings,
        *,
        discovery: Optional[DiscoveryProtocol] = None,
        reader: Optional[DeclarationReader] = None,
        indent_detector: IndentDetectorProtocol = detect_indent,
        fs: Optional[OutputFileServiceProtocol] = None,
        logger: Optional[logging.Logger] = None,
        trace: Optional[logging.Logger] = None,
    ) -> None:
        self._s = settings
        self._log = logger or get_logger('bundler')
        self._trace = trace or get_trace_logger()
        self._discovery = discovery or DeclarationDiscovery(logger=self._log)
        self._reader = reader or DeclarationReader(logger=self._log)
        self._detect_indent = indent_detector
        self._fs = fs or OutputFileService(logger=self._trace)
        self.naming = NamingContext(
            base_dir=settings.base_dir,
            main_file=settings.main_file,
            export_name=settings.export_name,
            prefix=settings.prefix,
            separator=settings.separator,
        )

    def _log_settings(self) -> None:
        s, t = self._s, self._trace
        t.debug('### settings ###')
        t.debug('main:         %s', s.main_file)
        t.debug('name:         %s', s.export_name)
        t.debug('out:          %s', s.out_file)
        t.debug('baseDir:      %s', s.base_dir)
        t.debug('externals:    %s', 'yes' if s.externals else 'no')
        t.debug('exclude:      %s', s.exclude_repr or None)
        t.debug('removeSource: %s', 'yes' if s.remove_source else 'no')
        t.debug('comments:     %s', 'yes' if s.comments else 'no')

    def build(self, report: Optional[BundleReport] = None) -> str:
        """Compute the bundle text without writing anything."""
        s = self._s
        report = report if report is not None else BundleReport()
        report.main_file = s.main_file
        report.out_file = s.out_file
        self._log_settings()

        self._trace.debug('\n### find typings ###')
        with StageTimer(report, 'discover'):
            report.source_typings = self._discovery.gather_files(s.base_dir)
        self._trace.debug('source typings (will be included in output if actually used)')
        for file in report.source_typings:
            self._trace.debug(' - %s ', file)

        parser = DeclarationFileParser(
            ParseContext(
                naming=self.naming,
                source_files=frozenset(report.source_typings),
                default_indent=s.indent,
                externals=s.externals,
                comments=s.comments,
            ),
            reader=self._reader,
            indent_detector=self._detect_indent,
            logger=self._trace,
        )
        with StageTimer(report, 'parse'):
            file_map: FileMap = build_file_map(s.main_file, parser, logger=self._trace)
        report.external_typings = list(parser.external_typings)

        with StageTimer(report, 'exports'):
            exports = ExportIndex.build(file_map, logger=self._trace)

        with StageTimer(report, 'inclusion'):
            inclusion: InclusionResult = InclusionResolver(
                file_map=file_map,
                export_index=exports,
                base_dir=s.base_dir,
                is_excluded=s.is_excluded,
                externals=s.externals,
                logger=self._trace,
            ).resolve(file_map[s.main_file])
        report.used_typings = [p.file for p in inclusion.used]
        report.excluded_typings = list(inclusion.excluded)
        report.external_dependencies = list(inclusion.external_dependencies)

        with StageTimer(report, 'rewrite'):
            IdentifierRewriter(self.naming, logger=self._trace).rewrite(inclusion.used)

        with StageTimer(report, 'assemble'):
            assembler = OutputAssembler(
                base_dir=s.base_dir,
                newline=s.newline,
                indent=s.indent,
                version=_package_version(),
                logger=self._trace,
            )
            return assembler.assemble(inclusion.used, inclusion.external_dependencies)

    def run(self) -> BundleReport:
        """Build the bundle, write it once, then optionally remove the sources."""
        s = self._s
        report = BundleReport()
        content = self.build(report)

        self._trace.debug('\n### write output ###')
        self._trace.debug(s.out_file)
        with StageTimer(report, 'write'):
            self._fs.write_output(s.out_file, content)
        report.bytes_written = len(content.encode('utf-8'))

        if s.remove_source:
            self._trace.debug('\n### remove source typings ###')
            report.removed_sources = self._fs.remove_source_typings(report.source_typings, s.out_file)

        report.finish()
        if s.verbose:
            report.log_statistics(self._trace)
        self._trace.debug('\n### done ###\n')
        self._log.info('✔ wrote %s (%d module(s))', s.out_file, len(report.used_typings))
        return report


def bundle(options: Union[BundleOptions, Mapping[str, Any]], **overrides: Any) -> BundleReport:
    """Bundle declaration files according to *options* and write the output.

    Args:
        options: A BundleOptions instance or a mapping of its field names.
        **overrides: Field values applied on top of *options*.

    Returns:
        The run report.

    Raises:
        BundleConfigError: Invalid or missing options.
        GraphIntegrityError: Unresolvable references, duplicate ambient
            module names or malformed declarations.
    """
    if isinstance(options, BundleOptions):
        base = {f.name: getattr(options, f.name) for f in fields(options)}
    else:
        base = dict(options)
    opts = merge_options(base, overrides)
    settings = resolve_options(opts)
    set_trace_enabled(settings.verbose)
    return Bundler(settings).run()
