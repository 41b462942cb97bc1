from __future__ import annotations

import logging
from typing import Iterable, Optional

from dtsbundle.core.models import FileParseResult, LineRecord, RewriteKind
from dtsbundle.logging.helpers import get_trace_logger
from dtsbundle.parsing.patterns import is_identifier
from dtsbundle.processing.naming import NamingContext


class IdentifierRewriter:
    """Give every bundled module a collision-free identifier.

    Replacements are always computed from the captured original specifier,
    never from a previous `modified` value, so applying the rewriter twice
    is the same as applying it once.
    """

    def __init__(self, naming: NamingContext, *, logger: Optional[logging.Logger] = None) -> None:
        self._naming = naming
        self._trace = logger or get_trace_logger()

    def rewrite(self, used: Iterable[FileParseResult]) -> None:
        self._trace.debug('\n### rewrite global external modules ###')
        for parse in used:
            self._trace.debug(parse.name)
            for line in parse.rewritable_lines():
                line.modified = self.rewrite_line(line)
                self._trace.debug(' - %s  ==>  %s', line.original, line.modified)

    def rewrite_line(self, line: LineRecord) -> str:
        cap = line.capture
        if cap is None:
            return line.original
        if cap.kind is RewriteKind.IMPORT and cap.target is not None:
            return cap.render(self._naming.export_name_for(cap.target))
        if is_identifier(cap.specifier):
            return cap.render(self._naming.library_name(cap.specifier))
        return line.original
