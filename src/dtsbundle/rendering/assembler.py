from __future__ import annotations

"""Output assembly: banner, dependency listing and module blocks."""

import logging
import re
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from dtsbundle.constants import BANNER_PREFIX, DEPENDENCIES_HEADER, DEPENDENCY_ITEM_PREFIX
from dtsbundle.core.models import FileParseResult
from dtsbundle.logging.helpers import get_trace_logger
from dtsbundle.utils.paths import relative_posix


def make_indenter(actual: str, use: str) -> Callable[[str], str]:
    """Return a function replacing leading runs of *actual* with *use*.

    Only the leading run is touched; occurrences further into the line are
    left alone.
    """
    if not actual or actual == use:
        return lambda text: text
    lead_rx = re.compile('^(?:' + re.escape(actual) + ')+')

    def _reindent(text: str) -> str:
        return lead_rx.sub(lambda m: use * (len(m.group(0)) // len(actual)), text)

    return _reindent


class OutputAssembler:
    """Concatenate used files into the final bundle text."""

    def __init__(
        self,
        *,
        base_dir: Path,
        newline: str,
        indent: str,
        version: str,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._base_dir = base_dir
        self._nl = newline
        self._indent = indent
        self._version = version
        self._trace = logger or get_trace_logger()

    def header(self, external_dependencies: Sequence[Path]) -> str:
        nl = self._nl
        content = f'{BANNER_PREFIX}{self._version}{nl}'
        if external_dependencies:
            content += DEPENDENCIES_HEADER + nl
            for file in external_dependencies:
                content += DEPENDENCY_ITEM_PREFIX + relative_posix(file, self._base_dir) + nl
        return content + nl

    def format_module(self, export_name: str, lines: List[str]) -> str:
        """Wrap *lines* in a `declare module '<export_name>' { ... }` block."""
        nl = self._nl
        body = nl.join(self._indent + ln if ln else ln for ln in lines)
        return f"declare module '{export_name}' {{{nl}{body}{nl}}}{nl}"

    def render_file(self, parse: FileParseResult) -> str:
        reindent = make_indenter(parse.indent_unit, self._indent)
        lines = [reindent(text) for text in parse.texts()]
        if parse.is_source:
            return self.format_module(parse.exported_name, lines)
        return self._nl.join(lines) + self._nl

    def assemble(self, used: Iterable[FileParseResult], external_dependencies: Sequence[Path] = ()) -> str:
        self._trace.debug('\n### build output ###')
        blocks = [self.render_file(parse) for parse in used]
        return self.header(external_dependencies) + self._nl.join(blocks) + self._nl
