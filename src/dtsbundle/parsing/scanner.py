from __future__ import annotations
"""Line scanner for declaration files.

The scanner is a small finite-state machine over physical lines. It keeps
three pieces of state:

    - NORMAL / IN_BLOCK_COMMENT: whether lines are being buffered as a
      block comment.
    - the block comment buffer itself.
    - the pending documentation comment: a flushed `/** ... */` block held
      back until the next content line claims it.

Each input line produces zero or more `LineEvent` items. The classification
precedence is fixed:

    block close > block open > inside block > blank > reference directive >
    line comment > private member > import > ambient module > content
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from dtsbundle.core.errors import MalformedDeclarationError
from dtsbundle.parsing import patterns as P


class LineKind(str, Enum):
    BLANK = 'blank'
    COMMENT = 'comment'
    DOC = 'doc'
    REFERENCE = 'reference'
    PRIVATE = 'private'
    IMPORT = 'import'
    AMBIENT = 'ambient'
    CONTENT = 'content'


class ScanState(str, Enum):
    NORMAL = 'normal'
    IN_BLOCK_COMMENT = 'in-block-comment'


@dataclass(frozen=True)
class LineEvent:
    kind: LineKind
    text: str
    lineno: int
    # (lead, quote, specifier, trail) for IMPORT / AMBIENT events
    spans: Optional[Tuple[str, str, str, str]] = None
    reference: Optional[str] = None

    @property
    def specifier(self) -> str:
        return self.spans[2] if self.spans else ''


class LineScanner:
    """Classify declaration lines one by one.

    Args:
        keep_comments: Emit plain (non-doc) comments instead of dropping them.
        strip_declare: Remove a leading `declare ` qualifier from content
            lines (project-owned files are re-wrapped later).
        source: Optional file path used in error messages.
    """

    def __init__(self, *, keep_comments: bool = False, strip_declare: bool = False, source: Optional[Path] = None) -> None:
        self._keep_comments = bool(keep_comments)
        self._strip_declare = bool(strip_declare)
        self._source = source
        self._state = ScanState.NORMAL
        self._buffer: List[Tuple[int, str]] = []
        self._pending_doc: Optional[List[Tuple[int, str]]] = None

    @property
    def state(self) -> ScanState:
        return self._state

    def scan(self, lines: Iterable[str]) -> Iterator[LineEvent]:
        for lineno, line in enumerate(lines, start=1):
            yield from self.feed(line, lineno)

    def feed(self, line: str, lineno: int = 0) -> Iterator[LineEvent]:
        """Classify one physical line and yield the resulting events."""
        if P.BLOCK_CLOSE_RE.match(line):
            self._buffer.append((lineno, line))
            yield from self._pop_block()
            return

        if P.BLOCK_OPEN_RE.match(line):
            self._buffer.append((lineno, line))
            if self._closes_on_same_line(line):
                yield from self._pop_block()
            else:
                self._state = ScanState.IN_BLOCK_COMMENT
            return

        if self._state is ScanState.IN_BLOCK_COMMENT:
            self._buffer.append((lineno, line))
            return

        if P.BLANK_RE.match(line):
            yield LineEvent(LineKind.BLANK, '', lineno)
            return

        if P.TRIPLE_SLASH_RE.match(line):
            ref = P.extract_reference(line)
            if ref:
                yield LineEvent(LineKind.REFERENCE, line, lineno, reference=ref)
                return

        if P.LINE_COMMENT_RE.match(line):
            if self._keep_comments:
                yield LineEvent(LineKind.COMMENT, line, lineno)
            return

        if P.PRIVATE_RE.match(line):
            self._pending_doc = None
            yield LineEvent(LineKind.PRIVATE, line, lineno)
            return

        yield from self._pop_doc()

        m = P.IMPORT_REQUIRE_RE.match(line) or P.IMPORT_ES_RE.match(line)
        if m:
            yield LineEvent(LineKind.IMPORT, line, lineno, spans=_spans(m))
            return

        m = P.AMBIENT_MODULE_RE.match(line)
        if m:
            yield LineEvent(LineKind.AMBIENT, line, lineno, spans=_spans(m))
            return
        if P.AMBIENT_MODULE_EMPTY_RE.match(line):
            raise MalformedDeclarationError('ambient module declared without a name', file=self._source, line=lineno)

        yield LineEvent(LineKind.CONTENT, self._clean_content(line), lineno)

    def _clean_content(self, line: str) -> str:
        m = P.PUBLIC_RE.match(line)
        if m:
            sp, static1, _pub, static2, rest = m.groups()
            line = sp + static1 + static2 + rest
        if self._strip_declare:
            line = P.DECLARE_RE.sub(r'\1', line, count=1)
        return line

    @staticmethod
    def _closes_on_same_line(line: str) -> bool:
        start = line.find('/*')
        return P.BLOCK_INLINE_CLOSE_RE.search(line, start + 2) is not None

    def _pop_block(self) -> Iterator[LineEvent]:
        buffered, self._buffer = self._buffer, []
        self._state = ScanState.NORMAL
        if not buffered:
            return
        if P.DOC_OPEN_RE.match(buffered[0][1]):
            self._pending_doc = buffered
        elif self._keep_comments:
            for lineno, text in buffered:
                yield LineEvent(LineKind.COMMENT, text, lineno)

    def _pop_doc(self) -> Iterator[LineEvent]:
        if not self._pending_doc:
            return
        doc, self._pending_doc = self._pending_doc, None
        for lineno, text in doc:
            m = P.DOC_BODY_RE.match(text)
            yield LineEvent(LineKind.DOC, f'{m.group(1)} {m.group(2)}' if m else text, lineno)


def _spans(m) -> Tuple[str, str, str, str]:
    return m.group(1), m.group(2), m.group(3), m.group(4)
