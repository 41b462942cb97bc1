"""
patterns – Centralized line-level regex rules for declaration files.

This module is the single source of truth for every pattern the scanner,
the file parser and the rewriter rely on:
  • Comment shapes (block open/close, line comments, doc comments)
  • Reference directives
  • Import statements (require-style and ES-style)
  • Ambient module headers
  • Visibility modifiers and redundant `declare` qualifiers
  • Module specifier / identifier shapes
"""

import re
from typing import Optional, Pattern

BOM_RE: Pattern[str] = re.compile('^\ufeff')
LINE_SPLIT_RE: Pattern[str] = re.compile(r'\r?\n')

BLOCK_CLOSE_RE: Pattern[str] = re.compile(r'^[ \t()=*]*\*+/')
BLOCK_OPEN_RE: Pattern[str] = re.compile(r'^[ \t]*/\*')
BLOCK_INLINE_CLOSE_RE: Pattern[str] = re.compile(r'\*/')
DOC_OPEN_RE: Pattern[str] = re.compile(r'^[ \t]*/\*\*')
DOC_BODY_RE: Pattern[str] = re.compile(r'^([ \t]*)(\*.*)')
BLANK_RE: Pattern[str] = re.compile(r'^\s*$')
TRIPLE_SLASH_RE: Pattern[str] = re.compile(r'^///')
LINE_COMMENT_RE: Pattern[str] = re.compile(r'^//')

REFERENCE_RE: Pattern[str] = re.compile(
    r'^[ \t]*///[ \t]*<reference[ \t]+path=(["\'])(.*?)\1?[ \t]*/>.*$'
)

# import foo = require('foo');
IMPORT_REQUIRE_RE: Pattern[str] = re.compile(
    r'^([ \t]*(?:export )?(?:import .+? )= require\()([\'"])(.+?)(\2\);.*)$'
)
# import {a, b} from 'foo';  export * from './bar';
IMPORT_ES_RE: Pattern[str] = re.compile(
    r'^([ \t]*(?:export|import) ?(?:(?:\* (?:as [^ ,]+)?)|.*)?,? ?(?:[^ ,]+ ?,?)'
    r'(?:\{(?:[^ ,]+ ?,?)*\})? ?from )([\'"])([^ ,]+)(\2;.*)$'
)

AMBIENT_MODULE_RE: Pattern[str] = re.compile(
    r'^([ \t]*declare module )([\'"])(.+?)(\2[ \t]*{?.*)$'
)
# Looser header shape used to report empty names instead of silently
# treating them as content.
AMBIENT_MODULE_EMPTY_RE: Pattern[str] = re.compile(r'^[ \t]*declare module ([\'"])\1')

PRIVATE_RE: Pattern[str] = re.compile(r'^[ \t]*(?:static )?private (?:static )?')
PUBLIC_RE: Pattern[str] = re.compile(r'^([ \t]*)(static |)(public |)(static |)(.*)', re.S)
DECLARE_RE: Pattern[str] = re.compile(r'^(export )?declare ')

FILE_SPECIFIER_RE: Pattern[str] = re.compile(r'^([./].*|.:.*)$', re.S)
IDENTIFIER_RE: Pattern[str] = re.compile(r'^\w+(?:[.-]\w+)*$')


def extract_reference(line: str) -> Optional[str]:
    """Return the path carried by a `/// <reference path=...>` line, if any."""
    m = REFERENCE_RE.match(line)
    return m.group(2) if m else None


def is_file_specifier(specifier: str) -> bool:
    """True for specifiers starting with '.', '/' or a drive letter."""
    return bool(FILE_SPECIFIER_RE.match(specifier))


def is_identifier(name: str) -> bool:
    return bool(IDENTIFIER_RE.match(name))
