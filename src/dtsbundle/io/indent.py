from __future__ import annotations

"""Indentation detection for declaration files.

The detector looks at the change of leading whitespace between consecutive
non-blank lines and returns the most frequent step as the file's indent
unit. Doc-comment body lines (` * ...`) are skipped because their one-space
offset says nothing about the indent style.
"""

from collections import Counter
from typing import Iterable


def _leading(line: str) -> str:
    stripped = line.lstrip('\t ')
    return line[: len(line) - len(stripped)]


def detect_indent(text: str) -> str:
    """Return the dominant indentation unit of *text*, or '' when none is found."""
    return detect_indent_lines(text.splitlines())


def detect_indent_lines(lines: Iterable[str]) -> str:
    tab_lines = 0
    space_lines = 0
    steps: Counter = Counter()
    previous = 0

    for line in lines:
        stripped = line.lstrip('\t ')
        if not stripped or stripped.startswith('*'):
            continue
        indent = _leading(line)
        if indent.startswith('\t'):
            tab_lines += 1
            continue
        if indent:
            space_lines += 1
        width = len(indent)
        step = abs(width - previous)
        previous = width
        if step:
            steps[step] += 1

    if tab_lines > space_lines:
        return '\t'
    if not steps:
        return ''
    if len(steps) > 1:
        steps.pop(1, None)
    best = max(steps.items(), key=lambda kv: (kv[1], -kv[0]))[0]
    return ' ' * best
