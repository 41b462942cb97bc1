from __future__ import annotations

from pathlib import Path
from typing import Optional


class BundleError(ValueError):
    """Base class for every fatal bundling condition."""


class BundleConfigError(BundleError):
    """Raised when options are missing or invalid, before any traversal."""


class GraphIntegrityError(BundleError):
    """Raised when the declaration graph cannot be resolved consistently."""


class DuplicateExportError(GraphIntegrityError):
    """Raised when two files declare the same ambient module name."""

    def __init__(self, name: str, first: Path, second: Path) -> None:
        super().__init__(f'already got export for: {name} ({first} and {second})')
        self.name = name
        self.first = first
        self.second = second


class MalformedDeclarationError(GraphIntegrityError):
    """Raised when a declaration line cannot be parsed (e.g. empty module name)."""

    def __init__(self, message: str, *, file: Optional[Path] = None, line: Optional[int] = None) -> None:
        where = ''
        if file is not None:
            where = f' at {file}' + (f':{line}' if line is not None else '')
        super().__init__(f'{message}{where}')
        self.file = file
        self.line = line
