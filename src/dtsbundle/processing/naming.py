from __future__ import annotations

"""
naming – Deterministic module identifiers for bundled declaration files.

Every project file ends up in its own ambient module block. The block name
is derived from the file path relative to the base directory:

    main file              -> <name>
    any other file         -> <prefix><name><sep><sanitized relative path>
    raw external reference -> <main raw name><sep><prefix><sep><reference>

Example (prefix '__', separator '/', name 'lib', main 'index.d.ts'):

    index.d.ts          -> lib
    sub/foo.d.ts        -> __lib/sub/foo
    ../shared/x.d.ts    -> __lib/--/shared/x
    module 'events'     -> __lib/index/__/events
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path

from dtsbundle.constants import DEFAULT_PREFIX, DEFAULT_SEPARATOR, DTS_SUFFIX

_SEP_RE = re.compile(r'[\\/]')


@dataclass(frozen=True)
class NamingContext:
    base_dir: Path
    main_file: Path
    export_name: str
    prefix: str = DEFAULT_PREFIX
    separator: str = DEFAULT_SEPARATOR

    def module_name(self, file: Path) -> str:
        """Path of *file* relative to the base directory, suffix removed."""
        stem = file.name[:-len(DTS_SUFFIX)] if file.name.endswith(DTS_SUFFIX) else file.name
        return os.path.relpath(str(file.parent / stem), str(self.base_dir))

    def export_name_for(self, file: Path) -> str:
        if file == self.main_file:
            return self.export_name
        return self.export_name_raw(file)

    def export_name_raw(self, file: Path) -> str:
        return f'{self.prefix}{self.export_name}{self.separator}{self.sanitize(self.module_name(file))}'

    def library_name(self, ref: str) -> str:
        """Namespace an external module name under the main file's identifier."""
        return f'{self.export_name_raw(self.main_file)}{self.separator}{self.prefix}{self.separator}{ref}'

    def sanitize(self, name: str) -> str:
        return _SEP_RE.sub(lambda _m: self.separator, name.replace('..', '--'))
