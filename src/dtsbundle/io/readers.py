from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from dtsbundle.core.errors import GraphIntegrityError
from dtsbundle.parsing import patterns as P


class DeclarationReader:
    """Read declaration files as normalized text.

    A leading byte-order mark and any trailing whitespace are removed, so
    the last physical line is never an empty artifact of the final newline.
    """

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or logging.getLogger('dtsbundle.readers')

    def read_text(self, path: Path) -> str:
        try:
            raw = path.read_text(encoding='utf-8')
        except FileNotFoundError as exc:
            raise GraphIntegrityError(f'declaration file not found: {path}') from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise GraphIntegrityError(f'could not read {path} ({exc})') from exc
        return normalize_text(raw)


def normalize_text(raw: str) -> str:
    return P.BOM_RE.sub('', raw).rstrip()


def split_lines(code: str) -> List[str]:
    return P.LINE_SPLIT_RE.split(code)


def read_declaration(path: Path) -> str:
    """Functional wrapper around DeclarationReader.read_text."""
    return DeclarationReader().read_text(path)
