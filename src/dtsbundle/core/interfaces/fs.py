from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Protocol, runtime_checkable


@runtime_checkable
class DiscoveryProtocol(Protocol):
    """Return every declaration file under a base directory."""

    def gather_files(self, base_dir: Path) -> List[Path]:
        ...


@runtime_checkable
class IndentDetectorProtocol(Protocol):
    """Return the dominant indentation unit of a text, or '' when none."""

    def __call__(self, text: str) -> str:
        ...


@runtime_checkable
class OutputFileServiceProtocol(Protocol):
    def ensure_directory(self, path: Path) -> None:
        ...

    def write_output(self, path: Path, content: str) -> None:
        ...

    def remove_source_typings(self, sources: Iterable[Path], out_file: Path) -> List[Path]:
        ...
