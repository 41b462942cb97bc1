from __future__ import annotations

import logging
from typing import Optional, TextIO

from dtsbundle.logging.helpers import get_logger, set_trace_enabled, setup_base_logger


class DefaultLoggerFactory:
    """Factory that configures and returns project-scoped loggers.

    Base configuration is delegated to `setup_base_logger`; the verbose
    trace channel is switched on when `verbose` is set.
    """

    def __init__(
        self,
        *,
        json_logs: bool = False,
        level: int = logging.INFO,
        verbose: bool = False,
        stream: Optional[TextIO] = None,
    ) -> None:
        self._json = bool(json_logs)
        self._level = int(level)
        self._verbose = bool(verbose)
        self._stream: Optional[TextIO] = stream
        self._configured = False

    def _ensure_config(self) -> None:
        if self._configured:
            return
        setup_base_logger(json_logs=self._json, level=self._level, stream=self._stream)
        set_trace_enabled(self._verbose, stream=self._stream)
        self._configured = True

    def get_logger(self, name: str) -> logging.Logger:
        self._ensure_config()
        return get_logger(name)
