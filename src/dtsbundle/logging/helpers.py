from __future__ import annotations

"""Logger names, base configuration and the verbose trace channel.

Contents:
    - JsonLogFormatter: one JSON object per record, for machine-readable runs.
    - setup_base_logger: configures the 'dtsbundle' logger once.
    - get_logger: returns 'dtsbundle.<name>' loggers.
    - get_trace_logger / set_trace_enabled: the 'dtsbundle.trace' channel
      that prints settings, pipeline steps and final statistics in verbose
      mode. It is switched between DEBUG and WARNING and never touches the
      level of other loggers.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

BASE_LOGGER = "dtsbundle"
TRACE_LOGGER = "dtsbundle.trace"


class JsonLogFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    Keys: `ts` (UTC, milliseconds), `level`, `module` (logger name), `msg`,
    `version`; `trace` is set for records of the trace channel, `ctx` when
    the record carries a `context` dict and `exc` when it carries exception
    info.
    """

    def __init__(self) -> None:
        super().__init__()
        self._version = _package_version()

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "ts": stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
            "version": self._version,
        }
        if record.name == TRACE_LOGGER:
            payload["trace"] = True
        context = getattr(record, "context", None)
        if isinstance(context, dict) and context:
            payload["ctx"] = context
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _package_version() -> str:
    # imported lazily: the package __init__ imports this module indirectly
    try:
        from dtsbundle import __version__
    except ImportError:
        return os.getenv("DTSBUNDLE_VERSION", "unknown")
    return str(__version__)


def setup_base_logger(
    *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Configure the 'dtsbundle' logger and return it.

    The first call installs a stream handler (stderr unless *stream* is
    given). Later calls only update the level and switch the formatter
    between JSON and the plain `LEVEL: message` layout.
    """
    base = logging.getLogger(BASE_LOGGER)
    base.setLevel(level)
    base.propagate = False
    if not base.handlers:
        import sys as _sys

        base.addHandler(logging.StreamHandler(stream or _sys.stderr))
    for handler in base.handlers:
        handler.setFormatter(JsonLogFormatter() if json_logs else logging.Formatter("%(levelname)s: %(message)s"))
    return base


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a namespaced logger under 'dtsbundle'."""
    if not name or name == BASE_LOGGER:
        return logging.getLogger(BASE_LOGGER)
    if name.startswith(BASE_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{BASE_LOGGER}.{name}")


def get_trace_logger() -> logging.Logger:
    """Return the verbose trace channel."""
    return logging.getLogger(TRACE_LOGGER)


def set_trace_enabled(enabled: bool, *, stream: Optional[TextIO] = None) -> logging.Logger:
    """Switch the trace channel on (DEBUG) or off (WARNING) and return it.

    The trace logger owns its handler and does not propagate, so trace lines
    are printed bare (no level prefix) unless the base logger is in JSON mode.
    """
    trace = get_trace_logger()
    trace.setLevel(logging.DEBUG if enabled else logging.WARNING)
    trace.propagate = False
    if enabled and not trace.handlers:
        import sys as _sys

        handler = logging.StreamHandler(stream or _sys.stderr)
        base = logging.getLogger(BASE_LOGGER)
        json_mode = any(isinstance(h.formatter, JsonLogFormatter) for h in base.handlers)
        handler.setFormatter(JsonLogFormatter() if json_mode else logging.Formatter("%(message)s"))
        trace.addHandler(handler)
    return trace
