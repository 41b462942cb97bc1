from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional, Sequence

from dtsbundle.core.errors import BundleError
from dtsbundle.core.report import BundleReport
from dtsbundle.logging.factory import DefaultLoggerFactory
from dtsbundle.logging.helpers import get_logger
from dtsbundle.parsing.parser import _build_parser
from dtsbundle.runtime.bundler import bundle
from dtsbundle.runtime.config import load_config_file, load_exclude_ref, resolve_newline

logger = get_logger('cli')

# argparse dest -> BundleOptions field, for flags that map one-to-one
_OPTION_FLAGS = (
    'main',
    'name',
    'base_dir',
    'out',
    'indent',
    'prefix',
    'separator',
    'externals',
    'exclude',
    'remove_source',
    'comments',
    'verbose',
)


def _configure_logging(enable_json: bool, verbose: bool = False) -> None:
    """Configure process-wide logging once per mode, either JSON or plain text."""
    mode = (bool(enable_json), bool(verbose))
    if getattr(_configure_logging, '_configured_mode', None) == mode:
        return
    factory = DefaultLoggerFactory(json_logs=enable_json, level=logging.INFO, verbose=verbose)
    global logger
    logger = factory.get_logger('cli')
    setattr(_configure_logging, '_configured_mode', mode)


def _fatal(msg: str, code: int = 1) -> NoReturn:
    """Exit the process with a logged error."""
    logger.error(msg)
    sys.exit(code)


def _decode_escapes(value: Optional[str]) -> Optional[str]:
    """Turn the two-character sequences '\\t' and '\\n' typed on a shell into real characters."""
    if value is None:
        return None
    return value.replace('\\t', '\t').replace('\\n', '\n')


def _cli_layer(ns: argparse.Namespace) -> Dict[str, Any]:
    layer: Dict[str, Any] = {key: getattr(ns, key, None) for key in _OPTION_FLAGS}
    layer['indent'] = _decode_escapes(layer['indent'])
    layer['newline'] = resolve_newline(ns.newline)
    if ns.exclude_ref:
        if ns.exclude:
            _fatal('--exclude and --exclude-ref are mutually exclusive', 2)
        layer['exclude'] = load_exclude_ref(ns.exclude_ref)
    return layer


def _file_layer(ns: argparse.Namespace) -> Dict[str, Any]:
    if not ns.config:
        return {}
    return load_config_file(Path(ns.config))


def _write_report(report: BundleReport, target: str) -> None:
    path = Path(target)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report.to_json(), encoding='utf-8')
    logger.info('✔ report written to %s', path)


class DtsBundle:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(argv: Sequence[str]) -> BundleReport:
        """Run the bundler with an argv-like sequence and return the run report.

        Raises:
            BundleError: Any configuration or graph problem.
            SystemExit: Usage errors (code 2).
        """
        argv = list(argv)
        ns = _build_parser().parse_args(argv)
        json_logs = bool(ns.json_logs) or os.getenv('DTSBUNDLE_JSON_LOGS') == '1'
        _configure_logging(json_logs, bool(ns.verbose))

        layers = [_file_layer(ns), _cli_layer(ns)]
        merged: Dict[str, Any] = {}
        for layer in layers:
            merged.update({k: v for k, v in layer.items() if v is not None})
        if not merged.get('main') or not merged.get('name'):
            _fatal('MAIN and NAME are required (positionally or via --config)', 2)

        report = bundle(merged)
        if ns.report:
            _write_report(report, ns.report)
        return report


def main() -> NoReturn:
    """Entry point for the `dtsbundle` console script."""
    try:
        DtsBundle.run(sys.argv[1:])
        raise SystemExit(0)
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except BundleError as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('✘ %s', exc)
        raise SystemExit(1)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
