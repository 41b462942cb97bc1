from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

# Declaration file suffix; the only one the bundler recognises.
DTS_SUFFIX: str = '.d.ts'

# First line of every generated bundle. Tests import it as `dtsbundle.BANNER_PREFIX`.
BANNER_PREFIX: str = '// Generated by dtsbundle v'

DEPENDENCIES_HEADER: str = '// Dependencies for this module:'
DEPENDENCY_ITEM_PREFIX: str = '//   '

DEFAULT_INDENT: str = '    '
DEFAULT_PREFIX: str = '__'
DEFAULT_SEPARATOR: str = '/'

NEWLINE_ALIASES = {
    'lf': '\n',
    'crlf': '\r\n',
    'cr': '\r',
}
