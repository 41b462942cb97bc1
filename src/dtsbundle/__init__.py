from __future__ import annotations

from dtsbundle.constants import BANNER_PREFIX, DTS_SUFFIX

__version__ = '0.1.0'

from dtsbundle.core.errors import (  # noqa: E402
    BundleConfigError,
    BundleError,
    DuplicateExportError,
    GraphIntegrityError,
    MalformedDeclarationError,
)
from dtsbundle.core.models import BundleOptions, BundleSettings  # noqa: E402
from dtsbundle.core.report import BundleReport  # noqa: E402
from dtsbundle.runtime.bundler import Bundler, bundle  # noqa: E402
from dtsbundle.cli import DtsBundle  # noqa: E402

__all__ = [
    'BANNER_PREFIX',
    'DTS_SUFFIX',
    'BundleConfigError',
    'BundleError',
    'BundleOptions',
    'BundleReport',
    'BundleSettings',
    'Bundler',
    'DtsBundle',
    'DuplicateExportError',
    'GraphIntegrityError',
    'MalformedDeclarationError',
    'bundle',
]
