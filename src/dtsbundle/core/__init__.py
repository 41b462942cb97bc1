from __future__ import annotations

"""Public surface for dtsbundle.core.

Data model, error hierarchy and run report in one stable import location:

    from dtsbundle.core import BundleOptions, FileParseResult, BundleError, ...
"""

from dtsbundle.core.errors import (
    BundleConfigError,
    BundleError,
    DuplicateExportError,
    GraphIntegrityError,
    MalformedDeclarationError,
)
from dtsbundle.core.models import (
    BundleOptions,
    BundleSettings,
    FileMap,
    FileParseResult,
    InclusionResult,
    LineRecord,
    RewriteKind,
    SpecifierCapture,
)
from dtsbundle.core.report import BundleReport, StageTimer

__all__ = [
    # Errors
    "BundleError",
    "BundleConfigError",
    "GraphIntegrityError",
    "DuplicateExportError",
    "MalformedDeclarationError",
    # Models
    "BundleOptions",
    "BundleSettings",
    "FileMap",
    "FileParseResult",
    "InclusionResult",
    "LineRecord",
    "RewriteKind",
    "SpecifierCapture",
    # Report
    "BundleReport",
    "StageTimer",
]
