import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT / "src"))


def test_can_import_all_protocols():
    # Import must succeed and expose the expected names
    import dtsbundle.core.interfaces as I

    assert hasattr(I, "DiscoveryProtocol")
    assert hasattr(I, "IndentDetectorProtocol")
    assert hasattr(I, "OutputFileServiceProtocol")


def test_default_collaborators_satisfy_protocols():
    import dtsbundle.core.interfaces as I
    from dtsbundle.io.discovery import DeclarationDiscovery
    from dtsbundle.io.fs_ops import OutputFileService
    from dtsbundle.io.indent import detect_indent

    assert isinstance(DeclarationDiscovery(), I.DiscoveryProtocol)
    assert isinstance(OutputFileService(), I.OutputFileServiceProtocol)
    assert isinstance(detect_indent, I.IndentDetectorProtocol)


def test_public_package_surface():
    import dtsbundle

    for name in dtsbundle.__all__:
        assert hasattr(dtsbundle, name), name
    assert dtsbundle.BANNER_PREFIX == "// Generated by dtsbundle v"
    assert issubclass(dtsbundle.DuplicateExportError, dtsbundle.GraphIntegrityError)
    assert issubclass(dtsbundle.BundleError, ValueError)


def test_logger_factory_scopes_names():
    from dtsbundle.logging.helpers import get_logger, get_trace_logger

    assert get_logger().name == "dtsbundle"
    assert get_logger("graph").name == "dtsbundle.graph"
    assert get_logger("dtsbundle.io").name == "dtsbundle.io"
    assert get_trace_logger().name == "dtsbundle.trace"


def test_json_formatter_fields():
    import json

    from dtsbundle.logging.helpers import JsonLogFormatter

    record = logging.LogRecord("dtsbundle.x", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    payload = json.loads(JsonLogFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["module"] == "dtsbundle.x"
    assert payload["msg"] == "hello world"
    assert set(payload) >= {"ts", "version"}
