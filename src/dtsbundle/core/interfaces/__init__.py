from .fs import DiscoveryProtocol, IndentDetectorProtocol, OutputFileServiceProtocol

__all__ = [
    'DiscoveryProtocol',
    'IndentDetectorProtocol',
    'OutputFileServiceProtocol',
]
