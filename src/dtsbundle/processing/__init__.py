"""Public API surface for dtsbundle.processing."""
__all__ = [
    "naming",
    "rewriter",
]
