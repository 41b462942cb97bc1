"""
dtsbundle.utils – Small shared utilities (path handling, dynamic imports).
"""
from .imports import load_object_from_ref
from .paths import absolute, is_hidden_path, relative_posix

__all__ = ["absolute", "is_hidden_path", "load_object_from_ref", "relative_posix"]
