from __future__ import annotations

"""
Utilities for dynamic imports.

Used to load user-supplied exclude predicates given as
"module.path:attr" (or "module.path:Class.attr") references, from the
command line (`--exclude-ref`) or from a config file (`excludeRef`).

Public API:
    - load_object_from_ref(ref): object
"""

import importlib
from typing import Any


def load_object_from_ref(ref: str) -> Any:
    """Load an attribute from a module given a 'module:attr' reference.

    Args:
        ref: Reference in the form 'module.path:AttrName' where AttrName may
            itself be dotted.

    Returns:
        The attribute resolved from the given module.

    Raises:
        ImportError: If the reference is malformed or cannot be resolved.
    """
    module_name, sep, obj_path = (ref or '').partition(':')
    if not module_name or not sep or not obj_path:
        raise ImportError(f"Invalid reference '{ref}'. Expected 'module.path:AttrName'.")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ImportError(f"Failed to import module '{module_name}': {exc}") from exc
    for part in obj_path.split('.'):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ImportError(f"'{module_name}' has no attribute '{obj_path}': {exc}") from exc
    return obj
