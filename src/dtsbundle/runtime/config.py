"""Configuration loading, layering and validation.

Precedence (lowest to highest):

    1. built-in defaults (BundleOptions field defaults)
    2. a JSON config file (`--config FILE`), camelCase keys
    3. command line flags

`resolve_options` turns the user-facing BundleOptions into the validated,
absolute-path BundleSettings consumed by the pipeline. Every problem is a
BundleConfigError raised before any file is parsed.
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dtsbundle.constants import DTS_SUFFIX, NEWLINE_ALIASES
from dtsbundle.core.errors import BundleConfigError
from dtsbundle.core.models import (
    BundleOptions,
    BundleSettings,
    ExcludePredicate,
    ExcludeSpec,
    never_excluded,
    regex_predicate,
)
from dtsbundle.utils.imports import load_object_from_ref
from dtsbundle.utils.paths import absolute

# config-file key -> BundleOptions field
CONFIG_KEYS: Dict[str, str] = {
    "main": "main",
    "name": "name",
    "baseDir": "base_dir",
    "out": "out",
    "newline": "newline",
    "indent": "indent",
    "prefix": "prefix",
    "separator": "separator",
    "externals": "externals",
    "exclude": "exclude",
    "removeSource": "remove_source",
    "comments": "comments",
    "verbose": "verbose",
}
_BOOL_FIELDS = {"externals", "remove_source", "comments", "verbose"}


def load_config_file(path: Path) -> Dict[str, Any]:
    """Load a JSON config file and map its keys onto BundleOptions field names.

    `excludeRef` ('module.path:callable') is resolved here into a callable.
    """
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError as exc:
        raise BundleConfigError(f"config file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise BundleConfigError(f"config file {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise BundleConfigError(f"config file {path} must contain a JSON object.")

    out: Dict[str, Any] = {}
    for key, value in payload.items():
        if key == "excludeRef":
            continue
        field_name = CONFIG_KEYS.get(key)
        if field_name is None:
            raise BundleConfigError(f"unknown config key '{key}' in {path}")
        if field_name in _BOOL_FIELDS and not isinstance(value, bool):
            raise BundleConfigError(f"config key '{key}' must be a boolean.")
        if field_name == "newline":
            value = resolve_newline(value)
        out[field_name] = value
    if "excludeRef" in payload:
        out["exclude"] = load_exclude_ref(payload["excludeRef"])
    return out


def resolve_newline(value: Any) -> Any:
    """Map the aliases lf, crlf, cr and native onto line terminators; pass anything else through."""
    if value == "native":
        return os.linesep
    if isinstance(value, str) and value in NEWLINE_ALIASES:
        return NEWLINE_ALIASES[value]
    return value


def load_exclude_ref(ref: Any) -> ExcludePredicate:
    if not isinstance(ref, str):
        raise BundleConfigError("exclude reference must be a 'module.path:callable' string.")
    try:
        obj = load_object_from_ref(ref)
    except ImportError as exc:
        raise BundleConfigError(str(exc)) from exc
    if not callable(obj):
        raise BundleConfigError(f"exclude reference '{ref}' is not callable.")
    return obj


def merge_options(*layers: Mapping[str, Any]) -> BundleOptions:
    """Merge option layers (later wins) into a BundleOptions.

    `None` values never override a lower layer.
    """
    known = {f.name for f in fields(BundleOptions)}
    merged: Dict[str, Any] = {}
    for layer in layers:
        for key, value in layer.items():
            if key not in known:
                raise BundleConfigError(f"unknown option '{key}'")
            if value is not None:
                merged[key] = value
    main = merged.pop("main", None)
    name = merged.pop("name", None)
    return replace(BundleOptions(main=main or "", name=name or ""), **merged)


def build_exclude_predicate(spec: ExcludeSpec) -> ExcludePredicate:
    if spec is None or spec == "":
        return never_excluded
    if isinstance(spec, (str, re.Pattern)):
        try:
            return regex_predicate(spec)
        except re.error as exc:
            raise BundleConfigError(f'option "exclude" is not a valid regex: {exc}') from exc
    if callable(spec):
        return spec
    raise BundleConfigError('option "exclude" must be a callable, a regex or a pattern string')


def _describe_exclude(spec: ExcludeSpec) -> str:
    if spec is None:
        return ""
    if isinstance(spec, str):
        return spec
    return getattr(spec, "pattern", None) or getattr(spec, "__qualname__", None) or repr(spec)


def resolve_options(options: BundleOptions, *, cwd: Optional[Path] = None) -> BundleSettings:
    """Validate *options* and resolve every path to an absolute one."""
    if not options.main:
        raise BundleConfigError('option "main" must be defined')
    if not options.name:
        raise BundleConfigError('option "name" must be defined')

    newline = os.linesep if options.newline is None else options.newline
    if not isinstance(newline, str):
        raise BundleConfigError('option "newline" must be a string')
    if not isinstance(options.indent, str):
        raise BundleConfigError('option "indent" must be a string')
    if not isinstance(options.prefix, str):
        raise BundleConfigError('option "prefix" must be a string')
    if not isinstance(options.separator, str) or not options.separator:
        raise BundleConfigError('option "separator" must have non-zero length')

    here = cwd or Path.cwd()
    main_file = absolute(options.main.replace("/", os.sep), base=here)
    base_dir = absolute(options.base_dir or os.path.dirname(options.main) or ".", base=here)
    out = options.out or f"{options.name}{DTS_SUFFIX}"
    out_file = absolute(out.replace("/", os.sep), base=base_dir)

    if not main_file.exists():
        raise BundleConfigError(f"main does not exist: {main_file}")

    exclude = options.exclude
    return BundleSettings(
        main_file=main_file,
        export_name=options.name,
        base_dir=base_dir,
        out_file=out_file,
        newline=newline,
        indent=options.indent,
        prefix=options.prefix,
        separator=options.separator,
        externals=bool(options.externals),
        is_excluded=build_exclude_predicate(exclude),
        remove_source=bool(options.remove_source),
        comments=bool(options.comments),
        verbose=bool(options.verbose),
        exclude_repr=_describe_exclude(exclude),
    )
