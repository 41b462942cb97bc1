# dtsbundle/parsing/parser.py
from __future__ import annotations

import argparse

from dtsbundle.constants import NEWLINE_ALIASES


def _build_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser.

    Notes:
        - Option defaults are left as None so that config-file values are
          only overridden by flags the user actually passed.
        - Help texts describe the bundler's effective defaults.
    """
    p = argparse.ArgumentParser(
        prog="dtsbundle",
        formatter_class=argparse.RawTextHelpFormatter,
        usage="%(prog)s [MAIN NAME] [OPTIONS]",
        description=(
            "dtsbundle – merge a tree of TypeScript declaration files into one\n"
            "self-contained .d.ts file rooted at MAIN and exported as NAME."
        ),
    )

    g_in = p.add_argument_group("Input")
    g_out = p.add_argument_group("Output")
    g_name = p.add_argument_group("Naming")
    g_flt = p.add_argument_group("Filtering")
    g_misc = p.add_argument_group("Miscellaneous")

    # -----------------------
    # Input
    # -----------------------
    g_in.add_argument(
        "main",
        nargs="?",
        metavar="MAIN",
        help="Entry declaration file (e.g. build/index.d.ts).",
    )
    g_in.add_argument(
        "name",
        nargs="?",
        metavar="NAME",
        help="Module name the bundle is exported as (e.g. my-lib).",
    )
    g_in.add_argument(
        "-b",
        "--base-dir",
        metavar="DIR",
        dest="base_dir",
        help=(
            "Project root. Every *.d.ts below it is project-owned and gets wrapped "
            "in its own module block. Defaults to the directory of MAIN."
        ),
    )
    g_in.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        dest="config",
        help=(
            "JSON file with options in camelCase (main, name, baseDir, out, newline, "
            "indent, prefix, separator, externals, exclude, excludeRef, removeSource, "
            "comments, verbose). Command line flags win over file values."
        ),
    )

    # -----------------------
    # Output
    # -----------------------
    g_out.add_argument(
        "-o",
        "--out",
        metavar="FILE",
        dest="out",
        help="Output file, relative to the base directory. Defaults to NAME.d.ts.",
    )
    g_out.add_argument(
        "--newline",
        choices=sorted([*NEWLINE_ALIASES, "native"]),
        dest="newline",
        help="Line terminator of the output (default: native).",
    )
    g_out.add_argument(
        "--indent",
        metavar="STR",
        dest="indent",
        help="Indentation unit of the output (default: four spaces). Use '\\t' for tabs.",
    )
    g_out.add_argument(
        "--comments",
        action="store_true",
        default=None,
        dest="comments",
        help="Keep plain comments. Doc comments (/** */) are always kept.",
    )
    g_out.add_argument(
        "--remove-source",
        action="store_true",
        default=None,
        dest="remove_source",
        help="Delete the project's declaration files after writing the bundle.",
    )

    # -----------------------
    # Naming
    # -----------------------
    g_name.add_argument(
        "--prefix",
        metavar="STR",
        dest="prefix",
        help="Prefix of internal module identifiers (default: '__').",
    )
    g_name.add_argument(
        "--separator",
        metavar="STR",
        dest="separator",
        help="Path separator inside module identifiers (default: '/').",
    )

    # -----------------------
    # Filtering
    # -----------------------
    g_flt.add_argument(
        "--externals",
        action="store_true",
        default=None,
        dest="externals",
        help=(
            "Inline external modules declared by discovered files instead of "
            "listing them as dependencies in the header."
        ),
    )
    g_flt.add_argument(
        "-x",
        "--exclude",
        metavar="REGEX",
        dest="exclude",
        help="Exclude files whose base-relative path matches REGEX.",
    )
    g_flt.add_argument(
        "--exclude-ref",
        metavar="module:callable",
        dest="exclude_ref",
        help="Exclude predicate called as f(relative_path, is_external) -> bool.",
    )

    # -----------------------
    # Miscellaneous
    # -----------------------
    g_misc.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        dest="verbose",
        help="Trace every step and print statistics at the end.",
    )
    g_misc.add_argument(
        "--json-logs",
        action="store_true",
        dest="json_logs",
        help="Emit logs as JSON lines (also DTSBUNDLE_JSON_LOGS=1).",
    )
    g_misc.add_argument(
        "--report",
        metavar="FILE",
        dest="report",
        help="Write the run report as JSON to FILE.",
    )
    return p
