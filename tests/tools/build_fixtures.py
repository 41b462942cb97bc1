#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
build_fixtures – Writes the declaration trees used by the dtsbundle
test-suite.

Every builder takes a root directory and returns it, so tests can create
a fresh tree inside a TemporaryDirectory. Run as a script to materialize
all trees under ./test-fixtures for manual inspection.
"""
from __future__ import annotations

import shutil
import sys
import textwrap
from pathlib import Path
from typing import Callable, Dict

ROOT = (Path(__file__).resolve().parents[2] / "test-fixtures").resolve()


# ────────────────────────── helpers ──────────────────────────
def _write(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(body).lstrip("\n"), encoding="utf-8")
    return path


# ────────────────────────── trees ──────────────────────────
def build_relative(root: Path) -> Path:
    """Entry file importing a sibling through a relative require."""
    _write(root / "a.d.ts", """
        import b = require('./b');
        export declare function run(): b.Thing;
    """)
    _write(root / "b.d.ts", """
        export interface Thing {
            name: string;
        }
    """)
    return root


def build_ambient(root: Path) -> Path:
    """Entry importing './b', which also declares the ambient module 'foo'."""
    _write(root / "a.d.ts", """
        import b = require('./b');
        import foo = require('foo');
        export declare var value: foo.Shape;
    """)
    _write(root / "b.d.ts", """
        declare module "foo" {
            interface Shape {
                size: number;
            }
        }
        export declare var marker: string;
    """)
    return root


def build_external(root: Path) -> Path:
    """Entry importing the external package 'left-pad' declared in typings/."""
    _write(root / "index.d.ts", """
        /// <reference path="typings/left-pad.d.ts" />
        import pad = require('left-pad');
        export declare function format(s: string): string;
    """)
    _write(root / "typings" / "left-pad.d.ts", """
        declare module 'left-pad' {
            function pad(s: string, n: number): string;
            export = pad;
        }
    """)
    return root


def build_exclusion(root: Path) -> Path:
    """Entry importing one public and one internal file."""
    _write(root / "index.d.ts", """
        import api = require('./public/api');
        import secret = require('./internal/secret');
        export declare var version: string;
    """)
    _write(root / "public" / "api.d.ts", """
        export declare function call(): void;
    """)
    _write(root / "internal" / "secret.d.ts", """
        export declare var token: string;
    """)
    return root


def build_precedence(root: Path) -> Path:
    """'shared' is reached from the entry and, one level deeper, from 'mid'."""
    _write(root / "index.d.ts", """
        import shared = require('./lib/shared');
        import mid = require('./lib/mid');
        export declare var x: number;
    """)
    _write(root / "lib" / "mid.d.ts", """
        import shared = require('./shared');
        export declare var y: number;
    """)
    _write(root / "lib" / "shared.d.ts", """
        export declare var z: number;
    """)
    return root


def build_duplicate(root: Path) -> Path:
    """Two reachable files declaring the same ambient module name."""
    _write(root / "index.d.ts", """
        /// <reference path="one.d.ts" />
        /// <reference path="two.d.ts" />
        export declare var x: number;
    """)
    _write(root / "one.d.ts", """
        declare module 'dup' {
            var a: number;
        }
    """)
    _write(root / "two.d.ts", """
        declare module 'dup' {
            var b: number;
        }
    """)
    return root


def build_cycle(root: Path) -> Path:
    """Two files importing each other."""
    _write(root / "a.d.ts", """
        import b = require('./b');
        export declare var fromA: b.B;
    """)
    _write(root / "b.d.ts", """
        import a = require('./a');
        export interface B {
            other: typeof a.fromA;
        }
    """)
    return root


def build_comments(root: Path) -> Path:
    """Doc comments, block comments, line comments and private members."""
    _write(root / "index.d.ts", """
        // leading line comment
        /* plain block */
        /**
         * The widget.
         */
        export declare class Widget {
            private secret;
            public size: number;
            /** Inline doc. */
            render(): void;
        }
    """)
    return root


def build_tabs(root: Path) -> Path:
    """Entry importing a tab-indented file."""
    _write(root / "index.d.ts", """
        import t = require('./tabbed');
        export declare var v: t.T;
    """)
    (root / "tabbed.d.ts").write_text(
        "export interface T {\n\tinner: {\n\t\tdeep: number;\n\t};\n}\n",
        encoding="utf-8",
    )
    return root


def build_missing(root: Path) -> Path:
    """Entry referencing a file that does not exist."""
    _write(root / "index.d.ts", """
        /// <reference path="nowhere.d.ts" />
        export declare var x: number;
    """)
    return root


def build_empty_module(root: Path) -> Path:
    _write(root / "index.d.ts", """
        declare module '' {
            var x: number;
        }
    """)
    return root


BUILDERS: Dict[str, Callable[[Path], Path]] = {
    "relative": build_relative,
    "ambient": build_ambient,
    "external": build_external,
    "exclusion": build_exclusion,
    "precedence": build_precedence,
    "duplicate": build_duplicate,
    "cycle": build_cycle,
    "comments": build_comments,
    "tabs": build_tabs,
    "missing": build_missing,
    "empty_module": build_empty_module,
}


def main() -> None:
    if ROOT.exists():
        shutil.rmtree(ROOT)
    for name, builder in BUILDERS.items():
        builder(ROOT / name)
    print(f"✔ fixtures written to {ROOT}", file=sys.stderr)


if __name__ == "__main__":
    main()
