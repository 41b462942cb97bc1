from __future__ import annotations

import sys
import unittest
from pathlib import Path
from typing import Dict, List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT / "src"))

from dtsbundle.core.errors import DuplicateExportError, GraphIntegrityError  # noqa: E402
from dtsbundle.core.models import (  # noqa: E402
    FileParseResult,
    LineRecord,
    RewriteKind,
    SpecifierCapture,
    never_excluded,
    regex_predicate,
)
from dtsbundle.graph.builder import build_file_map  # noqa: E402
from dtsbundle.graph.exports import ExportIndex  # noqa: E402
from dtsbundle.graph.inclusion import resolve_inclusion  # noqa: E402
from dtsbundle.processing.naming import NamingContext  # noqa: E402
from dtsbundle.processing.rewriter import IdentifierRewriter  # noqa: E402
from dtsbundle.rendering.assembler import OutputAssembler, make_indenter  # noqa: E402

BASE = Path("/proj")
MAIN = BASE / "index.d.ts"


def _naming(**kwargs) -> NamingContext:
    return NamingContext(base_dir=BASE, main_file=MAIN, export_name="lib", **kwargs)


def _parse(path: Path, **kwargs) -> FileParseResult:
    naming = _naming()
    return FileParseResult(
        file=path,
        name=naming.module_name(path),
        indent_unit="    ",
        exported_name=naming.export_name_for(path),
        is_source=True,
        **kwargs,
    )


class NamingTests(unittest.TestCase):
    def test_module_and_export_names(self) -> None:
        naming = _naming()
        self.assertEqual(naming.module_name(MAIN), "index")
        self.assertEqual(naming.export_name_for(MAIN), "lib")
        self.assertEqual(naming.export_name_for(BASE / "sub" / "foo.d.ts"), "__lib/sub/foo")
        self.assertEqual(naming.export_name_raw(MAIN), "__lib/index")

    def test_parent_directory_segments_are_sanitized(self) -> None:
        naming = _naming()
        self.assertEqual(naming.export_name_for(Path("/shared/x.d.ts")), "__lib/--/shared/x")

    def test_library_name(self) -> None:
        self.assertEqual(_naming().library_name("events"), "__lib/index/__/events")

    def test_custom_prefix_and_separator(self) -> None:
        naming = _naming(prefix="_", separator=".")
        self.assertEqual(naming.export_name_for(BASE / "a" / "b.d.ts"), "_lib.a.b")
        self.assertEqual(naming.library_name("x"), "_lib.index._.x")
        self.assertEqual(naming.sanitize("a\\b/../c"), "a.b.--.c")


class RewriterTests(unittest.TestCase):
    def _file(self) -> FileParseResult:
        res = _parse(BASE / "sub" / "a.d.ts")
        rel = SpecifierCapture("import m = require(", "'", "./m", "');", RewriteKind.IMPORT, target=BASE / "sub" / "m.d.ts")
        ext = SpecifierCapture("import e = require(", "'", "events", "');", RewriteKind.IMPORT)
        scoped = SpecifierCapture("import s = require(", "'", "@scope/pkg", "');", RewriteKind.IMPORT)
        amb = SpecifierCapture("declare module ", '"', "events", '" {', RewriteKind.AMBIENT)
        res.append_line(LineRecord(original="import m = require('./m');", capture=rel), rewritable=RewriteKind.IMPORT)
        res.append_line(LineRecord(original="import e = require('events');", capture=ext), rewritable=RewriteKind.IMPORT)
        res.append_line(LineRecord(original="import s = require('@scope/pkg');", capture=scoped), rewritable=RewriteKind.IMPORT)
        res.append_line(LineRecord(original='declare module "events" {', capture=amb), rewritable=RewriteKind.AMBIENT)
        res.append_line(LineRecord(original="}"))
        return res

    def test_rewrites_relative_external_and_ambient(self) -> None:
        res = self._file()
        IdentifierRewriter(_naming()).rewrite([res])
        self.assertEqual(
            res.texts(),
            [
                "import m = require('__lib/sub/m');",
                "import e = require('__lib/index/__/events');",
                "import s = require('@scope/pkg');",
                'declare module "__lib/index/__/events" {',
                "}",
            ],
        )

    def test_rewriting_is_idempotent(self) -> None:
        res = self._file()
        rewriter = IdentifierRewriter(_naming())
        rewriter.rewrite([res])
        once = res.texts()
        rewriter.rewrite([res])
        self.assertEqual(res.texts(), once)

    def test_arena_slot_updated_in_place(self) -> None:
        res = self._file()
        IdentifierRewriter(_naming()).rewrite([res])
        idx = res.rewritable_ambient_lines[0]
        self.assertEqual(res.lines[idx].original, 'declare module "events" {')
        self.assertEqual(res.lines[idx].modified, 'declare module "__lib/index/__/events" {')


class GraphTests(unittest.TestCase):
    def _files(self) -> Dict[Path, FileParseResult]:
        a = _parse(MAIN, relative_imports=[BASE / "b.d.ts"], references=[BASE / "t.d.ts"], external_imports=["ext"])
        b = _parse(BASE / "b.d.ts", relative_imports=[MAIN, BASE / "c.d.ts"])
        c = _parse(BASE / "c.d.ts")
        t = _parse(BASE / "t.d.ts", ambient_exports=["ext"])
        return {p.file: p for p in (a, b, c, t)}

    def test_file_map_closure_parses_each_file_once(self) -> None:
        files = self._files()
        calls: List[Path] = []

        class _Parser:
            def parse(self, file: Path) -> FileParseResult:
                calls.append(file)
                return files[file]

        fmap = build_file_map(MAIN, _Parser())
        self.assertEqual(calls, [MAIN, BASE / "t.d.ts", BASE / "b.d.ts", BASE / "c.d.ts"])
        self.assertEqual(list(fmap), calls)

    def test_export_index(self) -> None:
        files = self._files()
        index = ExportIndex.build(files)
        self.assertIn("ext", index)
        self.assertEqual(len(index), 1)
        self.assertIs(index.owner_of("ext"), files[BASE / "t.d.ts"])
        self.assertIsNone(index.owner_of("missing"))
        with self.assertRaises(DuplicateExportError):
            index.add("ext", files[BASE / "c.d.ts"])

    def test_inclusion_defers_externals(self) -> None:
        files = self._files()
        result = resolve_inclusion(
            files[MAIN], files, ExportIndex.build(files), base_dir=BASE, is_excluded=never_excluded, externals=False
        )
        self.assertEqual([p.file for p in result.used], [MAIN, BASE / "b.d.ts", BASE / "c.d.ts"])
        self.assertEqual(result.external_dependencies, [BASE / "t.d.ts"])
        self.assertEqual(result.excluded, [])
        self.assertTrue(result.is_used(BASE / "c.d.ts"))

    def test_relative_edge_promotes_deferred_external(self) -> None:
        files = self._files()
        files[BASE / "c.d.ts"].relative_imports.append(BASE / "t.d.ts")
        result = resolve_inclusion(
            files[MAIN], files, ExportIndex.build(files), base_dir=BASE, is_excluded=never_excluded, externals=False
        )
        self.assertEqual(
            [p.file for p in result.used], [MAIN, BASE / "b.d.ts", BASE / "c.d.ts", BASE / "t.d.ts"]
        )
        self.assertEqual(result.external_dependencies, [])

    def test_inclusion_with_externals_and_regex_exclude(self) -> None:
        files = self._files()
        result = resolve_inclusion(
            files[MAIN], files, ExportIndex.build(files),
            base_dir=BASE, is_excluded=regex_predicate(r"^c\."), externals=True,
        )
        self.assertEqual([p.file for p in result.used], [MAIN, BASE / "t.d.ts", BASE / "b.d.ts"])
        self.assertEqual(result.excluded, [BASE / "c.d.ts"])

    def test_inclusion_requires_parsed_targets(self) -> None:
        files = self._files()
        del files[BASE / "c.d.ts"]
        with self.assertRaises(GraphIntegrityError):
            resolve_inclusion(
                files[MAIN], files, ExportIndex.build(files), base_dir=BASE, is_excluded=never_excluded, externals=False
            )


class AssemblerTests(unittest.TestCase):
    def test_make_indenter_touches_leading_run_only(self) -> None:
        reindent = make_indenter("  ", "\t")
        self.assertEqual(reindent("    x  y"), "\t\tx  y")
        self.assertEqual(reindent("   x"), "\t x")
        self.assertEqual(make_indenter("", "\t")("  x"), "  x")

    def test_format_module_skips_blank_lines(self) -> None:
        asm = OutputAssembler(base_dir=BASE, newline="\n", indent="  ", version="9.9.9")
        self.assertEqual(asm.format_module("m", ["a;", "", "b;"]), "declare module 'm' {\n  a;\n\n  b;\n}\n")

    def test_header_lists_dependencies(self) -> None:
        asm = OutputAssembler(base_dir=BASE, newline="\n", indent="  ", version="9.9.9")
        self.assertEqual(
            asm.header([BASE / "typings" / "x.d.ts"]),
            "// Generated by dtsbundle v9.9.9\n// Dependencies for this module:\n//   typings/x.d.ts\n\n",
        )

    def test_non_source_files_are_not_wrapped(self) -> None:
        asm = OutputAssembler(base_dir=BASE, newline="\n", indent="    ", version="1")
        ext = _parse(BASE / "ext.d.ts", lines=[LineRecord(original="declare var x;")])
        ext.is_source = False
        self.assertEqual(asm.render_file(ext), "declare var x;\n")


if __name__ == "__main__":
    unittest.main()
