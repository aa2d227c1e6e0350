"""
Tests for the package merger.

Tests verify that merge_package:
    - Adopts single-file packages and marks canonical ones
    - Deduplicates functions by (name, receiver) and imports by path
    - Extracts the license block and import annotation by position
    - Never mutates registered units
"""

import copy

from docu.literal import unit_literals
from docu.merger import merge_package
from docu.model import Comment, CommentBlock, CompilationUnit, PackageUnit
from docu.nodes import (
    Field,
    FieldList,
    FunctionDeclaration,
    GenDeclaration,
    Ident,
    ImportSpec,
    StarExpr,
    Token,
    TypeSpec,
)


def method(name, recv_type, results=()):
    return FunctionDeclaration(
        name=Ident(name),
        recv=FieldList([Field(type=recv_type)]),
        results=FieldList([Field(type=Ident(r)) for r in results]),
    )


def imports(*paths):
    return GenDeclaration(tok=Token.IMPORT, specs=[ImportSpec(p) for p in paths])


def package(*files):
    pkg = PackageUnit(name=files[0][1].name)
    for path, unit in files:
        pkg.files[path] = unit
    return pkg


class TestFastPath:
    """Test single-file packages."""

    def test_missing_or_empty_package(self):
        assert merge_package(None) is None
        assert merge_package(PackageUnit(name="geo")) is None

    def test_canonical_file_adopted_unchanged(self):
        unit = CompilationUnit(
            name="geo",
            decls=[imports("encoding/json", "fmt"), FunctionDeclaration(name=Ident("Open"))],
            path="/src/geo/doc_zh.go",
        )
        merged = merge_package(package(("/src/geo/doc_zh.go", unit)))
        assert merged.canonical_style is True
        assert merged.unit == unit
        assert merged.license is None
        assert merged.import_annotation is None

    def test_plain_single_file_not_canonical(self):
        unit = CompilationUnit(name="geo", decls=[FunctionDeclaration(name=Ident("Open"))])
        merged = merge_package(package(("/src/geo/geo.go", unit)))
        assert merged.canonical_style is False
        assert merged.unit.decls == unit.decls

    def test_fast_path_sorts_imports(self):
        unit = CompilationUnit(name="geo", decls=[imports("os", "fmt")])
        merged = merge_package(package(("/src/geo/geo.go", unit)))
        assert [s.path for s in merged.unit.imports] == ["fmt", "os"]
        assert [s.path for s in merged.unit.decls[0].specs] == ["fmt", "os"]
        assert [s.path for s in unit.decls[0].specs] == ["os", "fmt"]

    def test_fast_path_copies_unit(self):
        unit = CompilationUnit(name="geo", decls=[FunctionDeclaration(name=Ident("Open"))])
        merged = merge_package(package(("/src/geo/doc_en.go", unit)))
        merged.unit.decls.clear()
        assert len(unit.decls) == 1


class TestDeduplication:
    """Test declaration concatenation and deduplication."""

    def test_declaration_order_preserved(self):
        a = CompilationUnit(name="geo", decls=[FunctionDeclaration(name=Ident("A")),
                                              FunctionDeclaration(name=Ident("B"))])
        b = CompilationUnit(name="geo", decls=[FunctionDeclaration(name=Ident("C"))])
        merged = merge_package(package(("/a.go", a), ("/b.go", b)))
        assert [d.name.name for d in merged.unit.decls] == ["A", "B", "C"]
        assert merged.canonical_style is False

    def test_duplicate_method_first_wins(self):
        first = method("Area", Ident("Widget"), ["int"])
        second = method("Area", Ident("Widget"), ["float64"])
        a = CompilationUnit(name="geo", decls=[first])
        b = CompilationUnit(name="geo", decls=[second])

        merged = merge_package(package(("/a.go", a), ("/b.go", b)))

        areas = [d for d in merged.unit.decls if d.name.name == "Area"]
        assert len(areas) == 1
        assert areas[0].results.fields[0].type == Ident("int")

    def test_pointer_and_value_receivers_share_key(self):
        a = CompilationUnit(name="geo", decls=[method("Area", StarExpr(Ident("Widget")))])
        b = CompilationUnit(name="geo", decls=[method("Area", Ident("Widget"))])
        merged = merge_package(package(("/a.go", a), ("/b.go", b)))
        assert len(merged.unit.decls) == 1

    def test_same_name_different_receivers_kept(self):
        a = CompilationUnit(name="geo", decls=[method("Area", Ident("Widget")),
                                              FunctionDeclaration(name=Ident("Area"))])
        b = CompilationUnit(name="geo", decls=[method("Area", Ident("Gadget"))])
        merged = merge_package(package(("/a.go", a), ("/b.go", b)))
        assert len(merged.unit.decls) == 3

    def test_first_wins_even_without_doc(self):
        """Signatures and docs are ignored: the first registered function stays."""
        undocumented = FunctionDeclaration(name=Ident("Open"))
        documented = FunctionDeclaration(
            name=Ident("Open"),
            params=FieldList([Field(names=[Ident("name")], type=Ident("string"))]),
            doc=CommentBlock([Comment("// Open opens.", 30)]),
        )
        a = CompilationUnit(name="geo", decls=[undocumented])
        b = CompilationUnit(name="geo", decls=[documented])
        merged = merge_package(package(("/a.go", a), ("/b.go", b)))
        assert merged.unit.decls == [undocumented]

    def test_duplicate_imports_removed_and_sorted(self):
        a = CompilationUnit(name="geo", decls=[imports("fmt", "os")])
        b = CompilationUnit(name="geo", decls=[imports("os", "encoding/json"), imports("fmt")])
        merged = merge_package(package(("/a.go", a), ("/b.go", b)))

        assert [s.path for s in merged.unit.imports] == ["encoding/json", "fmt", "os"]
        import_decls = [d for d in merged.unit.decls if isinstance(d, GenDeclaration)]
        assert len(import_decls) == 2
        assert [s.path for s in import_decls[1].specs] == ["encoding/json"]

    def test_import_declarations_sorted(self):
        """Specs inside import declarations are sorted, not just the flat list."""
        a = CompilationUnit(name="geo", decls=[imports("os", "fmt"), FunctionDeclaration(name=Ident("Open"))])
        b = CompilationUnit(name="geo", decls=[imports("io", "encoding/json")])
        merged = merge_package(package(("/a.go", a), ("/b.go", b)))

        assert [s.path for s in merged.unit.imports] == ["encoding/json", "fmt", "io", "os"]
        assert [s.path for s in merged.unit.decls[0].specs] == ["fmt", "os"]
        assert unit_literals(merged.unit) == ['"encoding/json"', '"fmt"', '"io"', '"os"', "func Open()"]

    def test_doc_comments_travel_with_declarations(self):
        doc = CommentBlock([Comment("// Widget is a rectangle.", 14)])
        a = CompilationUnit(
            name="geo",
            decls=[GenDeclaration(tok=Token.TYPE, specs=[TypeSpec(Ident("Widget"), Ident("int"))], doc=doc)],
            comments=[doc, CommentBlock([Comment("// stray note", 80)])],
            name_pos=9,
        )
        b = CompilationUnit(name="geo", name_pos=9)
        merged = merge_package(package(("/a.go", a), ("/b.go", b)))

        assert merged.unit.decls[0].doc == doc
        assert merged.unit.comments == []

    def test_registered_units_not_mutated(self):
        a = CompilationUnit(name="geo", decls=[imports("fmt", "os")])
        b = CompilationUnit(name="geo", decls=[imports("os")])
        before = copy.deepcopy([a, b])
        merge_package(package(("/a.go", a), ("/b.go", b)))
        assert [a, b] == before


class TestMetadataExtraction:
    """Test license and import annotation extraction."""

    LICENSE = "// Copyright 2016 The Geo Authors. All rights reserved."

    def unit_with_clause(self, comments, package_pos=58, name="geo"):
        return CompilationUnit(
            name=name,
            comments=comments,
            package_pos=package_pos,
            name_pos=package_pos + 8,
        )

    def test_license_and_annotation(self):
        # package at 58, name at 66, annotation right after "geo " at 70
        lic = CommentBlock([Comment(self.LICENSE, 1)])
        imp = CommentBlock([Comment('// import "example.com/geo"', 70)])
        a = self.unit_with_clause([lic, imp])
        b = CompilationUnit(name="geo", package_pos=1, name_pos=9)

        merged = merge_package(package(("/a.go", a), ("/b.go", b)))

        assert merged.license == lic
        assert merged.import_annotation == imp
        assert merged.unit.comments == [lic, imp]
        assert merged.license_text().startswith("Copyright 2016")

    def test_annotation_overrides_package_clause(self):
        # "package geo // import ..." with package at 1: name at 9, comment at 13
        imp = CommentBlock([Comment('// import "example.com/geo"', 13)])
        a = CompilationUnit(name="geo", package_pos=30, name_pos=38)
        b = CompilationUnit(name="geo", comments=[imp], package_pos=1, name_pos=9)

        merged = merge_package(package(("/a.go", a), ("/b.go", b)))

        assert merged.import_annotation == imp
        assert merged.unit.package_pos == 1
        assert merged.unit.name_pos == 9

    def test_license_must_precede_clause(self):
        lic = CommentBlock([Comment(self.LICENSE, 100)])
        a = self.unit_with_clause([lic], package_pos=1)
        b = CompilationUnit(name="geo")
        merged = merge_package(package(("/a.go", a), ("/b.go", b)))
        assert merged.license is None

    def test_non_copyright_header_ignored(self):
        doc = CommentBlock([Comment("// Package geo does geometry.", 1)])
        a = self.unit_with_clause([doc], package_pos=31)
        b = CompilationUnit(name="geo")
        merged = merge_package(package(("/a.go", a), ("/b.go", b)))
        assert merged.license is None
        assert merged.unit.comments == []

    def test_multi_line_annotation_rejected(self):
        imp = CommentBlock([Comment('// import "example.com/geo"', 70), Comment("// more", 98)])
        a = self.unit_with_clause([imp])
        b = CompilationUnit(name="geo")
        merged = merge_package(package(("/a.go", a), ("/b.go", b)))
        assert merged.import_annotation is None

    def test_annotation_without_valid_position_rejected(self):
        imp = CommentBlock([Comment('// import "example.com/geo"', 0)])
        a = CompilationUnit(name="geo", comments=[imp], package_pos=0, name_pos=-4)
        b = CompilationUnit(name="geo")
        merged = merge_package(package(("/a.go", a), ("/b.go", b)))
        assert merged.import_annotation is None

    def test_license_found_in_later_file(self):
        lic = CommentBlock([Comment(self.LICENSE, 1)])
        a = CompilationUnit(name="geo", package_pos=1, name_pos=9)
        b = self.unit_with_clause([lic])
        merged = merge_package(package(("/a.go", a), ("/b.go", b)))
        assert merged.license == lic

    def test_nothing_qualifies(self):
        a = CompilationUnit(name="geo")
        b = CompilationUnit(name="geo")
        merged = merge_package(package(("/a.go", a), ("/b.go", b)))
        assert merged.license is None
        assert merged.import_annotation is None
        assert merged.unit.comments == []
