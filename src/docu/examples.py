"""
Example package builder for the two-file "geo" package.

area.go:

    // Copyright 2016 The Geo Authors. All rights reserved.

    package geo // import "example.com/geo"

    // Area returns the area of w.
    func (Widget) Area() int
    func internalHelper()

widget.go:

    package geo

    // Widget is a rectangle.
    type Widget struct{ X int; y int }

Positions follow the layout above so license and import annotation
detection work on the result.
"""
import os
from typing import List, Tuple

from docu.model import Comment, CommentBlock, CompilationUnit
from docu.nodes import (
    Field,
    FieldList,
    FunctionDeclaration,
    GenDeclaration,
    Ident,
    StructType,
    Token,
    TypeSpec,
)

EXAMPLE_IMPORT_PATH = "example.com/geo"

LICENSE = "// Copyright 2016 The Geo Authors. All rights reserved."
IMPORT_ANNOTATION = '// import "example.com/geo"'


def build_area_unit(path: str = "area.go") -> CompilationUnit:
    package_pos = len(LICENSE) + 3
    name_pos = package_pos + len("package ")
    annotation_pos = name_pos + len("geo") + 1

    area_doc = CommentBlock([Comment("// Area returns the area of w.", annotation_pos + 40)])
    area = FunctionDeclaration(
        name=Ident("Area"),
        recv=FieldList([Field(type=Ident("Widget"))]),
        results=FieldList([Field(type=Ident("int"))]),
        doc=area_doc,
    )
    helper = FunctionDeclaration(name=Ident("internalHelper"))

    return CompilationUnit(
        name="geo",
        decls=[area, helper],
        comments=[
            CommentBlock([Comment(LICENSE, 1)]),
            CommentBlock([Comment(IMPORT_ANNOTATION, annotation_pos)]),
            area_doc,
        ],
        path=path,
        package_pos=package_pos,
        name_pos=name_pos,
    )


def build_widget_unit(path: str = "widget.go") -> CompilationUnit:
    widget_doc = CommentBlock([Comment("// Widget is a rectangle.", 14)])
    widget = TypeSpec(
        name=Ident("Widget"),
        type=StructType(FieldList([
            Field(names=[Ident("X")], type=Ident("int")),
            Field(names=[Ident("y")], type=Ident("int")),
        ])),
    )
    return CompilationUnit(
        name="geo",
        decls=[GenDeclaration(tok=Token.TYPE, specs=[widget], doc=widget_doc)],
        comments=[widget_doc],
        path=path,
        package_pos=1,
        name_pos=9,
    )


def build_example_geo_files(root: str) -> List[Tuple[str, CompilationUnit]]:
    """Return (path, unit) pairs of the geo package placed under root/src."""
    directory = os.path.join(root, "src", *EXAMPLE_IMPORT_PATH.split("/"))
    area_path = os.path.join(directory, "area.go")
    widget_path = os.path.join(directory, "widget.go")
    return [
        (area_path, build_area_unit(area_path)),
        (widget_path, build_widget_unit(widget_path)),
    ]
