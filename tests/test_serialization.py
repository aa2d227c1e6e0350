"""
Tests for serialization and loading of Docu trees.

These tests ensure the JSON/YAML exchange format with the external parser
round-trips, and that malformed trees surface as ParseError.
"""

import pytest
from docu.errors import ParseError
from docu.examples import build_area_unit, build_widget_unit
from docu.merger import merge_package
from docu.model import PackageUnit
from docu.nodes import FunctionDeclaration, GenDeclaration, Ident, StarExpr, StructType, Token
from docu.serialization import (
    load_unit,
    merged_from_dict,
    merged_to_dict,
    merged_to_yaml,
    unit_from_dict,
    unit_from_json,
    unit_from_yaml,
    unit_to_dict,
    unit_to_json,
    unit_to_yaml,
)


WIDGET_YAML = """
name: geo
path: /go/src/example.com/geo/widget.go
package_pos: 1
name_pos: 9
decls:
  - kind: gen
    tok: import
    specs:
      - {kind: import, path: fmt}
  - kind: gen
    tok: type
    specs:
      - kind: type
        name: Widget
        type:
          type: struct
          fields:
            - {names: [X], type: int}
            - {names: [y], type: int}
  - kind: func
    name: Area
    recv:
      - {names: [w], type: {type: star, x: Widget}}
    results:
      - {type: int}
comments:
  - [{text: "// Copyright 2016 Geo.", pos: 1}]
"""


def test_json_roundtrip():
    unit = build_area_unit("/go/src/example.com/geo/area.go")
    before = unit_to_dict(unit)
    after = unit_to_dict(unit_from_json(unit_to_json(unit)))
    assert before == after


def test_yaml_roundtrip():
    unit = build_widget_unit("/go/src/example.com/geo/widget.go")
    before = unit_to_dict(unit)
    after = unit_to_dict(unit_from_yaml(unit_to_yaml(unit)))
    assert before == after


def test_merged_roundtrip():
    pkg = PackageUnit(name="geo")
    pkg.files["/a.go"] = build_area_unit("/a.go")
    pkg.files["/b.go"] = build_widget_unit("/b.go")
    merged = merge_package(pkg)

    restored = merged_from_dict(merged_to_dict(merged))
    assert restored == merged
    assert "import_annotation" in merged_to_yaml(merged)


def test_hand_written_yaml():
    """Bare strings are accepted as identifiers in type positions."""
    unit = unit_from_yaml(WIDGET_YAML)

    assert unit.name == "geo"
    assert [s.path for s in unit.imports] == ["fmt"]
    assert isinstance(unit.decls[1], GenDeclaration)
    assert unit.decls[1].tok == Token.TYPE
    assert isinstance(unit.decls[1].specs[0].type, StructType)

    area = unit.decls[2]
    assert isinstance(area, FunctionDeclaration)
    assert area.recv.fields[0].type == StarExpr(Ident("Widget"))
    assert unit.comments[0].text() == "Copyright 2016 Geo.\n"


class TestMalformedInput:
    """Test ParseError reporting."""

    def test_not_a_mapping(self):
        with pytest.raises(ParseError):
            unit_from_yaml("- just\n- a list\n")

    def test_missing_name(self):
        with pytest.raises(ParseError):
            unit_from_dict({"decls": []})

    def test_unknown_declaration_kind(self):
        with pytest.raises(ParseError):
            unit_from_dict({"name": "geo", "decls": [{"kind": "macro"}]})

    def test_unknown_token(self):
        with pytest.raises(ParseError):
            unit_from_dict({"name": "geo", "decls": [{"kind": "gen", "tok": "package"}]})

    def test_invalid_yaml(self):
        with pytest.raises(ParseError):
            unit_from_yaml("name: [unclosed")

    def test_invalid_json(self):
        with pytest.raises(ParseError):
            unit_from_json("{not json")


class TestLoadUnit:
    """Test the default parser adapter."""

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "widget.yaml"
        path.write_text("name: geo\n")
        unit = load_unit(str(path))
        assert unit.name == "geo"
        assert unit.path == str(path)

    def test_load_from_bytes(self):
        unit = load_unit("/go/src/geo/widget.go", WIDGET_YAML.encode("utf-8"))
        assert unit.path == "/go/src/example.com/geo/widget.go"

    def test_load_json_source(self):
        unit = load_unit("/go/src/geo/widget.json", '{"name": "geo"}')
        assert unit.name == "geo"
        assert unit.path == "/go/src/geo/widget.json"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_unit(str(tmp_path / "missing.yaml"))
