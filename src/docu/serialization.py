"""
Serialization helpers for Docu trees (units, declarations, type expressions).

This is the exchange format with the external parser: it emits one
JSON/YAML document per source file, and load_unit turns it back into a
CompilationUnit. Merged units are written the same way for documentation
writers. The dict structure is kept stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import yaml

from docu.errors import ParseError
from docu.model import Comment, CommentBlock, CompilationUnit, MergedUnit, NO_POS
from docu.nodes import (
    ArrayType,
    ChanDir,
    ChanType,
    Declaration,
    Field,
    FieldList,
    FuncType,
    FunctionDeclaration,
    GenDeclaration,
    Ident,
    ImportSpec,
    InterfaceType,
    MapType,
    SelectorExpr,
    Spec,
    StarExpr,
    StructType,
    Token,
    TypeExpr,
    TypeSpec,
    ValueSpec,
    VariadicType,
)


def expr_to_dict(expr: TypeExpr | None) -> Any:
    if expr is None:
        return None
    if isinstance(expr, Ident):
        return {"type": "ident", "name": expr.name}
    if isinstance(expr, StarExpr):
        return {"type": "star", "x": expr_to_dict(expr.x)}
    if isinstance(expr, SelectorExpr):
        return {"type": "selector", "x": expr_to_dict(expr.x), "sel": expr.sel}
    if isinstance(expr, ArrayType):
        return {"type": "array", "elt": expr_to_dict(expr.elt), "len": expr.length}
    if isinstance(expr, VariadicType):
        return {"type": "variadic", "elt": expr_to_dict(expr.elt)}
    if isinstance(expr, MapType):
        return {"type": "map", "key": expr_to_dict(expr.key), "value": expr_to_dict(expr.value)}
    if isinstance(expr, ChanType):
        return {"type": "chan", "value": expr_to_dict(expr.value), "dir": expr.dir.value}
    if isinstance(expr, FuncType):
        return {
            "type": "func",
            "params": field_list_to_list(expr.params),
            "results": field_list_to_list(expr.results),
        }
    if isinstance(expr, StructType):
        return {"type": "struct", "fields": field_list_to_list(expr.fields)}
    if isinstance(expr, InterfaceType):
        return {"type": "interface", "methods": field_list_to_list(expr.methods)}
    raise TypeError(f"Unsupported TypeExpr type: {type(expr)}")


def expr_from_dict(d: Any) -> TypeExpr | None:
    if d is None:
        return None
    if isinstance(d, str):
        # shorthand for a bare identifier
        return Ident(d)
    t = d.get("type")
    if t == "ident":
        return Ident(d["name"])
    if t == "star":
        return StarExpr(expr_from_dict(d["x"]))
    if t == "selector":
        return SelectorExpr(expr_from_dict(d["x"]), d["sel"])
    if t == "array":
        return ArrayType(expr_from_dict(d["elt"]), d.get("len"))
    if t == "variadic":
        return VariadicType(expr_from_dict(d["elt"]))
    if t == "map":
        return MapType(expr_from_dict(d["key"]), expr_from_dict(d["value"]))
    if t == "chan":
        return ChanType(expr_from_dict(d["value"]), ChanDir(d.get("dir", "both")))
    if t == "func":
        return FuncType(field_list_from_list(d.get("params")), field_list_from_list(d.get("results")))
    if t == "struct":
        return StructType(field_list_from_list(d.get("fields")))
    if t == "interface":
        return InterfaceType(field_list_from_list(d.get("methods")))
    raise ParseError(f"Unsupported type expression dict type: {t}")


def comment_block_to_list(block: CommentBlock | None) -> List[Dict[str, Any]] | None:
    if block is None:
        return None
    return [{"text": c.text, "pos": c.pos} for c in block.comments]


def comment_block_from_list(items: List[Dict[str, Any]] | None) -> CommentBlock | None:
    if items is None:
        return None
    return CommentBlock([Comment(text=c["text"], pos=c.get("pos", NO_POS)) for c in items])


def field_to_dict(f: Field) -> Dict[str, Any]:
    return {
        "names": [n.name for n in f.names],
        "type": expr_to_dict(f.type),
        "tag": f.tag,
        "doc": comment_block_to_list(f.doc),
    }


def field_from_dict(d: Dict[str, Any]) -> Field:
    return Field(
        names=[Ident(n) for n in d.get("names", [])],
        type=expr_from_dict(d.get("type")),
        tag=d.get("tag"),
        doc=comment_block_from_list(d.get("doc")),
    )


def field_list_to_list(fields: FieldList | None) -> List[Dict[str, Any]] | None:
    if fields is None:
        return None
    return [field_to_dict(f) for f in fields.fields]


def field_list_from_list(items: List[Dict[str, Any]] | None) -> FieldList:
    return FieldList([field_from_dict(f) for f in items or []])


def spec_to_dict(spec: Spec) -> Dict[str, Any]:
    if isinstance(spec, ImportSpec):
        return {"kind": "import", "path": spec.path, "name": spec.name.name if spec.name else None}
    if isinstance(spec, ValueSpec):
        return {
            "kind": "value",
            "names": [n.name for n in spec.names],
            "type": expr_to_dict(spec.type),
            "values": spec.values,
            "doc": comment_block_to_list(spec.doc),
        }
    if isinstance(spec, TypeSpec):
        return {
            "kind": "type",
            "name": spec.name.name,
            "type": expr_to_dict(spec.type),
            "doc": comment_block_to_list(spec.doc),
        }
    raise TypeError(f"Unsupported Spec type: {type(spec)}")


def spec_from_dict(d: Dict[str, Any]) -> Spec:
    kind = d.get("kind")
    if kind == "import":
        name = d.get("name")
        return ImportSpec(path=d["path"], name=Ident(name) if name else None)
    if kind == "value":
        return ValueSpec(
            names=[Ident(n) for n in d.get("names", [])],
            type=expr_from_dict(d.get("type")),
            values=d.get("values", []),
            doc=comment_block_from_list(d.get("doc")),
        )
    if kind == "type":
        return TypeSpec(
            name=Ident(d["name"]),
            type=expr_from_dict(d.get("type")),
            doc=comment_block_from_list(d.get("doc")),
        )
    raise ParseError(f"Unsupported spec kind: {kind}")


def decl_to_dict(decl: Declaration) -> Dict[str, Any]:
    if isinstance(decl, FunctionDeclaration):
        return {
            "kind": "func",
            "name": decl.name.name,
            "recv": field_list_to_list(decl.recv),
            "params": field_list_to_list(decl.params),
            "results": field_list_to_list(decl.results),
            "doc": comment_block_to_list(decl.doc),
        }
    if isinstance(decl, GenDeclaration):
        return {
            "kind": "gen",
            "tok": decl.tok.value,
            "specs": [spec_to_dict(s) for s in decl.specs],
            "doc": comment_block_to_list(decl.doc),
        }
    raise TypeError(f"Unsupported Declaration type: {type(decl)}")


def decl_from_dict(d: Dict[str, Any]) -> Declaration:
    kind = d.get("kind")
    if kind == "func":
        recv = d.get("recv")
        return FunctionDeclaration(
            name=Ident(d["name"]),
            recv=field_list_from_list(recv) if recv is not None else None,
            params=field_list_from_list(d.get("params")),
            results=field_list_from_list(d.get("results")),
            doc=comment_block_from_list(d.get("doc")),
        )
    if kind == "gen":
        return GenDeclaration(
            tok=Token(d["tok"]),
            specs=[spec_from_dict(s) for s in d.get("specs", [])],
            doc=comment_block_from_list(d.get("doc")),
        )
    raise ParseError(f"Unsupported declaration kind: {kind}")


def unit_to_dict(u: CompilationUnit) -> Dict[str, Any]:
    return {
        "name": u.name,
        "path": u.path,
        "package_pos": u.package_pos,
        "name_pos": u.name_pos,
        "decls": [decl_to_dict(d) for d in u.decls],
        "comments": [comment_block_to_list(c) for c in u.comments],
        "imports": [spec_to_dict(s) for s in u.imports],
    }


def unit_from_dict(d: Dict[str, Any]) -> CompilationUnit:
    """
    Build a CompilationUnit from its dict form.

    "imports" is optional; when absent it is derived from the import
    declarations.

    Raises:
        ParseError: If d is not a well-formed unit.
    """
    if not isinstance(d, dict):
        raise ParseError(f"Expected a mapping, got {type(d).__name__}")
    try:
        return CompilationUnit(
            name=d["name"],
            decls=[decl_from_dict(x) for x in d.get("decls", [])],
            comments=[comment_block_from_list(c) for c in d.get("comments", [])],
            path=d.get("path", ""),
            package_pos=d.get("package_pos", NO_POS),
            name_pos=d.get("name_pos", NO_POS),
            imports=[spec_from_dict(s) for s in d.get("imports", [])],
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ParseError(f"Malformed compilation unit: {e!r}") from e


def merged_to_dict(m: MergedUnit) -> Dict[str, Any]:
    return {
        "unit": unit_to_dict(m.unit),
        "license": comment_block_to_list(m.license),
        "import_annotation": comment_block_to_list(m.import_annotation),
        "canonical_style": m.canonical_style,
    }


def merged_from_dict(d: Dict[str, Any]) -> MergedUnit:
    return MergedUnit(
        unit=unit_from_dict(d["unit"]),
        license=comment_block_from_list(d.get("license")),
        import_annotation=comment_block_from_list(d.get("import_annotation")),
        canonical_style=d.get("canonical_style", False),
    )


def unit_to_json(u: CompilationUnit) -> str:
    return json.dumps(unit_to_dict(u), sort_keys=True)


def unit_from_json(s: str) -> CompilationUnit:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}") from e
    return unit_from_dict(d)


def unit_to_yaml(u: CompilationUnit) -> str:
    return yaml.safe_dump(unit_to_dict(u), sort_keys=False)


def unit_from_yaml(s: str) -> CompilationUnit:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid YAML: {e}") from e
    return unit_from_dict(d)


def merged_to_yaml(m: MergedUnit) -> str:
    return yaml.safe_dump(merged_to_dict(m), sort_keys=False)


def load_unit(path: str, source: Optional[bytes | str] = None) -> CompilationUnit:
    """
    Default parser adapter: decode a serialized tree for path.

    Args:
        path: Source path; read from disk when source is None.
            A ".json" suffix selects JSON, anything else YAML.
        source: Serialized tree as text or bytes

    Returns:
        The CompilationUnit; its path defaults to the given path.

    Raises:
        ParseError: If the tree cannot be decoded.
        OSError: If path cannot be read.
    """
    if source is None:
        with open(path, "r", encoding="utf-8") as f:
            source = f.read()
    elif isinstance(source, bytes):
        try:
            source = source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Cannot decode {path}: {e}") from e

    if path.endswith(".json"):
        unit = unit_from_json(source)
    else:
        unit = unit_from_yaml(source)
    if not unit.path:
        unit.path = path
    return unit
