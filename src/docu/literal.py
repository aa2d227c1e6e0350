"""
Literal Renderer: one-line textual signatures of declarations and specs.

All functions are pure. Output is stable for equal input:

    func Open(name string) (*File, error)
    func (*Widget) Area() int
    Widget struct{X int}
    MaxSize, MinSize int
    "encoding/json"
"""

from typing import List, Optional

from docu.model import CompilationUnit
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

NL = "\n"


def _field_list_string(fields: List[Field], sep: str, iface: bool) -> str:
    parts = []
    for f in fields:
        s = ", ".join(name.name for name in f.names)
        if iface and f.names and isinstance(f.type, FuncType):
            parts.append(s + _signature_string(f.type))
            continue
        if f.names and f.type is not None:
            s += " "
        if f.type is not None:
            s += expr_string(f.type)
        parts.append(s)
    return sep.join(parts)


def _signature_string(ft: FuncType) -> str:
    s = "(" + _field_list_string(ft.params.fields, ", ", False) + ")"
    results = ft.results.fields
    if not results:
        return s
    if len(results) == 1 and not results[0].names:
        return s + " " + expr_string(results[0].type)
    return s + " (" + _field_list_string(results, ", ", False) + ")"


def expr_string(expr: Optional[TypeExpr]) -> str:
    """
    Return the source form of a type expression.

    Structs and interfaces are written on one line with "; " between
    members; struct tags are omitted.
    """
    if expr is None:
        return ""
    if isinstance(expr, Ident):
        return expr.name
    if isinstance(expr, StarExpr):
        return "*" + expr_string(expr.x)
    if isinstance(expr, SelectorExpr):
        return expr_string(expr.x) + "." + expr.sel
    if isinstance(expr, ArrayType):
        return "[" + (expr.length or "") + "]" + expr_string(expr.elt)
    if isinstance(expr, VariadicType):
        return "..." + expr_string(expr.elt)
    if isinstance(expr, MapType):
        return "map[" + expr_string(expr.key) + "]" + expr_string(expr.value)
    if isinstance(expr, ChanType):
        prefix = {ChanDir.BOTH: "chan ", ChanDir.SEND: "chan<- ", ChanDir.RECV: "<-chan "}
        return prefix[expr.dir] + expr_string(expr.value)
    if isinstance(expr, FuncType):
        return "func" + _signature_string(expr)
    if isinstance(expr, StructType):
        return "struct{" + _field_list_string(expr.fields.fields, "; ", False) + "}"
    if isinstance(expr, InterfaceType):
        return "interface{" + _field_list_string(expr.methods.fields, "; ", True) + "}"
    raise TypeError(f"Unsupported type expression: {type(expr)}")


def field_lit(f: Optional[Field]) -> str:
    """Return "a, b T" for a field; just "T" when it has no names."""
    if f is None:
        return ""
    lit = ", ".join(name.name for name in f.names)
    if f.type is not None:
        if lit == "":
            lit = expr_string(f.type)
        else:
            lit += " " + expr_string(f.type)
    return lit


def field_list_lit(fields: Optional[FieldList]) -> str:
    """
    Return the comma-joined literal of a parameter or result list.

    Only meant for FunctionDeclaration params and results.
    """
    if fields is None or not fields.fields:
        return ""
    return ", ".join(field_lit(f) for f in fields.fields)


def recv_ident_lit(decl: FunctionDeclaration) -> str:
    """Return "*T" or "T" for a method receiver, "" otherwise."""
    if decl.recv is None or not decl.recv.fields:
        return ""
    expr = decl.recv.fields[0].type
    if isinstance(expr, StarExpr):
        return "*" + expr_string(expr.x)
    if isinstance(expr, Ident):
        return expr.name
    return ""


def func_lit(decl: FunctionDeclaration) -> str:
    """
    Return the signature literal of a function or method.

    One unnamed result is written bare unless its literal contains a
    space or a comma; anything else is parenthesised.
    """
    params = field_list_lit(decl.params)
    results = field_list_lit(decl.results)
    if results == "":
        suffix = "(" + params + ")"
    elif " " not in results and "," not in results:
        suffix = "(" + params + ") " + results
    else:
        suffix = "(" + params + ") (" + results + ")"

    if decl.name is not None:
        suffix = decl.name.name + suffix

    recv = recv_ident_lit(decl)
    if recv == "":
        return "func " + suffix
    return "func (" + recv + ") " + suffix


def spec_lit(spec: Spec) -> str:
    """Return the literal of a spec: a quoted import path, or names and type."""
    if isinstance(spec, ImportSpec):
        return spec.literal
    if isinstance(spec, ValueSpec):
        return field_lit(Field(names=spec.names, type=spec.type))
    if isinstance(spec, TypeSpec):
        return field_lit(Field(names=[spec.name], type=spec.type))
    raise TypeError(f"Unsupported spec type: {type(spec)}")


def spec_ident_lit(spec: Spec) -> str:
    """Return the first identifier of a spec (the quoted path for imports)."""
    if isinstance(spec, ValueSpec):
        return spec.names[0].name if spec.names else ""
    if isinstance(spec, ImportSpec):
        return spec.literal
    if isinstance(spec, TypeSpec):
        return spec.name.name
    return ""


def literal(node) -> str:
    """Render a FunctionDeclaration or a Spec."""
    if isinstance(node, FunctionDeclaration):
        return func_lit(node)
    if isinstance(node, Spec):
        return spec_lit(node)
    raise TypeError(f"Unsupported node type: {type(node)}")


def decl_lits(decl: Declaration) -> List[str]:
    """Return one literal per function or per spec of a GenDeclaration."""
    if isinstance(decl, GenDeclaration):
        return [spec_lit(spec) for spec in decl.specs]
    return [literal(decl)]


def unit_literals(unit: CompilationUnit) -> List[str]:
    """
    Return the literals of unit: its flattened imports first (sorted once
    merged), then every other declaration in order.
    """
    lits = [spec.literal for spec in unit.imports]
    for decl in unit.decls:
        if isinstance(decl, GenDeclaration) and decl.tok == Token.IMPORT:
            continue
        lits.extend(decl_lits(decl))
    return lits


def imports_string(imports: List[ImportSpec]) -> str:
    """Return import source for imports: one statement, or a parenthesised block."""
    if not imports:
        return ""
    if len(imports) == 1:
        return "import " + imports[0].literal + NL
    s = "import (" + NL
    for spec in imports:
        s += "    " + spec.literal + NL
    return s + ")" + NL
