"""
Export Filter: prunes a merged tree down to its exported API.

Visibility follows the capitalized-identifier convention (see
docu.nodes.is_exported). Every function here mutates its argument in
place, rebuilding lists with a keep-predicate so order is preserved, and
returns whether anything visible remains. Nothing here raises: "nothing
exported" is a False result.

Filtering is idempotent: running it again over filtered content changes
nothing and returns the same result.
"""

from typing import Optional

from docu.model import CompilationUnit, MergedUnit
from docu.nodes import (
    Declaration,
    Field,
    FieldList,
    FunctionDeclaration,
    GenDeclaration,
    Ident,
    ImportSpec,
    Spec,
    StarExpr,
    StructType,
    TypeExpr,
    TypeSpec,
    ValueSpec,
)


def exported_unit_filter(unit: CompilationUnit) -> bool:
    """Remove every non-exported declaration from unit; report whether any remain."""
    unit.decls = [decl for decl in unit.decls if exported_decl_filter(decl)]
    return len(unit.decls) != 0


def exported_merged_filter(merged: Optional[MergedUnit]) -> bool:
    """exported_unit_filter for a MergedUnit; None has nothing exported."""
    if merged is None:
        return False
    return exported_unit_filter(merged.unit)


def exported_decl_filter(decl: Declaration) -> bool:
    """
    Prune decl; report whether it is still visible.

    A function is visible when its name is exported and, for a method,
    the receiver's base type is exported too. A GenDeclaration is
    visible while at least one of its specs is.
    """
    if isinstance(decl, FunctionDeclaration):
        if decl.recv is not None and not exported_recv_filter(decl.recv):
            return False
        return decl.name.is_exported()

    if isinstance(decl, GenDeclaration):
        decl.specs = [spec for spec in decl.specs if exported_spec_filter(spec)]
        return len(decl.specs) != 0

    return False


def exported_recv_filter(recv: FieldList) -> bool:
    """
    Report whether every receiver type is exported.

    Only T and *T receivers are judged; *T must point at a plain name.
    Other receiver shapes are not decided here.
    """
    for f in recv.fields:
        expr = f.type
        if isinstance(expr, Ident):
            if not expr.is_exported():
                return False
        elif isinstance(expr, StarExpr):
            if not isinstance(expr.x, Ident) or not expr.x.is_exported():
                return False
    return True


def exported_spec_filter(spec: Spec) -> bool:
    """Prune spec; report whether it is still visible."""
    if isinstance(spec, ImportSpec):
        return True

    if isinstance(spec, ValueSpec):
        spec.names = [name for name in spec.names if name.is_exported()]
        return len(spec.names) != 0

    if isinstance(spec, TypeSpec):
        if not spec.name.is_exported():
            return False
        exported_expr_filter(spec.type)
        return True

    return False


def exported_field_filter(f: Field) -> bool:
    """
    Prune the names of a struct field; report whether it is still visible.

    A field is dropped once it has no names left, embedded fields included.
    """
    f.names = [name for name in f.names if name.is_exported()]
    return len(f.names) != 0


def exported_expr_filter(expr: Optional[TypeExpr]) -> bool:
    """
    Prune non-exported fields of a struct type; report whether any remain.

    Non-struct types are left alone and count as visible.
    """
    if isinstance(expr, StructType):
        expr.fields.fields = [f for f in expr.fields.fields if exported_field_filter(f)]
        return len(expr.fields.fields) != 0
    return True
