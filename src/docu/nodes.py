"""
Syntax Node Hierarchy for Docu

Declarations, specs and type expressions recovered by the external parser
are represented as a closed set of dataclasses, never as source strings.

Three families:
    - Type expressions (Ident, StarExpr, StructType, ...)
    - Specs (ValueSpec, ImportSpec, TypeSpec) inside a GenDeclaration
    - Declarations (FunctionDeclaration, GenDeclaration)

ARCHITECTURAL RULE:
    Nodes hold shape only.
    Rendering belongs in docu.literal, pruning in docu.export.
    Nodes are mutable so the export filter can prune lists in place.
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from docu.model import CommentBlock


def is_exported(name: str) -> bool:
    """Report whether name starts with an upper-case letter."""
    return bool(name) and name[0].isupper()


class TypeExpr(ABC):
    """
    Base class for all type expressions.

    Exists to give the expression family a common type.
    DO NOT add rendering here (belongs in docu.literal).
    """
    pass


@dataclass
class Ident(TypeExpr):
    """
    A bare identifier.

    Used both as a type expression (int, Widget) and as the name
    of declarations, fields and value specs.
    """

    name: str

    def is_exported(self) -> bool:
        return is_exported(self.name)

    def __str__(self) -> str:
        return self.name


@dataclass
class StarExpr(TypeExpr):
    """Pointer type: *X."""

    x: TypeExpr


@dataclass
class SelectorExpr(TypeExpr):
    """Qualified identifier: pkg.Name."""

    x: TypeExpr
    sel: str


@dataclass
class ArrayType(TypeExpr):
    """
    Array or slice type.

    length is the source text of the length expression, None for a slice.
    """

    elt: TypeExpr
    length: Optional[str] = None


@dataclass
class VariadicType(TypeExpr):
    """Variadic parameter type: ...T."""

    elt: TypeExpr


@dataclass
class MapType(TypeExpr):
    key: TypeExpr
    value: TypeExpr


class ChanDir(Enum):
    """Channel direction."""

    BOTH = "both"
    SEND = "send"
    RECV = "recv"


@dataclass
class ChanType(TypeExpr):
    value: TypeExpr
    dir: ChanDir = ChanDir.BOTH


@dataclass
class Field:
    """
    One entry of a field list.

    A field declares zero or more names sharing a single type.
    Zero names means an unnamed parameter/result or an embedded struct field.

    Properties:
        names: Declared names, in source order
        type: Type expression (None only in malformed input)
        tag: Raw struct tag text, if any
        doc: Doc comment attached to the field, if any
    """

    names: List[Ident] = field(default_factory=list)
    type: Optional[TypeExpr] = None
    tag: Optional[str] = None
    doc: Optional["CommentBlock"] = None


@dataclass
class FieldList:
    """An ordered list of fields (params, results, struct fields, methods)."""

    fields: List[Field] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.fields)


@dataclass
class FuncType(TypeExpr):
    """Function type: func(params) results."""

    params: FieldList = field(default_factory=FieldList)
    results: FieldList = field(default_factory=FieldList)


@dataclass
class StructType(TypeExpr):
    """
    Struct type.

    This is the only struct-like shape: the export filter prunes
    its field list in place.
    """

    fields: FieldList = field(default_factory=FieldList)


@dataclass
class InterfaceType(TypeExpr):
    """
    Interface type.

    Each method is a Field with one name and a FuncType;
    embedded interfaces are Fields without names.
    """

    methods: FieldList = field(default_factory=FieldList)


class Token(Enum):
    """Keyword introducing a GenDeclaration."""

    IMPORT = "import"
    CONST = "const"
    TYPE = "type"
    VAR = "var"


class Spec(ABC):
    """Base class for the specs grouped by a GenDeclaration."""
    pass


@dataclass
class ImportSpec(Spec):
    """
    A single import.

    Properties:
        path: Import path, unquoted (e.g. "encoding/json")
        name: Optional local name (alias, "." or "_")
    """

    path: str
    name: Optional[Ident] = None

    @property
    def literal(self) -> str:
        return '"' + self.path + '"'


@dataclass
class ValueSpec(Spec):
    """
    A const or var spec.

    Properties:
        names: Declared names (at least one in well-formed input)
        type: Declared type, None when inferred from values
        values: Source text of the initial values
    """

    names: List[Ident] = field(default_factory=list)
    type: Optional[TypeExpr] = None
    values: List[str] = field(default_factory=list)
    doc: Optional["CommentBlock"] = None


@dataclass
class TypeSpec(Spec):
    """A type declaration: type Name <type>."""

    name: Ident
    type: Optional[TypeExpr] = None
    doc: Optional["CommentBlock"] = None


class Declaration(ABC):
    """Base class for top-level declarations."""
    pass


@dataclass
class FunctionDeclaration(Declaration):
    """
    A function or method declaration.

    Properties:
        name: Function name
        recv: Receiver field list, None for plain functions
        params: Parameter list
        results: Result list (empty when the function returns nothing)
        doc: Doc comment, travels with the declaration through a merge
    """

    name: Ident
    recv: Optional[FieldList] = None
    params: FieldList = field(default_factory=FieldList)
    results: FieldList = field(default_factory=FieldList)
    doc: Optional["CommentBlock"] = None

    @property
    def is_method(self) -> bool:
        return self.recv is not None


@dataclass
class GenDeclaration(Declaration):
    """A generic declaration: import, const, type or var group."""

    tok: Token
    specs: List[Spec] = field(default_factory=list)
    doc: Optional["CommentBlock"] = None


def receiver_type_name(decl: FunctionDeclaration) -> str:
    """
    Return the base type name of a method receiver.

    One level of pointer is unwrapped, so *Widget and Widget
    both yield "Widget". Plain functions yield "".
    """
    if decl.recv is None or not decl.recv.fields:
        return ""
    expr = decl.recv.fields[0].type
    if isinstance(expr, StarExpr):
        expr = expr.x
    if isinstance(expr, Ident):
        return expr.name
    return ""
