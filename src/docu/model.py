"""
Core Package Model Objects

Defines the trees Docu moves between its stages:

    - Comments and comment blocks (with source positions)
    - Compilation units (one parsed source file)
    - Package units (files sharing one package key)
    - Merged units (the canonical tree of one package)

ARCHITECTURAL RULE:
    Compilation units are produced once by the external parser and are
    never mutated afterwards. Every stage that changes a tree works on
    a copy produced by the merger.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from docu.nodes import Declaration, GenDeclaration, ImportSpec, Token
from docu.synopsis import license_text


# Invalid source position.
NO_POS = 0


@dataclass
class Comment:
    """
    A single comment as it appears in the source.

    Properties:
        text: Raw comment text including markers ("// ..." or "/* ... */")
        pos: Position of the first comment marker
    """

    text: str
    pos: int = NO_POS

    def is_valid(self) -> bool:
        return self.pos > NO_POS


@dataclass
class CommentBlock:
    """
    A group of adjacent comments with no blank line between them.

    Comment blocks are only used for metadata extraction (license,
    import annotation) and as doc comments of declarations.
    """

    comments: List[Comment] = field(default_factory=list)

    @property
    def pos(self) -> int:
        if not self.comments:
            return NO_POS
        return self.comments[0].pos

    def text(self) -> str:
        """
        Return the text of the block with comment markers removed.

        One leading space per line is stripped, trailing whitespace is
        removed, and leading/trailing blank lines are dropped. The result
        ends with a newline unless it is empty.
        """
        lines: List[str] = []
        for comment in self.comments:
            raw = comment.text
            if raw.startswith("//"):
                lines.append(raw[2:])
            elif raw.startswith("/*"):
                lines.extend(raw[2:-2].split("\n"))
            else:
                lines.append(raw)

        stripped = []
        for line in lines:
            if line.startswith(" "):
                line = line[1:]
            stripped.append(line.rstrip())

        while stripped and not stripped[0]:
            stripped.pop(0)
        while stripped and not stripped[-1]:
            stripped.pop()

        if not stripped:
            return ""
        return "\n".join(stripped) + "\n"


@dataclass
class CompilationUnit:
    """
    One source file's parsed tree.

    Properties:
        name:
            Declared package name
        decls:
            Top-level declarations in source order
        comments:
            All comment blocks of the file in source order
        path:
            Source path of the file
        package_pos:
            Position of the package keyword
        name_pos:
            Position of the package name
        imports:
            Flattened import specs. Derived from the import declarations
            when the parser leaves it empty; shares spec objects with decls.
    """

    name: str
    decls: List[Declaration] = field(default_factory=list)
    comments: List[CommentBlock] = field(default_factory=list)
    path: str = ""
    package_pos: int = NO_POS
    name_pos: int = NO_POS
    imports: List[ImportSpec] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.imports:
            self.imports = self.collect_imports()

    def collect_imports(self) -> List[ImportSpec]:
        """Return the import specs of all import declarations, in order."""
        imports = []
        for decl in self.decls:
            if isinstance(decl, GenDeclaration) and decl.tok == Token.IMPORT:
                imports.extend(s for s in decl.specs if isinstance(s, ImportSpec))
        return imports


@dataclass
class PackageUnit:
    """
    Compilation units sharing one package key.

    files preserves registration order; it is mutated only by the
    Registry during registration and read-only afterwards.
    """

    name: str
    files: Dict[str, CompilationUnit] = field(default_factory=OrderedDict)

    def __len__(self) -> int:
        return len(self.files)


@dataclass
class MergedUnit:
    """
    Result of merging a package unit.

    Properties:
        unit:
            The canonical tree; the export filter prunes it in place
        license:
            Comment block identified as the copyright notice, if any
        import_annotation:
            Single-line comment found on the package clause, if any
        canonical_style:
            True when a single-file package follows the canonical
            file naming convention (see docu.style)
    """

    unit: CompilationUnit
    license: Optional[CommentBlock] = None
    import_annotation: Optional[CommentBlock] = None
    canonical_style: bool = False

    @property
    def name(self) -> str:
        return self.unit.name

    def license_text(self) -> str:
        """Return the license text, falling back to a scan of the unit's comments."""
        if self.license is not None:
            return self.license.text()
        return license_text(self.unit)
