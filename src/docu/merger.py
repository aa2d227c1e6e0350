"""
Package Merger: combines a package's compilation units into one tree.

Steps (multi-file packages):
    1. Concatenate declarations, file by file, in source order
    2. Drop duplicate functions, keyed by (name, receiver base type)
    3. Drop duplicate imports, keyed by path
    4. Drop free-floating comments; doc comments stay on their declarations
    5. Pick the license block (copyright comment above the package clause)
    6. Pick the import annotation (one-line comment on the package clause)
    7. Keep [license, import annotation] as the merged comment list
    8. Sort the merged imports, inside import declarations too

Single-file packages are adopted as they are (imports sorted), and marked
canonical_style when the file name follows docu.style.

IMPORTANT: license and import annotation detection is positional pattern
matching against the package clause, not a grammar rule. Unusually
formatted files can hide or mis-attribute these comments.

The merger never mutates registered units: it works on deep copies.
"""

import copy
import logging
from typing import List, Optional, Set, Tuple

from docu.imports import sort_imports
from docu.model import CommentBlock, CompilationUnit, MergedUnit, PackageUnit
from docu.nodes import (
    Declaration,
    FunctionDeclaration,
    GenDeclaration,
    ImportSpec,
    Token,
    receiver_type_name,
)
from docu.style import is_normal_name
from docu.synopsis import is_license

logger = logging.getLogger(__name__)


def _func_key(decl: FunctionDeclaration) -> Tuple[str, str]:
    return decl.name.name, receiver_type_name(decl)


def _merge_decls(units: List[CompilationUnit]) -> List[Declaration]:
    decls: List[Declaration] = []
    seen_funcs: Set[Tuple[str, str]] = set()
    seen_imports: Set[str] = set()

    for unit in units:
        for decl in unit.decls:
            if isinstance(decl, FunctionDeclaration):
                key = _func_key(decl)
                if key in seen_funcs:
                    logger.debug("dropping duplicate function %s in %s", key, unit.path)
                    continue
                seen_funcs.add(key)

            elif isinstance(decl, GenDeclaration) and decl.tok == Token.IMPORT:
                specs = []
                for spec in decl.specs:
                    if isinstance(spec, ImportSpec):
                        if spec.path in seen_imports:
                            continue
                        seen_imports.add(spec.path)
                    specs.append(spec)
                if not specs:
                    continue
                decl.specs = specs

            decls.append(decl)

    return decls


def _merge_imports(units: List[CompilationUnit]) -> List[ImportSpec]:
    imports: List[ImportSpec] = []
    seen: Set[str] = set()
    for unit in units:
        for spec in unit.imports:
            if spec.path in seen:
                logger.debug("dropping duplicate import %r in %s", spec.path, unit.path)
                continue
            seen.add(spec.path)
            imports.append(spec)
    return imports


def _extract_metadata(
    units: List[CompilationUnit], merged: CompilationUnit
) -> Tuple[Optional[CommentBlock], Optional[CommentBlock]]:
    """
    Find the license block and the import annotation.

    Offsets are measured from one position past the end of the package
    name: a negative offset lies before the package clause, zero is a
    comment starting right after the name, as in

        package geo // import "example.com/geo"

    Files are scanned in registration order until both are found. When an
    import annotation is found, merged takes over that file's package
    clause positions.
    """
    lic: Optional[CommentBlock] = None
    imp: Optional[CommentBlock] = None

    for unit in units:
        offset = unit.name_pos + len(merged.name) + 1
        for block in unit.comments:
            at = block.pos - offset
            if at > 0:
                break
            if lic is None and at < 0:
                if is_license(block.text()):
                    lic = copy.deepcopy(block)
                    continue
            if (
                imp is None
                and at == 0
                and len(block.comments) == 1
                and block.comments[0].is_valid()
            ):
                merged.package_pos, merged.name_pos = unit.package_pos, unit.name_pos
                merged.name = unit.name
                imp = copy.deepcopy(block)
                break
        if lic is not None and imp is not None:
            break

    return lic, imp


def _sort_unit_imports(unit: CompilationUnit) -> None:
    """Sort unit's flattened imports and the specs of each import declaration."""
    unit.imports = sort_imports(unit.imports)
    for decl in unit.decls:
        if isinstance(decl, GenDeclaration) and decl.tok == Token.IMPORT:
            decl.specs = sort_imports(decl.specs)


def merge_package(package: Optional[PackageUnit]) -> Optional[MergedUnit]:
    """
    Merge the compilation units of a package into one canonical tree.

    Args:
        package: A package unit with at least one compilation unit

    Returns:
        MergedUnit, or None for a missing or empty package
    """
    if package is None or not package.files:
        return None

    if len(package.files) == 1:
        path, unit = next(iter(package.files.items()))
        merged = copy.deepcopy(unit)
        _sort_unit_imports(merged)
        return MergedUnit(unit=merged, canonical_style=is_normal_name(path))

    units = copy.deepcopy(list(package.files.values()))
    first = units[0]
    merged = CompilationUnit(
        name=package.name or first.name,
        decls=_merge_decls(units),
        package_pos=first.package_pos,
        name_pos=first.name_pos,
    )
    merged.imports = _merge_imports(units)

    lic, imp = _extract_metadata(units, merged)
    if lic is not None:
        logger.debug("license block found in package %s", merged.name)
        merged.comments.append(lic)
    if imp is not None:
        logger.debug("import annotation found in package %s", merged.name)
        merged.comments.append(imp)

    _sort_unit_imports(merged)
    return MergedUnit(unit=merged, license=lic, import_annotation=imp)
