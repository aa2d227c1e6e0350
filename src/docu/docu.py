"""
Docu: the entry point tying the pipeline together.

    parser -> Registry -> merge_package -> exported_unit_filter -> literals

The parser itself is external: Docu calls a parser adapter with
(path, source) and expects a CompilationUnit back. The default adapter,
docu.serialization.load_unit, reads the JSON/YAML trees the external
parser emits.

Each package key is independent: a failure while adding one file never
affects packages already registered. Docu is not thread-safe; process
different keys in parallel with separate instances, or serialize calls.
"""

import logging
import os
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from docu.errors import DocuError
from docu.export import exported_merged_filter
from docu.filters import NameFilter, default_filter
from docu.literal import unit_literals
from docu.merger import merge_package
from docu.model import CompilationUnit, MergedUnit, PackageUnit
from docu.paths import SearchRoots, abs_path, resolve_import_path
from docu.registry import Registry, package_key
from docu.serialization import load_unit

logger = logging.getLogger(__name__)

Source = Union[bytes, str, None]
Parser = Callable[[str, Source], CompilationUnit]


class Docu:
    """
    Registers parsed files per package and produces their exported API.

    Args:
        roots: Search roots used to map directories to import paths
        name_filter: Applied to ".go" file names and to package names;
            rejected files are skipped. None accepts everything.
        parser: Parser adapter, called as parser(path, source)
    """

    def __init__(
        self,
        roots: Optional[SearchRoots] = None,
        name_filter: Optional[NameFilter] = default_filter,
        parser: Parser = load_unit,
    ):
        self.roots = roots or SearchRoots()
        self.name_filter = name_filter
        self.parser = parser
        self.registry = Registry()

    def _accept(self, name: str) -> bool:
        return self.name_filter is None or self.name_filter(name)

    def add(self, path: str, unit: CompilationUnit) -> Optional[str]:
        """
        Register an already parsed unit found at path.

        A path without a file name component (ending in a separator) gets
        a synthetic "_<n>.go" name.

        Returns:
            The package key, or None when the file or package was filtered out.

        Raises:
            UnresolvedPackagePath: If the file's directory has no import path.
            DuplicateUnit: If path is already registered under the key.
        """
        directory, filename = os.path.split(path)
        if filename.endswith(".go") and not self._accept(filename):
            logger.debug("skipping filtered file %s", path)
            return None

        import_path = resolve_import_path(directory, self.roots)

        if not self._accept(unit.name):
            logger.debug("skipping filtered package %s in %s", unit.name, path)
            return None

        key = package_key(import_path, unit.name)
        if not filename:
            path = self.registry.synthetic_path(key, directory)
        self.registry.register(key, path, unit)
        return key

    def parse(self, path: str, source: Source = None) -> Optional[str]:
        """
        Parse one file with the parser adapter and register it.

        Args:
            path: File path, or an import path resolvable through the roots
            source: Raw source; None lets the parser read path itself

        Returns:
            The package key, or None when filtered out.

        Raises:
            ParseError: Propagated unchanged from the parser.
            UnresolvedPackagePath, DuplicateUnit: See add().
        """
        path = abs_path(path, self.roots)
        unit = self.parser(path, source)
        unit_path = unit.path or path
        if not os.path.isabs(unit_path):
            unit_path = os.path.join(os.path.dirname(path), unit_path)
        return self.add(unit_path, unit)

    def add_many(
        self, items: Iterable[Tuple[str, Source]]
    ) -> Tuple[List[str], Dict[str, Exception]]:
        """
        Parse and register several files, one failure not stopping the rest.

        Returns:
            (sorted distinct package keys, mapping of path to error)
        """
        keys = set()
        errors: Dict[str, Exception] = {}
        for path, source in items:
            try:
                key = self.parse(path, source)
            except (DocuError, OSError) as e:
                logger.warning("failed to add %s: %s", path, e)
                errors[path] = e
                continue
            if key is not None:
                keys.add(key)
        return sorted(keys), errors

    def keys(self) -> List[str]:
        return self.registry.keys()

    def package(self, key: str) -> Optional[PackageUnit]:
        return self.registry.lookup(key)

    def normal_lang(self, key: str) -> str:
        """Language tag of key when it is a canonical single-file package, else ""."""
        return self.registry.normal_lang(key)

    def merge(self, key: str) -> Optional[MergedUnit]:
        """Merge the files of key; None for an unknown key."""
        return merge_package(self.registry.lookup(key))

    def exported(self, key: str) -> Optional[MergedUnit]:
        """Merge key and prune it to exported declarations; None if nothing survives."""
        merged = self.merge(key)
        if not exported_merged_filter(merged):
            return None
        return merged

    def literals(self, key: str) -> List[str]:
        """One-line signatures of the exported declarations of key."""
        merged = self.exported(key)
        if merged is None:
            return []
        return unit_literals(merged.unit)
