"""
Registry of compilation units, keyed by package key.

A package key is the import path of a directory, suffixed with a variant
tag when the directory holds more than one logical package:

    example.com/geo            library package
    example.com/geo::main      executable package in the same directory
    example.com/geo::test      external test package ("test" or "*_test")

The registry is the only mutable state of Docu. It is not safe for
concurrent writers to the same key; callers serialize registration per key.
"""

import logging
import os
from typing import Dict, List, Optional

from docu.errors import DuplicateUnit
from docu.model import CompilationUnit, PackageUnit
from docu.style import is_normal_name, normal_lang

logger = logging.getLogger(__name__)

MAIN_TAG = "main"
TEST_TAG = "test"


def package_key(import_path: str, package_name: str) -> str:
    """Return the package key of a file declaring package_name in import_path."""
    if package_name == "main":
        return import_path + "::" + MAIN_TAG
    if package_name == "test" or package_name.endswith("_test"):
        return import_path + "::" + TEST_TAG
    return import_path


class Registry:
    """Keyed store of the compilation units registered so far."""

    def __init__(self):
        self._packages: Dict[str, PackageUnit] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._packages

    def __len__(self) -> int:
        return len(self._packages)

    def keys(self) -> List[str]:
        """Return all package keys, sorted."""
        return sorted(self._packages)

    def register(self, key: str, path: str, unit: CompilationUnit) -> PackageUnit:
        """
        Store unit under key.

        Args:
            key: Package key
            path: Absolute source path of the file
            unit: Parsed compilation unit

        Returns:
            The package unit the file was added to

        Raises:
            DuplicateUnit: If path is already registered under key.
                Prior state is left untouched.
        """
        pkg = self._packages.get(key)
        if pkg is not None and path in pkg.files:
            raise DuplicateUnit(key, path)

        if pkg is None:
            pkg = PackageUnit(name=unit.name)
            self._packages[key] = pkg
        pkg.files[path] = unit
        logger.debug("registered %s under %s (%d files)", path, key, len(pkg.files))
        return pkg

    def lookup(self, key: str) -> Optional[PackageUnit]:
        """Return the package unit for key, or None."""
        return self._packages.get(key)

    def synthetic_path(self, key: str, directory: str) -> str:
        """Return a file name for a unit registered without one."""
        pkg = self._packages.get(key)
        count = len(pkg.files) if pkg is not None else 0
        return os.path.join(directory, f"_{count}.go")

    def normal_lang(self, key: str) -> str:
        """
        Return the language tag of a canonical single-file package.

        Returns "" when key is unknown, holds more than one file,
        or its file name does not follow the canonical convention (see
        docu.style.is_normal_name, which also requires a ".go" name).
        """
        pkg = self._packages.get(key)
        if pkg is None or len(pkg.files) != 1:
            return ""
        path = next(iter(pkg.files))
        if not is_normal_name(path):
            return ""
        return normal_lang(path)
