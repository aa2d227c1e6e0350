"""
Name filters applied while registering files.

A filter receives either a file base name (with the ".go" suffix) or a
declared package name (without it) and returns whether to keep it.
Rejected files and packages are skipped, not reported as errors.
"""

from typing import Callable

NameFilter = Callable[[str], bool]


def show_test_filter(name: str) -> bool:
    """
    Accept source files including "_test.go" files, and any package name.

    Files starting with "_" or "." are rejected.
    """
    if not name:
        return False
    if not name.endswith(".go"):
        return True
    return name[0] != "_" and name[0] != "."


def default_filter(name: str) -> bool:
    """Like show_test_filter, but rejects "_test.go" files and "*_test" packages."""
    if not show_test_filter(name):
        return False
    if name.endswith(".go"):
        return not name.endswith("_test.go")
    return not name.endswith("_test")
